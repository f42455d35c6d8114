"""
Logging setup for the registrar ledger.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = os.getenv("REGISTRAR_LOG_LEVEL", "INFO").upper()


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the ``registrar`` logger once and return it."""
    level_name = (level or _DEFAULT_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger("registrar")
    logger.setLevel(log_level)

    # Avoid duplicate console handlers
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(log_level)

    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    base = logging.getLogger("registrar")
    return base.getChild(name) if name else base
