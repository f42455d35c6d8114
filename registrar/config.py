"""
Configuration for the registrar platform.

Settings come from an optional JSON file, then environment overrides.
"""

import json
import os
from typing import List, Optional

from pydantic import BaseModel, Field


class RegistrarSettings(BaseModel):
    """Deployment settings."""
    admins: List[str] = Field(default_factory=list)
    rest_host: str = "0.0.0.0"
    rest_port: int = Field(8000, ge=1, le=65535)
    log_level: str = "INFO"
    clock_start: int = Field(0, ge=0)


def load_settings(path: Optional[str] = None) -> RegistrarSettings:
    """Load settings from a JSON file and the environment.

    ``REGISTRAR_ADMINS`` (comma separated) is added to the seeded
    administrators; ``REGISTRAR_LOG_LEVEL`` replaces the log level.
    """
    data = {}
    if path:
        with open(path, 'r', encoding="utf-8") as f:
            data = json.load(f)

    settings = RegistrarSettings(**data)

    env_admins = os.environ.get("REGISTRAR_ADMINS")
    if env_admins:
        extra = [admin.strip() for admin in env_admins.split(",") if admin.strip()]
        settings.admins = settings.admins + [a for a in extra if a not in settings.admins]

    env_level = os.environ.get("REGISTRAR_LOG_LEVEL")
    if env_level:
        settings.log_level = env_level.upper()

    return settings
