"""
Services module: access control, audit log, locking and the record service.
"""

from .access_control import AccessControl
from .audit_log import AuditLog
from .concurrency_manager import ConcurrencyManager, LockType
from .record_service import OperationResult, RecordService

__all__ = [
    "AccessControl",
    "AuditLog",
    "ConcurrencyManager",
    "LockType",
    "OperationResult",
    "RecordService",
]
