"""
Persistence module holding the keyed record collections.
"""

from .record_store import RecordStore, WriteSet

__all__ = [
    "RecordStore",
    "WriteSet",
]
