"""
Concurrency management for ledger mutations.

Mutating operations take WRITE locks on every row key they touch and hold
them until their writes and audit append are done. Queries take READ locks.
Acquisition blocks until the lock is compatible; there are no timeouts and
no background cleanup, since every operation is a bounded-time transition.
"""

import threading
import time
import uuid
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Set

from ..app_logger import get_logger

logger = get_logger("concurrency")


class LockType(Enum):
    """Types of locks available."""
    READ = "read"
    WRITE = "write"


@dataclass
class LockInfo:
    """Information about a held lock."""
    lock_id: str
    resource_id: str
    lock_type: LockType
    holder_id: str
    acquired_at: float


def student_resource(student_id: int) -> str:
    return f"student:{student_id}"


def course_resource(course_id: int) -> str:
    return f"course:{course_id}"


def grade_resource(student_id: int, course_id: int) -> str:
    return f"grade:{student_id}:{course_id}"


def academic_record_resource(student_id: int) -> str:
    return f"record:{student_id}"


ADMINISTRATORS_RESOURCE = "administrators"


class ConcurrencyManager:
    """Per-resource reader/writer locks with blocking acquisition."""

    def __init__(self):
        self._locks: Dict[str, Dict[LockType, Set[str]]] = defaultdict(lambda: defaultdict(set))
        self._lock_holders: Dict[str, LockInfo] = {}
        self._condition = threading.Condition(threading.RLock())

    def acquire_lock(self, resource_id: str, lock_type: LockType, holder_id: str) -> str:
        """Acquire a lock on a resource, waiting until it is compatible."""
        with self._condition:
            if not self._can_acquire_lock(resource_id, lock_type, holder_id):
                logger.debug("Waiting for %s lock on %s (holder %s)",
                             lock_type.value, resource_id, holder_id)
                self._condition.wait_for(
                    lambda: self._can_acquire_lock(resource_id, lock_type, holder_id))

            lock_id = str(uuid.uuid4())
            self._locks[resource_id][lock_type].add(lock_id)
            self._lock_holders[lock_id] = LockInfo(
                lock_id=lock_id,
                resource_id=resource_id,
                lock_type=lock_type,
                holder_id=holder_id,
                acquired_at=time.time()
            )
            return lock_id

    def release_lock(self, lock_id: str) -> bool:
        """Release a lock."""
        with self._condition:
            if lock_id not in self._lock_holders:
                return False

            lock_info = self._lock_holders.pop(lock_id)
            resource_id = lock_info.resource_id
            lock_type = lock_info.lock_type

            self._locks[resource_id][lock_type].discard(lock_id)

            # Clean up empty lock types and resources
            if not self._locks[resource_id][lock_type]:
                del self._locks[resource_id][lock_type]
            if not self._locks[resource_id]:
                del self._locks[resource_id]

            self._condition.notify_all()
            return True

    def _can_acquire_lock(self, resource_id: str, lock_type: LockType,
                          holder_id: str) -> bool:
        """Check if a lock can be acquired."""
        if resource_id not in self._locks:
            return True
        existing_locks = self._locks[resource_id]

        # Locks held by other holders are the only possible conflicts
        others = set()
        for locks in existing_locks.values():
            for lock_id in locks:
                lock_info = self._lock_holders[lock_id]
                if lock_info.holder_id != holder_id:
                    others.add(lock_info.lock_type)
        if not others:
            return True

        if lock_type == LockType.READ:
            return LockType.WRITE not in others
        return False

    @contextmanager
    def lock(self, resource_id: str, lock_type: LockType, holder_id: str) -> Iterator[str]:
        """Context manager for acquiring and releasing one lock."""
        lock_id = None
        try:
            lock_id = self.acquire_lock(resource_id, lock_type, holder_id)
            yield lock_id
        finally:
            if lock_id:
                self.release_lock(lock_id)

    @contextmanager
    def lock_many(self, requests: Mapping[str, LockType],
                  holder_id: str) -> Iterator[List[str]]:
        """Lock several resources, always in sorted order so that two
        operations touching overlapping rows cannot deadlock."""
        lock_ids: List[str] = []
        try:
            for resource_id in sorted(requests):
                lock_ids.append(self.acquire_lock(resource_id, requests[resource_id], holder_id))
            yield lock_ids
        finally:
            for lock_id in reversed(lock_ids):
                self.release_lock(lock_id)

    def get_lock_info(self, resource_id: str) -> List[LockInfo]:
        """Get information about all locks on a resource."""
        with self._condition:
            if resource_id not in self._locks:
                return []
            return [self._lock_holders[lock_id]
                    for lock_ids in self._locks[resource_id].values()
                    for lock_id in lock_ids]

    def get_holder_locks(self, holder_id: str) -> List[LockInfo]:
        """Get all locks held by a specific holder."""
        with self._condition:
            return [lock_info for lock_info in self._lock_holders.values()
                    if lock_info.holder_id == holder_id]
