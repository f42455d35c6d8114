"""
Append-only audit log of successful mutating operations.
"""

import threading
from typing import Dict, Optional, Tuple

from ..core.context import CallContext
from ..core.entities import AuditEntry
from ..core.enums import AuditAction


class AuditLog:
    """Owns the transaction-id counter and the entries it has issued.

    The counter starts at 0 and advances by exactly one per append, so
    transaction ids are dense and never reused. There is no way to edit or
    remove an entry.
    """

    def __init__(self):
        self._entries: Dict[int, AuditEntry] = {}
        self._next_transaction_id = 0
        self._lock = threading.Lock()

    @property
    def next_transaction_id(self) -> int:
        with self._lock:
            return self._next_transaction_id

    def append(self, ctx: CallContext, action: AuditAction, details: str) -> AuditEntry:
        """Record one action and return its entry."""
        with self._lock:
            entry = AuditEntry(
                transaction_id=self._next_transaction_id,
                timestamp=ctx.timestamp,
                action=action,
                principal=ctx.caller,
                details=details,
            )
            self._entries[entry.transaction_id] = entry
            self._next_transaction_id += 1
            return entry

    def get_entry(self, transaction_id: int) -> Optional[AuditEntry]:
        """Get an entry by transaction id; None when absent."""
        with self._lock:
            return self._entries.get(transaction_id)

    def entries(self) -> Tuple[AuditEntry, ...]:
        """Get every entry in transaction-id order."""
        with self._lock:
            return tuple(self._entries[tx_id] for tx_id in sorted(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
