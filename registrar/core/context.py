"""
Host-supplied call context: who is calling, and when.
"""

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class CallContext:
    """Caller identity and logical timestamp for one mutating request."""
    caller: str
    timestamp: int


class LogicalClock:
    """Monotonically increasing logical clock.

    Stands in for the host's block height when the ledger runs without
    one (REST adapter, demo, tests).
    """

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def tick(self) -> int:
        """Advance the clock and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    def context_for(self, caller: str) -> CallContext:
        """Build a call context for the caller at the next tick."""
        return CallContext(caller=caller, timestamp=self.tick())
