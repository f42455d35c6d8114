"""
Two-tier access control: administrators and everyone else.
"""

import threading
from typing import Dict, Iterable, List

from ..core.exceptions import InvalidPrincipalError, NotAuthorizedError


class AccessControl:
    """Membership map from principal to administrator flag."""

    def __init__(self, administrators: Iterable[str] = ()):
        self._administrators: Dict[str, bool] = {}
        self._lock = threading.RLock()
        # Bootstrap admins come from the host at deployment
        for principal in administrators:
            self._administrators[principal] = True

    def is_administrator(self, principal: str) -> bool:
        """True iff the principal is registered with a True flag."""
        with self._lock:
            return self._administrators.get(principal, False)

    def require_administrator(self, principal: str) -> None:
        if not self.is_administrator(principal):
            raise NotAuthorizedError(f"Principal {principal!r} is not an administrator",
                                     details={'principal': principal})

    @staticmethod
    def validate_principal(caller: str, new_admin: str) -> None:
        """Reject an empty principal or a caller naming itself.

        Only exact self-reference is rejected; any administrator may grant
        rights to any other identity.
        """
        if not isinstance(new_admin, str) or not new_admin:
            raise InvalidPrincipalError("Principal must be a non-empty identity")
        if new_admin == caller:
            raise InvalidPrincipalError("An administrator cannot add itself",
                                        details={'principal': new_admin})

    def grant(self, principal: str) -> None:
        """Set the administrator flag. Idempotent."""
        with self._lock:
            self._administrators[principal] = True

    def administrators(self) -> List[str]:
        with self._lock:
            return sorted(p for p, flag in self._administrators.items() if flag)
