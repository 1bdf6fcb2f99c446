# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: revoked admin sessions.
In-memory, process-local; entries are dropped once the session would have
expired anyway.
"""

import threading
from datetime import datetime


class RevokedSessionRepository:
    """Session ids invalidated by logout, kept until their natural expiry."""

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def revoke(self, session_id: str, expires_at: datetime) -> None:
        with self._lock:
            self._revoked[session_id] = expires_at

    def is_revoked(self, session_id: str, now: datetime) -> bool:
        with self._lock:
            self._purge(now)
            return session_id in self._revoked

    def count(self) -> int:
        with self._lock:
            return len(self._revoked)

    def _purge(self, now: datetime) -> None:
        expired = [sid for sid, exp in self._revoked.items() if exp <= now]
        for sid in expired:
            del self._revoked[sid]
