# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Signup data access layer — pure CRUD, no business rules.

Uniqueness of ``email`` is enforced by the table constraint; an insert of an
existing address surfaces as ``sqlalchemy.exc.IntegrityError`` for the
service layer to classify.
"""

import threading
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func, insert, select, text
from sqlalchemy.engine import Engine

from launchlist.core.clock import Clock, utc_now
from launchlist.core.logging import get_logger
from launchlist.models.domain import SignupRecord
from launchlist.models.tables import waitlist_signups

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _row_to_record(row) -> SignupRecord:
    return SignupRecord(
        id=row.id,
        email=row.email,
        source=row.source,
        referrer=row.referrer,
        created_at=_as_utc(row.created_at),
    )


class SignupRepository:
    """Handles all direct database operations for waitlist signups."""

    def __init__(self, engine: Engine, clock: Clock = utc_now):
        self._engine = engine
        self._clock = clock
        self._write_lock = threading.Lock()

    # ── Write ──────────────────────────────────────────────────────────

    def insert_signup(self, record_id: str, email: str, source: Optional[str],
                      referrer: Optional[str],
                      created_at: Optional[datetime] = None) -> SignupRecord:
        """
        Append one signup. Without an explicit ``created_at`` the row is
        stamped here, under the write lock, so timestamps follow commit order
        within this process.
        """
        with self._write_lock:
            if created_at is None:
                created_at = self._clock()
            with self._engine.begin() as conn:
                conn.execute(
                    insert(waitlist_signups).values(
                        id=record_id, email=email, source=source,
                        referrer=referrer, created_at=created_at,
                    )
                )
        return SignupRecord(id=record_id, email=email, source=source,
                            referrer=referrer, created_at=created_at)

    # ── Read ───────────────────────────────────────────────────────────

    def count_all(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(
                select(func.count()).select_from(waitlist_signups)
            ).scalar() or 0

    def count_since(self, since: datetime) -> int:
        with self._engine.connect() as conn:
            return conn.execute(
                select(func.count())
                .select_from(waitlist_signups)
                .where(waitlist_signups.c.created_at >= since)
            ).scalar() or 0

    def count_by_source(self) -> List[Tuple[Optional[str], int]]:
        """Raw ``(source, count)`` groups; NULL source comes back as ``None``."""
        source = waitlist_signups.c.source
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(source, func.count().label("n")).group_by(source)
            ).fetchall()
        return [(r[0], int(r[1])) for r in rows]

    def list_created_since(self, since: datetime) -> List[datetime]:
        """``created_at`` of every signup at or after ``since``, oldest first."""
        created_at = waitlist_signups.c.created_at
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(created_at).where(created_at >= since).order_by(created_at)
            ).fetchall()
        return [_as_utc(r[0]) for r in rows]

    def list_recent(self, limit: int) -> List[SignupRecord]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(waitlist_signups)
                .order_by(waitlist_signups.c.created_at.desc(), waitlist_signups.c.id)
                .limit(limit)
            ).fetchall()
        return [_row_to_record(r) for r in rows]

    def get_by_email(self, email: str) -> Optional[SignupRecord]:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(waitlist_signups).where(waitlist_signups.c.email == email)
            ).fetchone()
        return _row_to_record(row) if row else None

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
