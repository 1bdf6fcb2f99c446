# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Analytics Aggregator — dashboard counts, source breakdown, timeline.
Read-only: every call issues the same queries and never writes.
"""

from collections import Counter
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy.exc import SQLAlchemyError

from launchlist.core.clock import Clock, utc_now
from launchlist.core.errors import StoreUnavailable
from launchlist.core.logging import get_logger
from launchlist.metrics import DASHBOARD_BUILD
from launchlist.models.domain import (
    DIRECT_SOURCE_LABEL,
    DashboardSnapshot,
    RecentSignup,
    SourceCount,
    TimelinePoint,
)
from launchlist.repositories import SignupRepository

logger = get_logger(__name__)

WEEK = timedelta(days=7)


def resolve_timezone(name: str) -> tzinfo:
    if not name or name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def source_label(source: Optional[str]) -> str:
    if source is None or not source.strip():
        return DIRECT_SOURCE_LABEL
    return source


def merge_sources(groups: list[tuple[Optional[str], int]]) -> list[SourceCount]:
    """Fold NULL/blank sources into the Direct bucket, biggest bucket first."""
    totals: Counter = Counter()
    for source, count in groups:
        totals[source_label(source)] += count
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [SourceCount(source=label, count=count) for label, count in ordered]


def build_timeline(created: list[datetime], days: list[date], tz: tzinfo) -> list[TimelinePoint]:
    """One point per day in ``days``, zero-filled, in the order given."""
    per_day = Counter(ts.astimezone(tz).date() for ts in created)
    return [TimelinePoint(date=day, count=per_day.get(day, 0)) for day in days]


class AnalyticsService:
    """Builds the admin dashboard snapshot from the signup log."""

    def __init__(
        self,
        signup_repo: SignupRepository,
        report_timezone: str = "UTC",
        max_trailing_days: int = 365,
        recent_limit: int = 10,
        clock: Clock = utc_now,
    ):
        self._repo = signup_repo
        self._tz = resolve_timezone(report_timezone)
        self._max_days = max_trailing_days
        self._recent_limit = recent_limit
        self._clock = clock

    def _start_of_day(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self._tz).astimezone(timezone.utc)

    def compute_dashboard(self, trailing_days: int = 30) -> DashboardSnapshot:
        """
        Compute total / today / this week, the per-source breakdown and a
        ``trailing_days``-long daily timeline ending today.
        Raises ValueError for an out-of-range window, StoreUnavailable when
        the database cannot be queried.
        """
        if not 1 <= trailing_days <= self._max_days:
            raise ValueError(f"trailing_days must be between 1 and {self._max_days}")

        with DASHBOARD_BUILD.time():
            now = self._clock()
            today = now.astimezone(self._tz).date()
            days = [today - timedelta(days=offset) for offset in range(trailing_days - 1, -1, -1)]

            try:
                total = self._repo.count_all()
                today_count = self._repo.count_since(self._start_of_day(today))
                week_count = self._repo.count_since(now - WEEK)
                groups = self._repo.count_by_source()
                created = self._repo.list_created_since(self._start_of_day(days[0]))
                recent = self._repo.list_recent(self._recent_limit)
            except SQLAlchemyError as exc:
                logger.error("Dashboard queries failed", exc_info=True)
                raise StoreUnavailable() from exc

        snapshot = DashboardSnapshot(
            total=total,
            today=today_count,
            this_week=week_count,
            by_source=merge_sources(groups),
            timeline=build_timeline(created, days, self._tz),
            recent=[
                RecentSignup(email=r.email, source=r.source,
                             referrer=r.referrer, created_at=r.created_at)
                for r in recent
            ],
            generated_at=now,
        )
        logger.info("Dashboard computed total=%s days=%s", total, trailing_days)
        return snapshot
