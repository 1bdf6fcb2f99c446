# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import date as calendar_date, datetime
from typing import Optional

from pydantic import BaseModel, Field

DIRECT_SOURCE_LABEL = "Direct"


class SignupRecord(BaseModel):
    """One waitlist entrant, as stored."""
    id: str
    email: str
    source: Optional[str] = None
    referrer: Optional[str] = None
    created_at: datetime


class Confirmation(BaseModel):
    success: bool = True
    message: str
    email: str


class AdminSession(BaseModel):
    """Authenticated admin context. Never persisted in the signup store."""
    principal: str
    session_id: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SourceCount(BaseModel):
    source: str
    count: int


class TimelinePoint(BaseModel):
    date: calendar_date
    count: int


class RecentSignup(BaseModel):
    email: str
    source: Optional[str] = None
    referrer: Optional[str] = None
    created_at: datetime


class DashboardSnapshot(BaseModel):
    total: int
    today: int
    this_week: int
    by_source: list[SourceCount] = Field(default_factory=list)
    timeline: list[TimelinePoint] = Field(default_factory=list)
    recent: list[RecentSignup] = Field(default_factory=list)
    generated_at: datetime
