# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Table definitions for the append-only signup log.
"""

from sqlalchemy import Column, DateTime, Index, MetaData, String, Table

metadata = MetaData()

waitlist_signups = Table(
    "waitlist_signups",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(320), nullable=False, unique=True),
    Column("source", String(100), nullable=True),
    Column("referrer", String(2048), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Index("ix_waitlist_signups_created_at", "created_at"),
    Index("ix_waitlist_signups_source", "source"),
)
