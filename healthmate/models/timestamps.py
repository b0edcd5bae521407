"""Timestamp columns: timezone-aware UTC values in DateTime(timezone=True) columns."""
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def created_at_field(nullable: bool = False):
    return Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=nullable)
