# expenses_api/models/base.py
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EntityMixin:
    """Identifier and audit timestamps shared by every table."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
