"""Presentation helpers for turning stored values into API output."""

from __future__ import annotations

from datetime import datetime, timezone

from personal_crm.core.config import settings


def as_utc(value: datetime) -> datetime:
    """
    Normalize to an aware UTC datetime. Naive values are taken as UTC.

    Raises OverflowError when the UTC value falls outside datetime's range.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str | None:
    """Format with API_TIMESTAMP_FORMAT; ``None`` stays ``None``."""
    if value is None:
        return None
    return as_utc(value).strftime(settings.API_TIMESTAMP_FORMAT)
