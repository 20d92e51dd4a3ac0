"""Database-aware helpers for SQL column defaults."""

from datetime import datetime, timezone

from sqlalchemy.sql import text


def timestamp_default():
    """Return a server-side timestamp default portable across dialects."""
    return text("CURRENT_TIMESTAMP")


def utcnow() -> datetime:
    """Timezone-aware "now" for client-side timestamps (onupdate, code file saves)."""
    return datetime.now(timezone.utc)


__all__ = ["timestamp_default", "utcnow"]
