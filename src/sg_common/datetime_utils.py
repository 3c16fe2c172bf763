"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now.

    Used for holding snapshot and transaction timestamps, so callers can
    patch this single function to freeze time in tests.
    """
    return datetime.now(timezone.utc)
