from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Normalize to an aware UTC datetime. Naive values are taken to be UTC already (SQLite returns them naive)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
