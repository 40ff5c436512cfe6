from datetime import datetime, timezone
from typing import Optional


def as_utc(value: datetime) -> datetime:
    # naive timestamps from the store are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _plural(value: int, unit: str) -> str:
    return f"{value} {unit}{'' if value == 1 else 's'}"


def derive_duration(now: datetime, reference: datetime) -> str:
    """Human readable time elapsed since ``reference``.

    Under an hour reads in minutes, under a day in hours, otherwise in days,
    always rounded down. A reference in the future reads as "0 minutes".
    """
    elapsed = max(0.0, (as_utc(now) - as_utc(reference)).total_seconds())
    minutes = int(elapsed // 60)
    hours = int(elapsed // 3600)

    if hours < 1:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    return _plural(hours // 24, "day")


def station_duration(now: datetime, created_at: datetime, entered_at: Optional[datetime] = None) -> str:
    """Time spent at the current station, counted from the last movement into it."""
    return derive_duration(now, entered_at or created_at)
