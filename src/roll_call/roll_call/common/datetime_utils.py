from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def to_iso(value: datetime) -> str:
    """ISO text with microseconds, as sent by the API."""
    return value.isoformat(timespec="microseconds")


def format_day(value: datetime) -> str:
    """dd/mm/yyyy, as shown in exported sheets."""
    return value.strftime("%d/%m/%Y")
