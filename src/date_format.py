"""Russian date and date-range formatting for schedule entries."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from src.models import PRACTICAL, SESSION_TYPES

COMPACT = "compact"
VERBOSE = "verbose"
VERBOSITIES = (COMPACT, VERBOSE)

# Genitive month names, as used after a day number ("10 марта").
MONTHS_LONG = (
    "января",
    "февраля",
    "марта",
    "апреля",
    "мая",
    "июня",
    "июля",
    "августа",
    "сентября",
    "октября",
    "ноября",
    "декабря",
)

MONTHS_SHORT = (
    "янв",
    "фев",
    "мар",
    "апр",
    "мая",
    "июн",
    "июл",
    "авг",
    "сен",
    "окт",
    "ноя",
    "дек",
)


def format_time(value: datetime) -> str:
    return value.strftime("%H:%M")


def format_date(value: datetime, verbosity: str = COMPACT) -> str:
    """Return ``"10 марта"`` (compact) or ``"10 марта 2024 г."`` (verbose)."""
    text = f"{value.day} {MONTHS_LONG[value.month - 1]}"
    if verbosity == VERBOSE:
        text += f" {value.year} г."
    return text


def format_datetime(value: datetime, verbosity: str = COMPACT) -> str:
    """Return ``"10 мар, 10:00"`` (compact) or ``"10 марта 2024 г., 10:00"``."""
    if verbosity == VERBOSE:
        day = format_date(value, VERBOSE)
    else:
        day = f"{value.day} {MONTHS_SHORT[value.month - 1]}"
    return f"{day}, {format_time(value)}"


def format_range(
    start: datetime,
    end: Optional[datetime],
    session_type: str,
    verbosity: str = COMPACT,
) -> str:
    """Return the display string for a session's start/end pair.

    Practicals show dates only and never collapse a same-day range.  Theory
    sessions show times; when both ends fall on the same calendar day the
    date is printed once, followed by the two times.
    """
    if verbosity not in VERBOSITIES:
        raise ValueError(f"Unknown verbosity: {verbosity!r}")
    if session_type not in SESSION_TYPES:
        raise ValueError(f"Unknown session type: {session_type!r}")

    if session_type == PRACTICAL:
        if end is None:
            return format_date(start, verbosity)
        return f"{format_date(start, verbosity)} - {format_date(end, verbosity)}"

    if end is None:
        return format_datetime(start, verbosity)

    if start.date() == end.date():
        return (
            f"{format_date(start, verbosity)}, "
            f"{format_time(start)} - {format_time(end)}"
        )

    return f"{format_datetime(start, verbosity)} - {format_datetime(end, verbosity)}"


__all__ = [
    "COMPACT",
    "VERBOSE",
    "format_time",
    "format_date",
    "format_datetime",
    "format_range",
]
