"""Schedule query helpers: filtering, ordering and upcoming sessions.

Everything here is a pure function of the session list, the filter state and
a caller-supplied ``now``.  The store and the UI hand in already-fetched
:class:`~src.models.Session` objects; nothing is read or written.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from src.models import PRACTICAL, SESSION_TYPES, THEORY, Session

FUTURE = "future"
PAST = "past"
ALL = "all"
TIME_FILTERS = (FUTURE, PAST, ALL)
TYPE_FILTERS = (ALL,) + SESSION_TYPES

TIME_FILTER_LABELS = {FUTURE: "Будущие", PAST: "Прошедшие", ALL: "Все"}
TYPE_FILTER_LABELS = {ALL: "Все типы", THEORY: "Теория", PRACTICAL: "Практика"}

SEMESTER_HEADER = "Второй семестр"
# Month/day of the first session after the winter break.
SEMESTER_START = (2, 5)


def _check_filters(time_filter: str, type_filter: str) -> None:
    if time_filter not in TIME_FILTERS:
        raise ValueError(f"Unknown time filter: {time_filter!r}")
    if type_filter not in TYPE_FILTERS:
        raise ValueError(f"Unknown type filter: {type_filter!r}")


def matches_filters(
    session: Session, time_filter: str, type_filter: str, now: datetime
) -> bool:
    """Return ``True`` if ``session`` passes both the time and type filter."""
    if time_filter == FUTURE and not session.date_start >= now:
        return False
    if time_filter == PAST and not session.date_start < now:
        return False
    if type_filter != ALL and session.type != type_filter:
        return False
    return True


def query_and_sort(
    sessions: Iterable[Session],
    time_filter: str,
    type_filter: str,
    now: datetime,
) -> List[Session]:
    """Return the sessions to display, in display order.

    Past sessions are listed most recent first; ``future`` and ``all`` are
    listed chronologically.  ``sorted`` is stable, so sessions sharing a
    start time keep their relative input order.
    """
    _check_filters(time_filter, type_filter)
    selected = [s for s in sessions if matches_filters(s, time_filter, type_filter, now)]
    return sorted(
        selected,
        key=lambda s: s.date_start,
        reverse=time_filter == PAST,
    )


def upcoming_session(
    sessions: Iterable[Session], session_type: str, now: datetime
) -> Optional[Session]:
    """Return the soonest session of ``session_type`` starting at or after ``now``."""
    candidates = [
        s for s in sessions if s.type == session_type and s.date_start >= now
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda s: s.date_start)


def upcoming_sessions(
    sessions: Sequence[Session], now: datetime
) -> Tuple[Optional[Session], Optional[Session]]:
    """Return ``(theory, practical)`` upcoming sessions from the full list."""
    return (
        upcoming_session(sessions, THEORY, now),
        upcoming_session(sessions, PRACTICAL, now),
    )


def show_semester_header(ordered: Sequence[Session], time_filter: str) -> bool:
    """Return ``True`` if the list should open with the semester header.

    Only the first displayed session is checked, and only for chronological
    (non-past) listings.
    """
    if time_filter == PAST or not ordered:
        return False
    first = ordered[0].date_start
    return (first.month, first.day) == SEMESTER_START


__all__ = [
    "FUTURE",
    "PAST",
    "ALL",
    "TIME_FILTERS",
    "TYPE_FILTERS",
    "TIME_FILTER_LABELS",
    "TYPE_FILTER_LABELS",
    "SEMESTER_HEADER",
    "matches_filters",
    "query_and_sort",
    "upcoming_session",
    "upcoming_sessions",
    "show_semester_header",
]
