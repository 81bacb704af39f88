"""Session and link records shared by the store, the schedule and the UI."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone as _timezone, tzinfo
from typing import Any, Dict, Optional

import pandas as pd

THEORY = "theory"
PRACTICAL = "practical"
SESSION_TYPES = (THEORY, PRACTICAL)

TYPE_LABELS = {THEORY: "Теория", PRACTICAL: "Практика"}

IMPORTANT = "important"
MATERIALS = "materials"
LINK_CATEGORIES = (IMPORTANT, MATERIALS)


def parse_timestamp(value: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Convert a Firestore/JSON timestamp payload to an aware ``datetime``.

    Accepts ``datetime`` objects (including Firestore's
    ``DatetimeWithNanoseconds``), protobuf timestamps exposing
    ``to_datetime`` and ISO-8601 strings.  Naive values are taken as UTC.
    When ``tz`` is given the result is converted to it.  Strings that cannot
    be parsed raise ``ValueError``.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt_val = value
    elif hasattr(value, "to_datetime"):
        dt_val = value.to_datetime()
    else:
        dt_val = pd.Timestamp(str(value)).to_pydatetime()

    if dt_val.tzinfo is None:
        dt_val = dt_val.replace(tzinfo=_timezone.utc)
    if tz is not None:
        dt_val = dt_val.astimezone(tz)
    return dt_val


def is_http_url(value: Optional[str]) -> bool:
    """Return ``True`` for ``http://``/``https://`` URLs, the only hrefs we render."""
    return bool(value) and str(value).strip().lower().startswith(("http://", "https://"))


def _optional_text(value: Any) -> Optional[str]:
    text = str(value).strip() if value is not None else ""
    return text or None


@dataclass
class Session:
    """One scheduled class: a theory lecture or a practical."""

    id: str
    title: str
    type: str
    date_start: datetime
    date_end: Optional[datetime] = None
    teachers: str = ""
    folder_link: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(
        cls, doc_id: str, data: Dict[str, Any], tz: Optional[tzinfo] = None
    ) -> "Session":
        start = parse_timestamp(data.get("date_start"), tz)
        if start is None:
            raise ValueError(f"Session {doc_id} has no date_start")
        return cls(
            id=doc_id,
            title=str(data.get("title") or ""),
            type=str(data.get("type") or THEORY),
            date_start=start,
            date_end=parse_timestamp(data.get("date_end"), tz),
            teachers=str(data.get("teachers") or ""),
            folder_link=_optional_text(data.get("folder_link")),
            notes=_optional_text(data.get("notes")),
            created_at=parse_timestamp(data.get("created_at"), tz),
            updated_at=parse_timestamp(data.get("updated_at"), tz),
        )

    def to_record(self) -> Dict[str, Any]:
        """Return the user-editable fields; the store adds timestamps."""
        return {
            "title": self.title,
            "type": self.type,
            "date_start": self.date_start,
            "date_end": self.date_end,
            "teachers": self.teachers,
            "folder_link": self.folder_link,
            "notes": self.notes,
        }


@dataclass
class Link:
    """A titled URL shown on the important-links or materials page."""

    id: str
    title: str
    url: str
    category: str
    order_index: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, doc_id: str, data: Dict[str, Any]) -> "Link":
        return cls(
            id=doc_id,
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            category=str(data.get("category") or IMPORTANT),
            order_index=int(data.get("order_index") or 0),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "category": self.category,
            "order_index": self.order_index,
        }


__all__ = [
    "THEORY",
    "PRACTICAL",
    "SESSION_TYPES",
    "TYPE_LABELS",
    "IMPORTANT",
    "MATERIALS",
    "LINK_CATEGORIES",
    "is_http_url",
    "parse_timestamp",
    "Session",
    "Link",
]
