"""Firestore access for sessions and links.

Reads return fresh model objects every time; callers keep them in
``st.session_state`` and refetch the whole collection after each mutation
instead of patching their cached copy.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from firebase_admin import firestore
from google.cloud.firestore_v1 import FieldFilter

from src.config import LINKS_COLLECTION, SESSIONS_COLLECTION
from src.models import LINK_CATEGORIES, SESSION_TYPES, Link, Session

try:  # Firestore may be unavailable in tests
    from raspisanie.db import get_db
except Exception:  # pragma: no cover - missing firebase credentials
    def get_db():  # type: ignore
        return None

logger = logging.getLogger(__name__)

db = None  # type: ignore


def _get_db():
    client = db if db is not None else get_db()
    if client is None:
        raise RuntimeError("Firestore client is not configured")
    return client


def _stamp(payload: Dict[str, Any], *, created: bool) -> Dict[str, Any]:
    data = dict(payload)
    data["updated_at"] = firestore.SERVER_TIMESTAMP
    if created:
        data["created_at"] = firestore.SERVER_TIMESTAMP
    return data


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


def fetch_sessions(tz: Optional[tzinfo] = None) -> List[Session]:
    """Return every session ordered by ``date_start`` ascending."""
    query = _get_db().collection(SESSIONS_COLLECTION).order_by("date_start")
    sessions = []
    for snap in query.stream():
        session = Session.from_record(snap.id, snap.to_dict() or {}, tz)
        if session.type not in SESSION_TYPES:
            logger.warning("Skipping session %s with unknown type %r", snap.id, session.type)
            continue
        sessions.append(session)
    return sessions


def save_session(payload: Dict[str, Any], session_id: Optional[str] = None) -> str:
    """Insert a new session or update ``session_id``; return the document id."""
    collection = _get_db().collection(SESSIONS_COLLECTION)
    if session_id:
        collection.document(session_id).update(_stamp(payload, created=False))
        logger.info("Updated session %s", session_id)
        return session_id
    ref = collection.document()
    ref.set(_stamp(payload, created=True))
    logger.info("Created session %s", ref.id)
    return ref.id


def delete_session(session_id: str) -> None:
    _get_db().collection(SESSIONS_COLLECTION).document(session_id).delete()
    logger.info("Deleted session %s", session_id)


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def sort_links(links: Iterable[Link]) -> List[Link]:
    """Order links by ``order_index``; ties keep insertion order."""
    by_insertion = sorted(links, key=lambda link: link.created_at or _EPOCH)
    return sorted(by_insertion, key=lambda link: link.order_index)


def fetch_links(category: str) -> List[Link]:
    """Return the links of ``category`` in display order."""
    if category not in LINK_CATEGORIES:
        raise ValueError(f"Unknown link category: {category!r}")
    query = _get_db().collection(LINKS_COLLECTION).where(
        filter=FieldFilter("category", "==", category)
    )
    return sort_links(Link.from_record(snap.id, snap.to_dict() or {}) for snap in query.stream())


def save_link(payload: Dict[str, Any], link_id: Optional[str] = None) -> str:
    """Insert a new link or update ``link_id``; return the document id."""
    collection = _get_db().collection(LINKS_COLLECTION)
    if link_id:
        collection.document(link_id).update(_stamp(payload, created=False))
        logger.info("Updated link %s", link_id)
        return link_id
    ref = collection.document()
    ref.set(_stamp(payload, created=True))
    logger.info("Created link %s in %s", ref.id, payload.get("category"))
    return ref.id


def delete_link(link_id: str) -> None:
    _get_db().collection(LINKS_COLLECTION).document(link_id).delete()
    logger.info("Deleted link %s", link_id)


__all__ = [
    "fetch_sessions",
    "save_session",
    "delete_session",
    "sort_links",
    "fetch_links",
    "save_link",
    "delete_link",
]
