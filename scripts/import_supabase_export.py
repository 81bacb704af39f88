"""Import ``sessions`` and ``links`` CSV exports from the old hosted database.

Usage::

    python scripts/import_supabase_export.py sessions.csv links.csv

Rows keep their original ids as Firestore document ids so re-running the
import overwrites instead of duplicating.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

import firebase_admin
import pandas as pd
from firebase_admin import firestore

sys.path.append(str(Path(__file__).resolve().parents[1]))
from src.config import LINKS_COLLECTION, SESSIONS_COLLECTION  # noqa: E402
from src.models import parse_timestamp  # noqa: E402

BATCH_LIMIT = 450

SESSION_FIELDS = ("title", "type", "teachers", "folder_link", "notes")
SESSION_DATES = ("date_start", "date_end", "created_at", "updated_at")
LINK_FIELDS = ("title", "url", "category")
LINK_DATES = ("created_at", "updated_at")


def _clean(value: Any) -> Any:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return value


def session_rows(frame: pd.DataFrame) -> Iterator[Tuple[str, Dict[str, Any]]]:
    for row in frame.to_dict(orient="records"):
        data = {key: _clean(row.get(key)) for key in SESSION_FIELDS}
        data["teachers"] = data["teachers"] or ""
        for key in SESSION_DATES:
            data[key] = parse_timestamp(_clean(row.get(key)))
        yield str(row["id"]), data


def link_rows(frame: pd.DataFrame) -> Iterator[Tuple[str, Dict[str, Any]]]:
    for row in frame.to_dict(orient="records"):
        data = {key: _clean(row.get(key)) for key in LINK_FIELDS}
        data["order_index"] = int(_clean(row.get("order_index")) or 0)
        for key in LINK_DATES:
            data[key] = parse_timestamp(_clean(row.get(key)))
        yield str(row["id"]), data


def write_rows(db, collection: str, rows) -> int:
    batch = db.batch()
    ops = 0
    total = 0
    for doc_id, data in rows:
        batch.set(db.collection(collection).document(doc_id), data)
        ops += 1
        total += 1
        if ops >= BATCH_LIMIT:
            batch.commit()
            batch = db.batch()
            ops = 0
    if ops:
        batch.commit()
    return total


def migrate(sessions_csv: str, links_csv: str) -> None:
    firebase_admin.initialize_app()
    db = firestore.client()
    sessions = write_rows(
        db, SESSIONS_COLLECTION, session_rows(pd.read_csv(sessions_csv, dtype={"id": str}))
    )
    links = write_rows(db, LINKS_COLLECTION, link_rows(pd.read_csv(links_csv, dtype={"id": str})))
    print(f"Imported {sessions} sessions and {links} links")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        sys.exit(__doc__)
    migrate(sys.argv[1], sys.argv[2])
