from datetime import datetime, timezone

import pytest

from src import store
from src.models import Link


class DummySnap:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return self._data


class DummyRef:
    def __init__(self, doc_id, log):
        self.id = doc_id
        self.log = log

    def set(self, payload):
        self.log.append(("set", self.id, payload))

    def update(self, payload):
        self.log.append(("update", self.id, payload))

    def delete(self):
        self.log.append(("delete", self.id, None))


class DummyQuery:
    def __init__(self, snaps, log):
        self.snaps = snaps
        self.log = log

    def order_by(self, field, *args, **kwargs):
        self.log.append(("order_by", field, None))
        return self

    def where(self, *args, filter=None, **kwargs):
        self.log.append(("where", (filter.field_path, filter.op_string, filter.value), None))
        return DummyQuery(
            [s for s in self.snaps if s.to_dict().get(filter.field_path) == filter.value],
            self.log,
        )

    def stream(self):
        return list(self.snaps)


class DummyCollection(DummyQuery):
    def document(self, doc_id=None):
        return DummyRef(doc_id or "new-id", self.log)


class DummyDB:
    def __init__(self, snaps=()):
        self.log = []
        self.snaps = list(snaps)
        self.collections = []

    def collection(self, name):
        self.collections.append(name)
        return DummyCollection(self.snaps, self.log)


@pytest.fixture
def sentinel(monkeypatch):
    marker = object()
    monkeypatch.setattr(store.firestore, "SERVER_TIMESTAMP", marker, raising=False)
    return marker


def test_fetch_sessions_orders_by_start_and_builds_models(monkeypatch):
    dummy = DummyDB(
        [
            DummySnap("a", {"title": "A", "type": "theory", "date_start": "2024-03-10T10:00:00Z"}),
            DummySnap("b", {"title": "B", "type": "practical", "date_start": "2024-03-11T10:00:00Z"}),
        ]
    )
    monkeypatch.setattr(store, "db", dummy)
    sessions = store.fetch_sessions()
    assert [s.id for s in sessions] == ["a", "b"]
    assert dummy.collections == ["sessions"]
    assert ("order_by", "date_start", None) in dummy.log


def test_save_session_insert_stamps_both_timestamps(monkeypatch, sentinel):
    dummy = DummyDB()
    monkeypatch.setattr(store, "db", dummy)
    doc_id = store.save_session({"title": "X"})
    assert doc_id == "new-id"
    op, _, payload = dummy.log[-1]
    assert op == "set"
    assert payload["created_at"] is sentinel
    assert payload["updated_at"] is sentinel


def test_save_session_update_keeps_created_at(monkeypatch, sentinel):
    dummy = DummyDB()
    monkeypatch.setattr(store, "db", dummy)
    assert store.save_session({"title": "X"}, "s1") == "s1"
    op, doc_id, payload = dummy.log[-1]
    assert (op, doc_id) == ("update", "s1")
    assert "created_at" not in payload
    assert payload["updated_at"] is sentinel


def test_delete_session_and_link(monkeypatch):
    dummy = DummyDB()
    monkeypatch.setattr(store, "db", dummy)
    store.delete_session("s1")
    store.delete_link("l1")
    assert dummy.log == [("delete", "s1", None), ("delete", "l1", None)]
    assert dummy.collections == ["sessions", "links"]


def test_fetch_links_filters_by_category_and_sorts(monkeypatch):
    dummy = DummyDB(
        [
            DummySnap("m2", {"title": "M2", "url": "https://2", "category": "materials", "order_index": 1,
                             "created_at": datetime(2024, 1, 2, tzinfo=timezone.utc)}),
            DummySnap("i1", {"title": "I1", "url": "https://i", "category": "important", "order_index": 0}),
            DummySnap("m1", {"title": "M1", "url": "https://1", "category": "materials", "order_index": 1,
                             "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc)}),
            DummySnap("m0", {"title": "M0", "url": "https://0", "category": "materials", "order_index": 0}),
        ]
    )
    monkeypatch.setattr(store, "db", dummy)
    links = store.fetch_links("materials")
    assert [link.id for link in links] == ["m0", "m1", "m2"]
    assert ("where", ("category", "==", "materials"), None) in dummy.log


def test_fetch_links_rejects_unknown_category(monkeypatch):
    monkeypatch.setattr(store, "db", DummyDB())
    with pytest.raises(ValueError):
        store.fetch_links("videos")


def test_sort_links_keeps_store_order_for_full_ties():
    links = [
        Link(id="b", title="B", url="u", category="important", order_index=2),
        Link(id="a", title="A", url="u", category="important", order_index=2),
        Link(id="c", title="C", url="u", category="important", order_index=1),
    ]
    assert [link.id for link in store.sort_links(links)] == ["c", "b", "a"]


def test_store_errors_propagate(monkeypatch):
    class FailingDB:
        def collection(self, name):
            raise RuntimeError("unavailable")

    monkeypatch.setattr(store, "db", FailingDB())
    with pytest.raises(RuntimeError):
        store.fetch_sessions()


def test_fetch_sessions_skips_unknown_types(monkeypatch, caplog):
    dummy = DummyDB(
        [
            DummySnap("a", {"title": "A", "type": "theory", "date_start": "2024-03-10T10:00:00Z"}),
            DummySnap("w", {"title": "W", "type": "workshop", "date_start": "2024-03-11T10:00:00Z"}),
        ]
    )
    monkeypatch.setattr(store, "db", dummy)
    with caplog.at_level("WARNING"):
        sessions = store.fetch_sessions()
    assert [s.id for s in sessions] == ["a"]
    assert "Skipping session w" in caplog.text
