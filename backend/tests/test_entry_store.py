from datetime import datetime

from sqlalchemy.exc import OperationalError

from errors import NotFoundError, StorageError, ValidationError
from models import Entry

from conftest import make_entry


def test_create_then_list(store, clock):
    result = store.create(make_entry(content="read a book"))
    assert result.is_ok
    created = result.data
    assert created["id"] is not None
    assert created["created_at"] == created["updated_at"] == clock().isoformat()

    listed = store.list_by_type("activity").data
    assert len(listed) == 1
    assert {k: listed[0][k] for k in ("content", "date", "time", "mood", "type")} == {
        "content": "read a book", "date": "2026-10-21", "time": "09:00",
        "mood": "happy", "type": "activity",
    }


def test_create_stamps_date_and_time_when_missing(store):
    created = store.create({"content": "idea", "type": "thoughts", "mood": "neutral"}).data
    assert created["date"] == "2026-10-21"
    assert created["time"] == "10:30"


def test_invalid_create_persists_nothing(store):
    for payload in (
        make_entry(content="  "),
        make_entry(mood="furious"),
        make_entry(type="dreams"),
    ):
        result = store.create(payload)
        assert not result.is_ok
        assert isinstance(result.error, ValidationError)
        assert result.to_dict()["data"] is None
    assert Entry.query.count() == 0


def test_list_is_newest_first_and_filtered_by_type(store, clock):
    store.create(make_entry(content="first"))
    clock.advance(minutes=5)
    store.create(make_entry(content="second"))
    store.create(make_entry(content="a thought", type="thoughts"))

    contents = [e["content"] for e in store.list_by_type("activity").data]
    assert contents == ["second", "first"]


def test_list_filters_by_mood_and_search(store):
    store.create(make_entry(content="Morning Walk", mood="happy"))
    store.create(make_entry(content="walk in the rain", mood="sad"))
    store.create(make_entry(content="cooking", mood="happy"))

    assert [e["content"] for e in store.list_by_type("activity", mood="sad").data] == ["walk in the rain"]
    assert len(store.list_by_type("activity", search="walk").data) == 2


def test_list_empty_is_success(store):
    result = store.list_by_type("thoughts")
    assert result.to_dict() == {"data": [], "error": None}


def test_list_since_scopes_by_created_at(store, clock):
    clock.current = datetime(2026, 10, 20, 23, 59)
    store.create(make_entry(content="yesterday"))
    clock.current = datetime(2026, 10, 21, 8, 0)
    store.create(make_entry(content="today thought", type="thoughts"))
    clock.advance(hours=1)
    store.create(make_entry(content="today activity"))

    since = datetime(2026, 10, 21)
    both = store.list_by_type_since(("activity", "thoughts"), since).data
    assert [e["content"] for e in both] == ["today activity", "today thought"]
    only = store.list_by_type_since(("activity",), since).data
    assert [e["content"] for e in only] == ["today activity"]


def test_update_mood_refreshes_updated_at_only(store, clock):
    created = store.create(make_entry(mood="sad")).data
    clock.advance(minutes=1)

    updated = store.update(created["id"], {"mood": "happy"}).data
    assert updated["mood"] == "happy"
    assert updated["updated_at"] > created["updated_at"]
    for key in ("id", "content", "date", "time", "type", "created_at"):
        assert updated[key] == created[key]


def test_update_rejects_type_changes(store, clock):
    created = store.create(make_entry()).data
    clock.advance(minutes=1)
    for fields in ({"type": "dreams"}, {"type": "thoughts", "content": "edited"}):
        result = store.update(created["id"], fields)
        assert isinstance(result.error, ValidationError)
        assert str(result.error) == "Entry type cannot be changed"
    assert store.list_by_type("activity").data == [created]


def test_invalid_update_does_not_mutate(store):
    created = store.create(make_entry()).data
    result = store.update(created["id"], {"mood": "ecstatic"})
    assert isinstance(result.error, ValidationError)
    result = store.update(created["id"], {"content": " "})
    assert str(result.error) == "Content cannot be empty"
    assert store.list_by_type("activity").data[0] == created


def test_update_missing_entry(store):
    result = store.update(999, {"mood": "happy"})
    assert isinstance(result.error, NotFoundError)
    assert result.to_dict() == {"data": None, "error": "Entry not found"}


def test_delete_by_id_returns_snapshot(store):
    keep = store.create(make_entry(content="keep")).data
    gone = store.create(make_entry(content="gone")).data

    result = store.delete_by_id(gone["id"])
    assert result.data == gone
    assert [e["id"] for e in store.list_by_type("activity").data] == [keep["id"]]


def test_delete_missing_entry_has_no_side_effect(store):
    store.create(make_entry())
    result = store.delete_by_id(12345)
    assert isinstance(result.error, NotFoundError)
    assert Entry.query.count() == 1


def test_delete_all_by_type(store):
    store.create(make_entry(type="thoughts"))
    store.create(make_entry(type="activity"))

    assert store.delete_all_by_type("thoughts").to_dict() == {"data": True, "error": None}
    assert store.list_by_type("thoughts").data == []
    assert len(store.list_by_type("activity").data) == 1


def test_delete_all_on_empty_type_succeeds(store):
    assert store.delete_all_by_type("thoughts").data is True


def test_storage_failure_becomes_err(store, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store.session, "commit", broken_commit)
    result = store.create(make_entry())
    assert isinstance(result.error, StorageError)
    assert result.to_dict()["data"] is None
    assert "disk I/O error" in result.to_dict()["error"]


def test_search_treats_wildcards_literally(store):
    store.create(make_entry(content="abc"))
    store.create(make_entry(content="50% done"))

    assert store.list_by_type("activity", search="_").data == []
    assert [e["content"] for e in store.list_by_type("activity", search="%").data] == ["50% done"]
    assert [e["content"] for e in store.list_by_type("activity", search="ABC").data] == ["abc"]


def test_unpadded_date_and_time_are_rejected(store):
    result = store.create(make_entry(date="2026-10-1", time="09:05"))
    assert str(result.error) == "Invalid date"
    result = store.create(make_entry(time="9:5"))
    assert str(result.error) == "Invalid time"
    assert Entry.query.count() == 0


def test_delete_all_storage_failure_becomes_err(store, monkeypatch):
    store.create(make_entry(type="thoughts"))

    def broken_commit():
        raise OperationalError("DELETE", {}, Exception("database is locked"))

    monkeypatch.setattr(store.session, "commit", broken_commit)
    result = store.delete_all_by_type("thoughts")
    assert isinstance(result.error, StorageError)
    assert result.to_dict() == {"data": None, "error": "Failed to delete entries"}
    monkeypatch.undo()
    assert len(store.list_by_type("thoughts").data) == 1
