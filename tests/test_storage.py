"""Tests for the record store."""
import json

from bmi_bot.database import create_session_factory
from bmi_bot.models import Classification, Gender
from bmi_bot.services.storage import KeyValueStorage, RecordStore


def test_empty_store_loads_nothing(store):
    assert store.load_all() == []


def test_add_and_load(store, make_record):
    record = make_record()
    assert store.add(record).ok

    loaded = store.load_all()
    assert loaded == [record]


def test_round_trip_keeps_stored_content(store, make_record):
    store.save_all([make_record(day=1), make_record(name="Luis", day=2)])
    before = store.storage.get_item("imcRecords")

    assert store.save_all(store.load_all()).ok
    assert store.storage.get_item("imcRecords") == before


def test_collection_is_one_json_array(store, make_record):
    record = make_record()
    store.add(record)

    stored = json.loads(store.storage.get_item("imcRecords"))
    assert isinstance(stored, list)
    assert stored[0]["id"] == record.id
    assert stored[0]["imc"] == record.imc
    assert stored[0]["gender"] == "female"


def test_corrupt_content_loads_as_empty(store):
    store.storage.set_item("imcRecords", "{not json")
    assert store.load_all() == []

    store.storage.set_item("imcRecords", json.dumps({"id": "1"}))
    assert store.load_all() == []

    store.storage.set_item("imcRecords", json.dumps([{"id": "1"}]))
    assert store.load_all() == []


def test_legacy_records_without_created_at(store):
    legacy = {
        "id": "1700000000000",
        "name": "Ana",
        "gender": "female",
        "age": 30,
        "weight": 60,
        "height": 165,
        "imc": "22.04",
        "classification": "normal",
        "date": "2023-11-14T22:13:20.000Z",
    }
    store.storage.set_item("imcRecords", json.dumps([legacy]))

    [record] = store.load_all()
    assert record.created_at == 1700000000000
    assert record.bmi_value == 22.04


def test_delete_removes_exactly_one(store, make_record):
    first, second = make_record(day=1), make_record(day=2)
    store.save_all([first, second])

    assert store.delete(first.id).ok
    assert store.load_all() == [second]


def test_delete_unknown_id_is_noop(store, make_record):
    record = make_record()
    store.save_all([record])
    before = store.storage.get_item("imcRecords")

    assert store.delete("missing").ok
    assert store.storage.get_item("imcRecords") == before


def test_clear_removes_everything(store, make_record):
    store.save_all([make_record(day=1), make_record(day=2)])

    assert store.clear().ok
    assert store.load_all() == []
    assert store.storage.get_item("imcRecords") is None


def test_keys_are_independent(session_factory, make_record):
    storage = KeyValueStorage(session_factory)
    first = RecordStore(storage, key="first")
    second = RecordStore(storage, key="second")

    first.add(make_record())
    assert second.load_all() == []
    assert len(first.load_all()) == 1


def test_storage_errors_are_reported(tmp_path, make_record):
    # No tables were created, every query fails
    broken = RecordStore(KeyValueStorage(create_session_factory(f"sqlite:///{tmp_path / 'x.db'}")))

    assert broken.load_all() == []

    result = broken.save_all([make_record()])
    assert not result.ok
    assert result.error

    assert not broken.add(make_record()).ok
    assert not broken.delete("any").ok
    assert not broken.clear().ok


def test_unreadable_entry_is_skipped(store, make_record):
    valid = make_record(name="Ana")
    broken = {"id": "bad", "name": "Luis", "gender": "female"}
    store.storage.set_item("imcRecords", json.dumps([valid.to_dict(), broken]))

    assert store.load_all() == [valid]


def test_add_keeps_entries_around_unreadable_one(store, make_record):
    valid = make_record(name="Ana", day=1)
    broken = {"id": "bad", "name": "Luis", "date": "yesterday", "imc": "n/a"}
    store.storage.set_item("imcRecords", json.dumps([valid.to_dict(), broken]))

    new = make_record(name="Ana", day=2)
    assert store.add(new).ok

    assert store.load_all() == [valid, new]
    stored = json.loads(store.storage.get_item("imcRecords"))
    assert stored[1] == broken


def test_delete_keeps_unreadable_entries(store, make_record):
    first, second = make_record(day=1), make_record(day=2)
    broken = {"id": "bad"}
    store.storage.set_item("imcRecords", json.dumps([first.to_dict(), broken, second.to_dict()]))

    assert store.delete(first.id).ok

    assert store.load_all() == [second]
    assert json.loads(store.storage.get_item("imcRecords"))[0] == broken


def test_entry_with_bad_date_or_bmi_is_skipped(store, make_record):
    valid = make_record()
    bad_date = dict(make_record(day=2).to_dict(), date="not a date")
    bad_imc = dict(make_record(day=3).to_dict(), imc="abc")
    store.storage.set_item("imcRecords", json.dumps([bad_date, valid.to_dict(), bad_imc]))

    assert store.load_all() == [valid]


def test_spanish_labels_load(store):
    stored = {
        "id": "1700000000000",
        "name": "Luis",
        "gender": "Hombre",
        "age": 30,
        "weight": 55,
        "height": 175,
        "imc": "17.96",
        "classification": "Bajo peso",
        "date": "2023-11-14T22:13:20.000Z",
    }
    store.storage.set_item("imcRecords", json.dumps([stored]))

    [record] = store.load_all()
    assert record.gender == Gender.MALE
    assert record.classification == Classification.UNDERWEIGHT
