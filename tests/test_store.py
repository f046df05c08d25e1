"""Tests for the attendance store: load / save / record lookup."""

import json
import logging

import pytest

from timeclock.core.state_machine import punch_in, punch_out
from timeclock.schemas.attendance import DailyRecord
from timeclock.storage.backends import MemoryStorage
from timeclock.storage.store import AttendanceStore

KEY = "userAttendanceData"


def _store_with(blob: str | None) -> AttendanceStore:
    storage = MemoryStorage()
    if blob is not None:
        storage.set(KEY, blob)
    return AttendanceStore(storage, key=KEY)


def test_load_absent_key_gives_empty_dataset():
    assert _store_with(None).load() == {}


def test_round_trip_preserves_dataset():
    store = _store_with(None)
    dataset = {
        "u1": {
            "2025-05-27": DailyRecord(start_time="09:00", finish_time="18:00", punched_in=True),
            "2025-05-28": DailyRecord(start_time="08:55", punched_in=True),
        },
        "u2": {"2025-05-28": DailyRecord()},
    }
    store.save(dataset)

    reloaded = AttendanceStore(store.storage, key=KEY).load()
    assert reloaded == dataset


def test_saved_blob_uses_camel_case_schema():
    store = _store_with(None)
    record = store.get_or_create_record("u1", "2025-05-28")
    punch_in(record, "09:00")
    store.save()

    blob = json.loads(store.storage.get(KEY))
    assert blob == {
        "u1": {"2025-05-28": {"startTime": "09:00", "finishTime": None, "punchedIn": True}}
    }


def test_extra_fields_are_kept_and_ignored():
    blob = json.dumps({
        "u1": {
            "2025-05-28": {
                "startTime": "09:00",
                "finishTime": None,
                "punchedIn": True,
                "userName": "Haruto Sato",
                "department": "Sales",
                "timestamp": "2025-05-28T09:00:12",
            }
        }
    })
    store = _store_with(blob)
    record = store.load()["u1"]["2025-05-28"]
    assert record.start_time == "09:00"
    assert record.model_extra["userName"] == "Haruto Sato"

    store.save()
    assert json.loads(store.storage.get(KEY)) == json.loads(blob)


@pytest.mark.parametrize(
    "blob",
    [
        "not json at all",
        "{",
        "null",
        "[]",
        '"u1"',
        '{"u1": []}',
        '{"u1": {"2025-05-28": "09:00"}}',
        '{"u1": {"2025-05-28": {"startTime": 900, "finishTime": null, "punchedIn": true}}}',
        '{"u1": {"2025-05-28": {"startTime": "09:00", "finishTime": null, "punchedIn": "yes"}}}',
        '{"u1": {"2025-05-28": {"startTime": null, "finishTime": "18:00", "punchedIn": false}}}',
        '{"u1": {"2025-05-28": {"startTime": null, "finishTime": null, "punchedIn": true}}}',
    ],
)
def test_malformed_blob_loads_empty(blob, caplog):
    """Decode failures are logged and replaced with an empty dataset."""
    store = _store_with(blob)
    with caplog.at_level(logging.ERROR, logger="timeclock.storage.store"):
        assert store.load() == {}
    assert store.dataset == {}
    assert "Failed to parse" in caplog.text


def test_punch_out_keeps_other_users_history():
    """Punching one user out and saving must not cost anyone else their records."""
    store = _store_with(json.dumps({
        "u1": {"2025-05-28": {"startTime": "09:00", "finishTime": None, "punchedIn": True}},
        "u2": {"2025-05-27": {"startTime": "08:30", "finishTime": "17:30", "punchedIn": True}},
    }))
    store.load()
    assert punch_out(store.get_record("u1", "2025-05-28"), "18:00") is True
    store.save()

    reloaded = AttendanceStore(store.storage, key=KEY).load()
    assert reloaded["u1"]["2025-05-28"].finish_time == "18:00"
    assert reloaded["u2"]["2025-05-27"].finish_time == "17:30"


def test_get_or_create_record_is_in_memory_until_save():
    store = _store_with(None)
    record = store.get_or_create_record("u1", "2025-05-28")
    assert record == DailyRecord()
    assert store.get_record("u1", "2025-05-28") is record
    assert store.storage.get(KEY) is None

    store.save()
    assert AttendanceStore(store.storage, key=KEY).load() == {"u1": {"2025-05-28": DailyRecord()}}


def test_get_or_create_record_returns_existing():
    store = _store_with(None)
    first = store.get_or_create_record("u1", "2025-05-28")
    punch_in(first, "09:00")
    assert store.get_or_create_record("u1", "2025-05-28").start_time == "09:00"


def test_get_record_is_explicitly_optional():
    store = _store_with(None)
    assert store.get_record("u1", "2025-05-28") is None
    assert store.dataset == {}


def test_save_overwrites_whole_blob():
    store = _store_with('{"ghost": {"2025-01-01": {"startTime": null, "finishTime": null, "punchedIn": false}}}')
    store.save({"u1": {}})
    assert json.loads(store.storage.get(KEY)) == {"u1": {}}


def test_last_writer_wins_across_sessions():
    """Two stores on one medium: the later save replaces the earlier one.

    This race is accepted; the store does not merge on write.
    """
    shared = MemoryStorage()
    tab_a = AttendanceStore(shared, key=KEY)
    tab_b = AttendanceStore(shared, key=KEY)
    tab_a.load()
    tab_b.load()

    punch_in(tab_a.get_or_create_record("u1", "2025-05-28"), "09:00")
    tab_a.save()
    punch_in(tab_b.get_or_create_record("u2", "2025-05-28"), "09:01")
    tab_b.save()

    final = AttendanceStore(shared, key=KEY).load()
    assert "u2" in final
    assert "u1" not in final


def test_records_for_returns_copy():
    store = _store_with(None)
    store.get_or_create_record("u1", "2025-05-28")
    days = store.records_for("u1")
    days.clear()
    assert store.get_record("u1", "2025-05-28") is not None
    assert store.records_for("nobody") == {}
