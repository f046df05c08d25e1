"""
Attendance store — owns the session's dataset and its round-trip to a
storage medium.

The whole dataset lives under one key as a JSON blob:

    {"u1": {"2025-05-28": {"startTime": "09:00", "finishTime": null,
                           "punchedIn": true}}}

A blob that does not decode to that shape is logged and replaced by an
empty dataset; availability wins over strict validation. ``save`` always
overwrites the full blob, so two sessions sharing a medium race on a
last-writer-wins basis.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from timeclock.core.config import settings
from timeclock.schemas.attendance import AttendanceDataset, DailyRecord, dataset_adapter
from timeclock.storage.backends import StorageMedium

logger = logging.getLogger(__name__)


class AttendanceStore:
    def __init__(self, storage: StorageMedium, key: str | None = None) -> None:
        self.storage = storage
        self.key = key or settings.STORAGE_KEY
        self.dataset: AttendanceDataset = {}

    def load(self) -> AttendanceDataset:
        """Hydrate from storage. Never raises on bad data."""
        raw = self.storage.get(self.key)
        if raw is None:
            self.dataset = {}
            return self.dataset

        try:
            self.dataset = dataset_adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(
                "Failed to parse %s from storage, starting empty: %s",
                self.key,
                e.errors(include_url=False)[:3],
            )
            self.dataset = {}
        return self.dataset

    def save(self, dataset: AttendanceDataset | None = None) -> None:
        if dataset is not None:
            self.dataset = dataset
        payload = {
            user_id: {day: record.to_storage() for day, record in days.items()}
            for user_id, days in self.dataset.items()
        }
        self.storage.set(self.key, json.dumps(payload, ensure_ascii=False))

    def get_record(self, user_id: str, date_key: str) -> DailyRecord | None:
        return self.dataset.get(user_id, {}).get(date_key)

    def get_or_create_record(self, user_id: str, date_key: str) -> DailyRecord:
        """Existing record, or a fresh unpunched one inserted in memory only."""
        days = self.dataset.setdefault(user_id, {})
        record = days.get(date_key)
        if record is None:
            record = DailyRecord()
            days[date_key] = record
        return record

    def records_for(self, user_id: str) -> dict[str, DailyRecord]:
        return dict(self.dataset.get(user_id, {}))
