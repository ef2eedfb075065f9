"""Process-local record and profile store.

Used when no database is configured, for example in a single serverless
instance or a local run. Data lives only as long as the process.
"""

import threading
from dataclasses import dataclass, field

from nutrition_advisor.domain.nutrition import NutritionItem, PersistedRecord
from nutrition_advisor.domain.profile import UserProfile
from nutrition_advisor.services.dates import day_of
from nutrition_advisor.services.profile import ProfileRepository
from nutrition_advisor.services.records import RecordRepository


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """Append-only list of records with monotonic ids."""

    records: list[PersistedRecord] = field(default_factory=list)
    next_id: int = 1
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def insert_record(self, item: NutritionItem, created_at: str) -> int:
        with self._lock:
            record_id = self.next_id
            self.next_id += 1
            self.records.append(
                PersistedRecord(id=record_id, created_at=created_at, item=item)
            )
        return record_id

    def list_by_date(self, day: str) -> list[PersistedRecord]:
        rows = [row for row in self._snapshot() if day_of(row.created_at) == day]
        return sorted(rows, key=lambda row: row.created_at, reverse=True)

    def list_range(self, start: str, end: str) -> list[PersistedRecord]:
        rows = [
            row for row in self._snapshot() if start <= day_of(row.created_at) <= end
        ]
        return sorted(rows, key=lambda row: row.created_at)

    def _snapshot(self) -> list[PersistedRecord]:
        with self._lock:
            return list(self.records)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """Holds the single profile row."""

    profile: UserProfile | None = None

    def get_profile(self) -> UserProfile:
        return self.profile or UserProfile()

    def upsert_profile(self, profile: UserProfile) -> None:
        self.profile = profile
