"""Record persistence interface and record-level operations."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from nutrition_advisor.domain.errors import InvalidInput
from nutrition_advisor.domain.nutrition import (
    DailySummary,
    NutritionItem,
    PersistedRecord,
)
from nutrition_advisor.services.dates import (
    DateRange,
    build_timestamp_for_date,
    format_local_datetime,
    now_local,
    parse_date_only,
    today,
    week_range,
)
from nutrition_advisor.services.normalization import ItemNormalizer
from nutrition_advisor.services.stats import (
    summary_for_day,
    summary_for_range,
    summary_for_records,
)

_logger = logging.getLogger(__name__)


class RecordRepository(Protocol):
    """Append-only store of nutrition records."""

    def insert_record(self, item: NutritionItem, created_at: str) -> int:
        """Persist an item and return its new id."""

    def list_by_date(self, day: str) -> list[PersistedRecord]:
        """Return records created on day, newest first."""

    def list_range(self, start: str, end: str) -> list[PersistedRecord]:
        """Return records created between start and end inclusive."""


@dataclass
class RecordService:
    """Saves analyzed items and answers summary queries."""

    repository: RecordRepository
    normalizer: ItemNormalizer

    def insert_records(
        self, items: Iterable[object], record_date: str | None = None
    ) -> list[int]:
        """Normalize and store items, optionally backdated to record_date."""
        created_at = build_timestamp_for_date(record_date) if record_date else None
        if record_date and created_at is None:
            _logger.info("Ignoring invalid record_date=%s", record_date)
        timestamp = created_at or format_local_datetime(now_local())
        ids = [
            self.repository.insert_record(self.normalizer.normalize(raw), timestamp)
            for raw in items
        ]
        _logger.info("Saved records ids=%s created_at=%s", ids, timestamp)
        return ids

    def list_today(self) -> list[PersistedRecord]:
        return self.repository.list_by_date(today())

    def list_by_date(self, day: str) -> list[PersistedRecord]:
        """Return a day's records; day must be YYYY-MM-DD."""
        if parse_date_only(day) is None:
            raise InvalidInput("Invalid date. Expect YYYY-MM-DD.")
        return self.repository.list_by_date(day)

    def summary_today(self) -> DailySummary:
        day = today()
        return summary_for_records(self.repository.list_by_date(day))

    def summary_for_day(self, day: str) -> DailySummary:
        return summary_for_day(self.list_by_date(day), day)

    def summary_for_range(self, start: str, end: str) -> list[DailySummary]:
        """Return per-day summaries for the inclusive range."""
        if parse_date_only(start) is None or parse_date_only(end) is None:
            raise InvalidInput("Invalid date range. Expect YYYY-MM-DD.")
        return summary_for_range(self.repository.list_range(start, end), start, end)

    def week_summaries(
        self, value: str | None = None
    ) -> tuple[DateRange, list[DailySummary]]:
        """Return the week containing value (or today) and its daily summaries."""
        base = parse_date_only(value) or now_local().date()
        week = week_range(base)
        return week, self.summary_for_range(week.start, week.end)
