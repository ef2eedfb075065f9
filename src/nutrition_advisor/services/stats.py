"""Daily aggregation and calorie goal adherence."""

from collections.abc import Iterable, Mapping

from nutrition_advisor.domain.nutrition import (
    NUTRIENT_FIELDS,
    DailySummary,
    PersistedRecord,
    WeeklyAdherence,
)
from nutrition_advisor.services.coercion import to_number
from nutrition_advisor.services.dates import day_of

ADHERENCE_TOLERANCE = 0.1

Record = PersistedRecord | Mapping[str, object]


def summary_for_records(
    records: Iterable[Record], day: str | None = None
) -> DailySummary:
    """Sum the nutrition fields of all records."""
    totals = dict.fromkeys(NUTRIENT_FIELDS, 0.0)
    for record in records:
        for name in NUTRIENT_FIELDS:
            totals[name] += to_number(_field(record, name))
    return DailySummary(day=day, **totals)


def summary_for_day(records: Iterable[Record], day: str) -> DailySummary:
    """Sum the records created on day."""
    return summary_for_records(
        (record for record in records if _record_day(record) == day), day=day
    )


def summary_for_range(
    records: Iterable[Record], start: str, end: str
) -> list[DailySummary]:
    """Return one summary per day with records in [start, end], ascending."""
    grouped: dict[str, list[Record]] = {}
    for record in records:
        day = _record_day(record)
        if day < start or day > end:
            continue
        grouped.setdefault(day, []).append(record)
    return [
        summary_for_records(grouped[day], day=day) for day in sorted(grouped)
    ]


def classify_adherence(
    daily: list[DailySummary], goal: float | None
) -> WeeklyAdherence:
    """Count days within, above and below the goal's +/-10% band."""
    if not goal or not daily:
        return WeeklyAdherence(total_days=len(daily))
    low = goal * (1 - ADHERENCE_TOLERANCE)
    high = goal * (1 + ADHERENCE_TOLERANCE)
    days_met = days_over = days_under = 0
    for summary in daily:
        calories = to_number(summary.calories)
        if low <= calories <= high:
            days_met += 1
        elif calories > high:
            days_over += 1
        else:
            days_under += 1
    return WeeklyAdherence(
        total_days=len(daily),
        days_met=days_met,
        days_over=days_over,
        days_under=days_under,
    )


def _field(record: Record, name: str) -> object:
    if isinstance(record, PersistedRecord):
        return getattr(record.item, name)
    return record.get(name)


def _record_day(record: Record) -> str:
    if isinstance(record, PersistedRecord):
        return day_of(record.created_at)
    return day_of(record.get("created_at"))
