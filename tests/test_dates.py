"""Tests for local date helpers."""

from datetime import date, datetime

from nutrition_advisor.services.dates import (
    build_timestamp_for_date,
    day_of,
    parse_date_only,
    week_range,
)

FULLWIDTH_DATE = "\uff12\uff10\uff12\uff14-\uff10\uff11-\uff11\uff15"
ARABIC_INDIC_DATE = "\u0662\u0660\u0662\u0664-\u0660\u0661-\u0661\u0665"


def test_parse_date_only_is_strict() -> None:
    assert parse_date_only("2024-02-29") == date(2024, 2, 29)
    assert parse_date_only("2024-02-30") is None
    assert parse_date_only("2023-02-29") is None
    assert parse_date_only("2024-2-3") is None
    assert parse_date_only("2024-02-03T10:00:00") is None
    assert parse_date_only(None) is None
    assert parse_date_only("2024-01-15\n") is None
    assert parse_date_only(FULLWIDTH_DATE) is None
    assert parse_date_only(ARABIC_INDIC_DATE) is None


def test_build_timestamp_keeps_time_of_day() -> None:
    now = datetime(2024, 5, 20, 13, 45, 7, 123456)

    assert build_timestamp_for_date("2024-05-01", now=now) == "2024-05-01 13:45:07"
    assert build_timestamp_for_date("2024-13-01", now=now) is None


def test_week_range_starts_on_monday() -> None:
    wednesday = week_range(date(2024, 3, 6))
    sunday = week_range(date(2024, 3, 10))
    monday = week_range(date(2024, 3, 4))

    assert (wednesday.start, wednesday.end) == ("2024-03-04", "2024-03-10")
    assert sunday == wednesday
    assert monday == wednesday


def test_day_of_truncates_timestamp() -> None:
    assert day_of("2024-03-06 08:00:00") == "2024-03-06"
    assert day_of(None) == ""
