"""Tests for the history list and the per-user chart data."""
from zoneinfo import ZoneInfo

from bmi_bot.models import Classification
from bmi_bot.services.history_service import (
    chart_label,
    chart_series,
    classification_color,
    delete_one,
    find_record,
    has_enough_for_chart,
    latest_record_id,
    records_for_user,
    sort_newest_first,
    windowed,
)


def test_sort_newest_first(make_record):
    old, middle, new = make_record(day=1), make_record(day=2), make_record(day=3)
    assert sort_newest_first([middle, old, new]) == [new, middle, old]


def test_delete_one(make_record):
    first, second = make_record(day=1), make_record(day=2)
    assert delete_one([first, second], first.id) == [second]
    assert delete_one([first, second], "missing") == [first, second]


def test_find_record(make_record):
    record = make_record()
    assert find_record([record], record.id) is record
    assert find_record([record], "missing") is None


def test_records_for_user_filters_and_sorts(make_record):
    ana_late = make_record(name="Ana", day=9)
    luis = make_record(name="Luis", day=5)
    ana_early = make_record(name="Ana", day=2)
    lower_ana = make_record(name="ana", day=3)

    assert records_for_user([ana_late, luis, ana_early, lower_ana], "Ana") == [ana_early, ana_late]


def test_windowed_keeps_last_seven(make_record):
    records = [make_record(day=day) for day in range(1, 11)]

    shown = windowed(records)
    assert len(shown) == 7
    assert shown == records[3:]


def test_windowed_edges(make_record):
    records = [make_record(day=1), make_record(day=2)]
    assert windowed(records, 7) == records
    assert windowed(records, 0) == []


def test_chart_series(make_record):
    records = [
        make_record(name="Ana", weight="60", month=3, day=4),
        make_record(name="Ana", weight="62", month=3, day=14),
    ]

    series = chart_series(records, "Ana")
    assert series["labels"] == ["3/4", "3/14"]
    assert series["values"] == [records[0].bmi_value, records[1].bmi_value]
    assert series["legend"] == "BMI of Ana"


def test_chart_series_uses_window(make_record):
    records = [make_record(day=day) for day in range(1, 11)]
    series = chart_series(records, "Ana", window=7)
    assert series["labels"] == [f"1/{day}" for day in range(4, 11)]


def test_chart_series_without_records():
    series = chart_series([], "Ana")
    assert series["labels"] == ["No data"]
    assert series["values"] == [0.0]


def test_chart_label(make_record):
    assert chart_label(make_record(month=12, day=25)) == "12/25"


def test_chart_label_in_timezone(make_record):
    record = make_record(month=1, day=2, hour=3)
    assert chart_label(record) == "1/2"
    assert chart_label(record, ZoneInfo("America/Mexico_City")) == "1/1"


def test_chart_series_in_timezone(make_record):
    records = [make_record(day=1, hour=12), make_record(day=2, hour=3)]
    series = chart_series(records, "Ana", tz=ZoneInfo("America/Mexico_City"))
    assert series["labels"] == ["1/1", "1/1"]


def test_chart_needs_two_records(make_record):
    assert not has_enough_for_chart([])
    assert not has_enough_for_chart([make_record()])
    assert has_enough_for_chart([make_record(day=1), make_record(day=2)])


def test_latest_record_id(make_record):
    records = [make_record(day=1), make_record(day=7), make_record(day=3)]
    assert latest_record_id(records) == records[1].id
    assert latest_record_id([]) is None


def test_classification_colors():
    assert classification_color(Classification.UNDERWEIGHT) == "#fce38a"
    assert classification_color(Classification.NORMAL) == "#a8ebc5"
    assert classification_color("overweight") == "#ffcf7c"
    assert classification_color(Classification.OBESE) == "#ff8585"
    assert classification_color("unknown") == "white"
