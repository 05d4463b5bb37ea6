"""Views over the record collection: history list, per-user chart and table."""
from datetime import timezone, tzinfo
from typing import Optional, TypedDict
from bmi_bot.models import Record, Classification

DEFAULT_WINDOW = 7
MIN_CHART_POINTS = 2

CLASSIFICATION_COLORS = {
    Classification.UNDERWEIGHT: "#fce38a",  # amber
    Classification.NORMAL: "#a8ebc5",  # green
    Classification.OVERWEIGHT: "#ffcf7c",  # orange
    Classification.OBESE: "#ff8585",  # red
}
DEFAULT_ROW_COLOR = "white"


class ChartSeries(TypedDict):
    labels: list[str]
    values: list[float]
    legend: str


# === History list ===


def sort_newest_first(records: list[Record]) -> list[Record]:
    """Records from most to least recent, by creation time."""
    return sorted(records, key=lambda record: record.created_at, reverse=True)


def delete_one(records: list[Record], record_id: str) -> list[Record]:
    """New list without the record with this id. Unknown ids change nothing."""
    return [record for record in records if record.id != record_id]


def find_record(records: list[Record], record_id: str) -> Optional[Record]:
    for record in records:
        if record.id == record_id:
            return record
    return None


# === Per-user chart and table ===


def records_for_user(records: list[Record], name: str) -> list[Record]:
    """Records with exactly this name, oldest first."""
    user_records = [record for record in records if record.name == name]
    return sorted(user_records, key=lambda record: record.recorded_at)


def windowed(records: list[Record], n: int = DEFAULT_WINDOW) -> list[Record]:
    """The last n records, keeping chronological order."""
    if n <= 0:
        return []
    return records[-n:]


def has_enough_for_chart(records: list[Record]) -> bool:
    return len(records) >= MIN_CHART_POINTS


def chart_label(record: Record, tz: Optional[tzinfo] = None) -> str:
    """Month/day label for the x axis in tz (UTC by default), e.g. 3/14."""
    moment = record.recorded_at.astimezone(tz or timezone.utc)
    return f"{moment.month}/{moment.day}"


def chart_series(
    records: list[Record], name: str, window: int = DEFAULT_WINDOW, tz: Optional[tzinfo] = None
) -> ChartSeries:
    """Chart points for a user's chronologically sorted records.

    Without records a single placeholder point is returned.
    """
    if not records:
        return {"labels": ["No data"], "values": [0.0], "legend": f"BMI of {name}"}

    shown = windowed(records, window)
    return {
        "labels": [chart_label(record, tz) for record in shown],
        "values": [record.bmi_value for record in shown],
        "legend": f"BMI of {name}",
    }


def latest_record_id(records: list[Record]) -> Optional[str]:
    """Id of the chronologically latest record, highlighted in the table."""
    if not records:
        return None
    return max(records, key=lambda record: (record.recorded_at, record.created_at)).id


def classification_color(classification) -> str:
    """Row colour for a classification."""
    try:
        return CLASSIFICATION_COLORS[Classification(classification)]
    except ValueError:
        return DEFAULT_ROW_COLOR
