"""Business logic services."""
from bmi_bot.services.bmi_calc import build_record, parse_measurement, ValidationError
from bmi_bot.services.storage import KeyValueStorage, RecordStore, StorageResult
from bmi_bot.services.user_lookup import find_gender
from bmi_bot.services.history_service import (
    sort_newest_first,
    delete_one,
    records_for_user,
    windowed,
    chart_series,
)

__all__ = [
    "build_record",
    "parse_measurement",
    "ValidationError",
    "KeyValueStorage",
    "RecordStore",
    "StorageResult",
    "find_gender",
    "sort_newest_first",
    "delete_one",
    "records_for_user",
    "windowed",
    "chart_series",
]
