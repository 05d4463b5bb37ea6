"""BMI calculation and record building."""
import math
import uuid
from datetime import datetime, timezone, tzinfo
from typing import Optional
from bmi_bot.models import Record, Gender, Classification
from bmi_bot.models.record import format_record_date, parse_record_date

MISSING_NAME = "missing name"
INVALID_VALUES = "invalid values"
NOT_POSITIVE = "values must be positive"

# Upper bounds (exclusive) for underweight, normal and overweight.
# The two tracks differ on purpose, keep them as they are.
THRESHOLDS = {
    Gender.MALE: (20, 25, 30),
    Gender.FEMALE: (18, 24, 29),
}


class ValidationError(ValueError):
    """Form input rejected. The message is shown to the user as is."""


def _parse_number(text) -> Optional[float]:
    """Parse a number, accepting a decimal comma. None if it is not finite."""
    if text is None:
        return None
    try:
        value = float(str(text).strip().replace(",", "."))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_measurement(text) -> float:
    """Parse one numeric form field.

    Raises:
        ValidationError: not a number, or not greater than zero
    """
    value = _parse_number(text)
    if value is None:
        raise ValidationError(INVALID_VALUES)
    if value <= 0:
        raise ValidationError(NOT_POSITIVE)
    return value


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """BMI = weight (kg) / height (m)^2."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def classify_bmi(bmi: float, gender: Gender) -> Classification:
    """Classify BMI with the gender-specific thresholds."""
    underweight, normal, overweight = THRESHOLDS[Gender(gender)]
    if bmi < underweight:
        return Classification.UNDERWEIGHT
    elif bmi < normal:
        return Classification.NORMAL
    elif bmi < overweight:
        return Classification.OVERWEIGHT
    return Classification.OBESE


def format_bmi(bmi: float) -> str:
    return f"{bmi:.2f}"


def format_date_display(value: str, tz: Optional[tzinfo] = None) -> str:
    """ISO date or timestamp -> DD/MM/YYYY in tz (UTC by default).

    Unknown formats are returned unchanged.
    """
    if not value:
        return ""
    try:
        return parse_record_date(value).astimezone(tz or timezone.utc).strftime("%d/%m/%Y")
    except ValueError:
        return value


def build_record(
    name: str,
    gender: Gender,
    weight_text,
    height_text,
    age_text,
    now: Optional[datetime] = None,
) -> Record:
    """Validate form input and build a new record.

    Checks run in this order: name, numeric parsing, positive values.

    Args:
        name: person name, surrounding whitespace is dropped
        gender: Gender or its value
        weight_text: weight in kg
        height_text: height in cm
        age_text: age in years
        now: creation moment, current UTC time by default

    Returns:
        Record with BMI and classification filled in

    Raises:
        ValidationError: with one of the user-facing messages
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError(MISSING_NAME)

    values = [_parse_number(text) for text in (weight_text, height_text, age_text)]
    if any(value is None for value in values):
        raise ValidationError(INVALID_VALUES)
    if any(value <= 0 for value in values):
        raise ValidationError(NOT_POSITIVE)
    weight, height, age = values

    gender = Gender(gender)
    bmi = calculate_bmi(weight, height)
    moment = now or datetime.now(timezone.utc)

    return Record(
        id=uuid.uuid4().hex,
        name=clean_name,
        gender=gender,
        age=age,
        weight=weight,
        height=height,
        imc=format_bmi(bmi),
        classification=classify_bmi(bmi, gender),
        date=format_record_date(moment),
        created_at=int(moment.timestamp() * 1000),
    )


def format_result(record: Record, tz: Optional[tzinfo] = None) -> str:
    """Reply text shown after a calculation."""
    return (
        f"Name: {record.name}\n"
        f"Date: {format_date_display(record.date, tz)}\n"
        f"BMI: {record.imc} ({record.classification.value})"
    )
