"""BMI measurement record."""
import enum
import math
from dataclasses import dataclass
from datetime import datetime, timezone


class Gender(str, enum.Enum):
    """Gender of the measured person."""
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def _missing_(cls, value):
        # Labels written by the first version of the app
        return LEGACY_GENDERS.get(str(value).strip().lower())


class Classification(str, enum.Enum):
    """BMI category."""
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"

    @classmethod
    def _missing_(cls, value):
        return LEGACY_CLASSIFICATIONS.get(str(value).strip().lower())


LEGACY_GENDERS = {
    "hombre": Gender.MALE,
    "mujer": Gender.FEMALE,
}

LEGACY_CLASSIFICATIONS = {
    "bajo peso": Classification.UNDERWEIGHT,
    "peso normal": Classification.NORMAL,
    "sobrepeso": Classification.OVERWEIGHT,
    "obesidad": Classification.OBESE,
}


def parse_record_date(value: str) -> datetime:
    """Parse a stored ISO-8601 date, including the trailing 'Z' form."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_record_date(moment: datetime) -> str:
    """Format a moment as UTC ISO-8601 with milliseconds: 2026-10-17T09:30:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class Record:
    """One measurement event.

    imc and classification are derived when the record is built and are
    never edited afterwards.
    """

    id: str
    name: str
    gender: Gender
    age: float
    weight: float  # kg
    height: float  # cm
    imc: str  # BMI fixed to 2 decimals
    classification: Classification
    date: str  # ISO-8601 UTC
    created_at: int  # epoch milliseconds, sort key for the history list

    @property
    def bmi_value(self) -> float:
        return float(self.imc)

    @property
    def recorded_at(self) -> datetime:
        return parse_record_date(self.date)

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict."""
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender.value,
            "age": self.age,
            "weight": self.weight,
            "height": self.height,
            "imc": self.imc,
            "classification": self.classification.value,
            "date": self.date,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """Build a record from its stored dict.

        Raises:
            KeyError, ValueError, TypeError: the dict is not a valid record
        """
        record_id = str(data["id"])
        date = str(data["date"])
        recorded_at = parse_record_date(date)
        imc = str(data["imc"])
        if not math.isfinite(float(imc)):
            raise ValueError(f"imc is not a finite number: {imc!r}")

        created_at = data.get("created_at")
        if created_at is None:
            # Older records carry only a millisecond timestamp as id
            if record_id.isdigit():
                created_at = int(record_id)
            else:
                created_at = int(recorded_at.timestamp() * 1000)

        return cls(
            id=record_id,
            name=str(data["name"]),
            gender=Gender(data["gender"]),
            age=float(data["age"]),
            weight=float(data["weight"]),
            height=float(data["height"]),
            imc=imc,
            classification=Classification(data["classification"]),
            date=date,
            created_at=int(created_at),
        )
