"""Finding a known person by name."""
from typing import Optional
from bmi_bot.models import Record, Gender


def _normalize(name: str) -> str:
    return (name or "").strip().lower()


def find_gender(records: list[Record], name: str) -> Optional[Gender]:
    """Gender of the first stored record with the same name.

    Case and surrounding whitespace are ignored. The first match in
    collection order wins, not the most recent one. People who share a
    name are not told apart.
    """
    target = _normalize(name)
    if not target:
        return None

    for record in records:
        if _normalize(record.name) == target:
            return record.gender
    return None
