"""Keyboards for the BMI form and the history."""
from typing import Optional
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from bmi_bot.models import Gender

GENDER_LABELS = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
}


def get_gender_keyboard(selected: Optional[Gender] = None) -> InlineKeyboardMarkup:
    """Gender choice. The auto-filled gender is marked with a check."""
    buttons = []
    for gender, label in GENDER_LABELS.items():
        text = f"✅ {label}" if gender == selected else label
        buttons.append(InlineKeyboardButton(text, callback_data=f"gender:{gender.value}"))
    return InlineKeyboardMarkup([buttons])


def get_record_keyboard(record_id: str) -> InlineKeyboardMarkup:
    """Buttons under a history card.

    Args:
        record_id: id of the stored record
    """
    keyboard = [
        [
            InlineKeyboardButton("📈 Chart", callback_data=f"chart:{record_id}"),
            InlineKeyboardButton("🗑️ Delete", callback_data=f"delete:{record_id}"),
        ]
    ]
    return InlineKeyboardMarkup(keyboard)


def get_delete_all_keyboard(count: int) -> InlineKeyboardMarkup:
    keyboard = [[InlineKeyboardButton(f"Delete all ({count})", callback_data="delete_all")]]
    return InlineKeyboardMarkup(keyboard)


def get_delete_all_confirm_keyboard() -> InlineKeyboardMarkup:
    """Confirmation before deleting every record."""
    keyboard = [
        [
            InlineKeyboardButton("Cancel", callback_data="delete_all:cancel"),
            InlineKeyboardButton("🗑️ Delete all", callback_data="delete_all:confirm"),
        ]
    ]
    return InlineKeyboardMarkup(keyboard)
