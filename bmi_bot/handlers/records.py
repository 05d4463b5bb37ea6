"""History list: record cards, deleting one record or all of them."""
import html
import logging
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, CallbackQueryHandler, ContextTypes
from bmi_bot.config import config
from bmi_bot.keyboards.records_menu import (
    get_record_keyboard,
    get_delete_all_keyboard,
    get_delete_all_confirm_keyboard,
)
from bmi_bot.models import Record
from bmi_bot.services.bmi_calc import format_date_display
from bmi_bot.services.history_service import sort_newest_first
from bmi_bot.services.storage import get_store

logger = logging.getLogger(__name__)

EMPTY_TEXT = (
    "😕 No saved records.\n\n"
    "Use /calc to calculate and save your first BMI."
)


def format_record_card(record: Record) -> str:
    return (
        f"<b>{html.escape(record.name)}</b>\n"
        f"BMI: {record.imc} ({record.classification.value})\n"
        f"Saved: {format_date_display(record.date, config.tzinfo)}"
    )


async def show_records(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send the history, newest first, one card per record."""
    message = update.effective_message
    records = sort_newest_first(get_store(context).load_all())

    if not records:
        await message.reply_text(EMPTY_TEXT)
        return

    shown = records[: config.RECORDS_LIMIT]
    header = f"📋 <b>History</b>: {len(records)} record(s)"
    if len(shown) < len(records):
        header += f", showing the latest {len(shown)}"

    await message.reply_text(
        header, parse_mode="HTML", reply_markup=get_delete_all_keyboard(len(records))
    )
    for record in shown:
        await message.reply_text(
            format_record_card(record),
            parse_mode="HTML",
            reply_markup=get_record_keyboard(record.id),
        )


async def records_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /records."""
    await show_records(update, context)


async def records_button(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle the History button from /start."""
    await update.callback_query.answer()
    await show_records(update, context)


async def delete_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Delete one record and remove its card."""
    query = update.callback_query
    await query.answer()

    record_id = query.data.split(":", 1)[1]
    result = get_store(context).delete(record_id)

    if not result.ok:
        await query.message.reply_text("❌ Error: could not delete the record.")
        return

    try:
        await query.message.delete()
    except TelegramError as e:
        logger.warning(f"Could not remove card of record {record_id}: {e}")


async def delete_all_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Delete all records behind an explicit confirmation."""
    query = update.callback_query
    await query.answer()

    if query.data == "delete_all":
        await query.edit_message_text(
            "⚠️ Are you sure you want to delete ALL records?\n" "This cannot be undone.",
            reply_markup=get_delete_all_confirm_keyboard(),
        )
    elif query.data == "delete_all:cancel":
        await query.edit_message_text("Deletion cancelled.")
    elif query.data == "delete_all:confirm":
        result = get_store(context).clear()
        if result.ok:
            await query.edit_message_text("✅ All records have been deleted.")
        else:
            await query.edit_message_text("❌ Error: could not delete all records.")


def register_handlers(application: Application) -> None:
    """Register handlers."""
    application.add_handler(CommandHandler("records", records_command))
    application.add_handler(CallbackQueryHandler(records_button, pattern=r"^start:records$"))
    application.add_handler(CallbackQueryHandler(delete_all_callback, pattern=r"^delete_all"))
    application.add_handler(CallbackQueryHandler(delete_callback, pattern=r"^delete:"))
