"""Per-user BMI chart and history table."""
import html
import io
import logging
from telegram import Update, InputFile
from telegram.ext import Application, CallbackQueryHandler, ContextTypes
from bmi_bot.config import config
from bmi_bot.models import Record
from bmi_bot.services.bmi_calc import format_date_display
from bmi_bot.services.chart_generator import generate_bmi_chart, generate_history_table
from bmi_bot.services.history_service import (
    MIN_CHART_POINTS,
    chart_series,
    find_record,
    has_enough_for_chart,
    latest_record_id,
    records_for_user,
)
from bmi_bot.services.storage import get_store

logger = logging.getLogger(__name__)


def format_history_text(records: list[Record], latest_id: str) -> str:
    """Text table, used when the table image cannot be drawn."""
    lines = ["<b>Record details</b>", "Date | Weight (kg) | BMI | Classification"]
    for record in records:
        line = (
            f"{format_date_display(record.date, config.tzinfo)} | {record.weight:g} | "
            f"{record.imc} | {record.classification.value}"
        )
        lines.append(f"<b>{line}</b> ⬅️" if record.id == latest_id else line)
    return "\n".join(lines)


async def chart_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send the progress chart and the table for the person of a record."""
    query = update.callback_query
    await query.answer()

    record_id = query.data.split(":", 1)[1]
    records = get_store(context).load_all()
    record = find_record(records, record_id)
    if not record:
        await query.message.reply_text("⚠️ Record not found.")
        return

    name = record.name
    user_records = records_for_user(records, name)
    safe_name = html.escape(name)

    if not user_records:
        await query.message.reply_text(f"No BMI records for {safe_name}.", parse_mode="HTML")
        return

    await query.message.reply_text(
        f"📈 <b>BMI history</b>\nProgress of: <b>{safe_name}</b>", parse_mode="HTML"
    )

    if has_enough_for_chart(user_records):
        series = chart_series(user_records, name, config.CHART_WINDOW, config.tzinfo)
        chart_img = generate_bmi_chart(series)
        if chart_img:
            await query.message.reply_photo(
                photo=InputFile(io.BytesIO(chart_img), filename="bmi_chart.png")
            )
        else:
            await query.message.reply_text("⚠️ The chart could not be drawn.")
    else:
        await query.message.reply_text(
            f"You need at least {MIN_CHART_POINTS} records to see the progress chart.\n"
            f"You currently have: {len(user_records)} record(s)."
        )

    latest_id = latest_record_id(user_records)
    table_img = generate_history_table(user_records, latest_id, config.tzinfo)
    if table_img:
        await query.message.reply_photo(
            photo=InputFile(io.BytesIO(table_img), filename="bmi_history.png"),
            caption="Record details",
        )
    else:
        await query.message.reply_text(format_history_text(user_records, latest_id), parse_mode="HTML")


def register_handlers(application: Application) -> None:
    """Register handlers."""
    application.add_handler(CallbackQueryHandler(chart_callback, pattern=r"^chart:"))
