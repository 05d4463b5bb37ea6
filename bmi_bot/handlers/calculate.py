"""BMI form: name, gender, weight, height, age."""
import html
import logging
from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    MessageHandler,
    ConversationHandler,
    filters,
    ContextTypes,
)
from bmi_bot.config import config
from bmi_bot.keyboards.records_menu import get_gender_keyboard, GENDER_LABELS
from bmi_bot.models import Gender
from bmi_bot.services.bmi_calc import (
    build_record,
    parse_measurement,
    format_result,
    ValidationError,
    MISSING_NAME,
)
from bmi_bot.services.storage import get_store
from bmi_bot.services.user_lookup import find_gender

logger = logging.getLogger(__name__)

# Form states
NAME, GENDER, WEIGHT, HEIGHT, AGE = range(5)

FORM_KEY = "bmi_form"


async def calc_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Start the form from /calc or the start button."""
    if update.callback_query:
        await update.callback_query.answer()

    context.user_data[FORM_KEY] = {}

    await update.effective_message.reply_text(
        "🧮 <b>BMI calculation</b>\n\n" "Step 1/5: Whose measurement is it? Send the name.",
        parse_mode="HTML",
    )
    return NAME


async def name_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Save the name and auto-fill the gender of a known person."""
    name = update.message.text.strip()
    if not name:
        await update.message.reply_text(f"❌ {MISSING_NAME}")
        return NAME

    form = context.user_data.setdefault(FORM_KEY, {})
    form["name"] = name

    known_gender = find_gender(get_store(context).load_all(), name)
    if known_gender:
        form["gender"] = known_gender.value
        text = (
            f"✅ Name saved. Gender auto-filled from earlier records: "
            f"{GENDER_LABELS[known_gender]}\n\n"
            "Step 2/5: Confirm or change the gender:"
        )
    else:
        text = "✅ Name saved\n\n" "Step 2/5: Choose the gender:"

    await update.message.reply_text(text, reply_markup=get_gender_keyboard(known_gender))
    return GENDER


async def gender_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Handle the gender choice."""
    query = update.callback_query
    await query.answer()

    gender = Gender(query.data.split(":")[1])
    context.user_data.setdefault(FORM_KEY, {})["gender"] = gender.value

    await query.edit_message_text(
        f"✅ Gender: {GENDER_LABELS[gender]}\n\n"
        "Step 3/5: Weight in kg?\n"
        "Send a number (for example: 70.5)"
    )
    return WEIGHT


async def _store_measurement(update: Update, context, field: str) -> bool:
    """Validate one numeric field. On error the same step is asked again."""
    text = update.message.text
    try:
        parse_measurement(text)
    except ValidationError as e:
        await update.message.reply_text(f"❌ {e}")
        return False

    context.user_data.setdefault(FORM_KEY, {})[field] = text
    return True


async def weight_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    if not await _store_measurement(update, context, "weight"):
        return WEIGHT

    await update.message.reply_text(
        "✅ Weight saved\n\n" "Step 4/5: Height in cm?\n" "Send a number (for example: 175)"
    )
    return HEIGHT


async def height_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    if not await _store_measurement(update, context, "height"):
        return HEIGHT

    await update.message.reply_text(
        "✅ Height saved\n\n" "Step 5/5: Age?\n" "Send a number (for example: 30)"
    )
    return AGE


async def age_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Last step: build the record, save it and show the result."""
    if not await _store_measurement(update, context, "age"):
        return AGE

    form = context.user_data.get(FORM_KEY, {})
    try:
        record = build_record(
            name=form.get("name", ""),
            gender=form.get("gender", Gender.MALE.value),
            weight_text=form.get("weight"),
            height_text=form.get("height"),
            age_text=form.get("age"),
        )
    except ValidationError as e:
        await update.message.reply_text(f"❌ {e}")
        return AGE

    result = get_store(context).add(record)
    text = f"📊 <b>Result</b>\n\n{html.escape(format_result(record, config.tzinfo))}"
    if not result.ok:
        text += "\n\n⚠️ The record could not be saved."

    context.user_data.pop(FORM_KEY, None)

    await update.message.reply_text(text, parse_mode="HTML")
    return ConversationHandler.END


async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> int:
    """Abort the form."""
    await update.message.reply_text("❌ Calculation cancelled.")
    context.user_data.pop(FORM_KEY, None)
    return ConversationHandler.END


def register_handlers(application: Application) -> None:
    """Register handlers."""
    text_input = filters.TEXT & ~filters.COMMAND
    conv_handler = ConversationHandler(
        entry_points=[
            CommandHandler("calc", calc_start),
            CallbackQueryHandler(calc_start, pattern="^start:calc$"),
        ],
        states={
            NAME: [MessageHandler(text_input, name_handler)],
            GENDER: [CallbackQueryHandler(gender_handler, pattern="^gender:(male|female)$")],
            WEIGHT: [MessageHandler(text_input, weight_handler)],
            HEIGHT: [MessageHandler(text_input, height_handler)],
            AGE: [MessageHandler(text_input, age_handler)],
        },
        fallbacks=[CommandHandler("cancel", cancel)],
    )
    application.add_handler(conv_handler)
