"""Handlers for /start and /help."""
from telegram import Update, InlineKeyboardButton, InlineKeyboardMarkup
from telegram.ext import Application, CommandHandler, ContextTypes


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start."""
    keyboard = [
        [InlineKeyboardButton("🧮 Calculate BMI", callback_data="start:calc")],
        [InlineKeyboardButton("📋 History", callback_data="start:records")],
    ]
    reply_markup = InlineKeyboardMarkup(keyboard)

    await update.message.reply_text(
        "👋 Hi! I keep track of body-mass-index measurements.\n\n"
        "Calculate a BMI and I will save it, then follow the progress "
        "of each person in the history.",
        reply_markup=reply_markup,
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help."""
    text = (
        "📖 <b>Bot commands:</b>\n\n"
        "🧮 <b>BMI:</b>\n"
        "/calc - Calculate and save a BMI\n"
        "/cancel - Abort the calculation\n\n"
        "📋 <b>History:</b>\n"
        "/records - Saved records, charts and deletion\n\n"
        "❓ <b>Help:</b>\n"
        "/help - This message\n"
        "/start - Start over"
    )
    await update.message.reply_text(text, parse_mode="HTML")


def register_handlers(application: Application) -> None:
    """Register handlers."""
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
