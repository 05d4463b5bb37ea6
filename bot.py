"""Entry point of the BMI tracker bot."""
import logging
from telegram.ext import Application
from bmi_bot.config import config
from bmi_bot.database import init_db
from bmi_bot.handlers import (
    register_start_handlers,
    register_calculate_handlers,
    register_records_handlers,
    register_chart_handlers,
)
from bmi_bot.services.storage import KeyValueStorage, RecordStore

# Logging setup
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the bot."""
    # Check configuration
    try:
        config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return

    # Initialize DB
    logger.info("Initializing database...")
    init_db()

    # Build the application
    logger.info("Starting bot...")
    application = Application.builder().token(config.BOT_TOKEN).build()
    application.bot_data["store"] = RecordStore(KeyValueStorage(), key=config.STORAGE_KEY)

    # Register handlers
    register_start_handlers(application)
    register_calculate_handlers(application)
    register_records_handlers(application)
    register_chart_handlers(application)

    logger.info(f"Records are kept under storage key {config.STORAGE_KEY!r}")
    application.run_polling(allowed_updates=["message", "callback_query"])


if __name__ == "__main__":
    main()
