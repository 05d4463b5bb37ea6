"""Bot command handlers."""
from bmi_bot.handlers.start import register_handlers as register_start_handlers
from bmi_bot.handlers.calculate import register_handlers as register_calculate_handlers
from bmi_bot.handlers.records import register_handlers as register_records_handlers
from bmi_bot.handlers.chart import register_handlers as register_chart_handlers

__all__ = [
    "register_start_handlers",
    "register_calculate_handlers",
    "register_records_handlers",
    "register_chart_handlers",
]
