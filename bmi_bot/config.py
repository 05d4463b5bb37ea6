"""Bot configuration from environment variables."""
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Config:
    """Bot settings."""

    BOT_TOKEN: str
    DATABASE_URL: str
    # Key of the single slot that holds the whole record collection
    STORAGE_KEY: str = "imcRecords"
    CHART_WINDOW: int = 7
    RECORDS_LIMIT: int = 50
    # Timezone used to show dates and chart labels; records are stored in UTC
    TIMEZONE: str = "UTC"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from the environment."""
        return cls(
            BOT_TOKEN=os.getenv("BOT_TOKEN", ""),
            DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///bmi_bot.db"),
            STORAGE_KEY=os.getenv("STORAGE_KEY", "imcRecords"),
            CHART_WINDOW=int(os.getenv("CHART_WINDOW", "7")),
            RECORDS_LIMIT=int(os.getenv("RECORDS_LIMIT", "50")),
            TIMEZONE=os.getenv("TIMEZONE", "UTC"),
        )

    def validate(self) -> None:
        """Check required settings."""
        if not self.BOT_TOKEN:
            raise ValueError("BOT_TOKEN is not set in .env")
        if not self.STORAGE_KEY:
            raise ValueError("STORAGE_KEY must not be empty")
        if self.CHART_WINDOW < 1:
            raise ValueError("CHART_WINDOW must be at least 1")
        if self.RECORDS_LIMIT < 1:
            raise ValueError("RECORDS_LIMIT must be at least 1")
        try:
            ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"TIMEZONE {self.TIMEZONE!r} is not a known timezone")

    @property
    def tzinfo(self) -> ZoneInfo:
        """Display timezone."""
        return ZoneInfo(self.TIMEZONE)


# Global configuration instance
config = Config.from_env()
