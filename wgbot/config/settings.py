import logging
from datetime import date, timedelta

import pytz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Bot settings
    bot_token: str = Field(..., alias="BOT_TOKEN")

    # Database settings
    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_name: str = Field(default="wg_bot", alias="DB_NAME")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: str = Field(..., alias="DB_PASSWORD")

    # Redis settings (optional)
    redis_host: str = Field(default="localhost", alias="REDIS_HOST")
    redis_port: int = Field(default=6379, alias="REDIS_PORT")
    redis_db: int = Field(default=0, alias="REDIS_DB")

    # Application settings
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Admin user IDs (comma-separated)
    admin_user_ids: str = Field(default="", alias="ADMIN_USER_IDS")

    # Rotation settings
    timezone: str = Field(default="Europe/Berlin", alias="TIMEZONE")
    epoch_date: date = Field(default=date(2024, 1, 7), alias="EPOCH_DATE")
    weekly_notification_hour: int = Field(default=10, ge=0, le=23, alias="WEEKLY_NOTIFICATION_HOUR")
    reminder_hour: int = Field(default=10, ge=0, le=23, alias="REMINDER_HOUR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        try:
            pytz.timezone(value)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {value}")
        return value

    @field_validator("epoch_date")
    @classmethod
    def align_epoch_to_sunday(cls, value: date) -> date:
        """Move a non-Sunday epoch back to the preceding Sunday."""
        # date.weekday(): Monday == 0 ... Sunday == 6
        days_since_sunday = (value.weekday() + 1) % 7
        if days_since_sunday:
            adjusted = value - timedelta(days=days_since_sunday)
            logger.warning(
                f"EPOCH_DATE {value.isoformat()} is not a Sunday, "
                f"using preceding Sunday {adjusted.isoformat()}. Fix your configuration."
            )
            return adjusted
        return value

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def redis_url(self) -> str:
        """Construct Redis URL."""
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def tz(self) -> pytz.BaseTzInfo:
        """Display timezone used for calendar boundaries and cron triggers."""
        return pytz.timezone(self.timezone)

    def is_admin(self, user_id: int) -> bool:
        """Check if user_id is admin."""
        admin_ids = [int(uid.strip()) for uid in self.admin_user_ids.split(",") if uid.strip()]
        return user_id in admin_ids


# Global settings instance
settings = Settings()
