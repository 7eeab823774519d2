import logging
import os
from functools import lru_cache
from typing import List

import pytz
from pydantic import validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Core settings
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "UTC"

    # Google Sheets
    GOOGLE_CREDENTIALS_FILE: str = "credentials.json"
    SHEET_ID: str = "1Mp6wTZzGW5eO3yd6shhY6PG_ADhBz-dSknBq7cF1Uy0"
    LEADS_SHEET_NAME: str = "leads"

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @validator("SHEET_ID")
    def validate_sheet_id(cls, v):
        if len(v) < 10:
            raise ValueError("SHEET_ID must be a valid Google Sheet ID")
        return v

    @validator("TIMEZONE")
    def validate_timezone(cls, v):
        if v not in pytz.all_timezones_set:
            raise ValueError(f"Unknown TIMEZONE: {v}")
        return v

    @validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    def validate_optional_settings(self) -> None:
        """Log warnings for settings that will make startup fail."""
        if not os.path.exists(self.GOOGLE_CREDENTIALS_FILE):
            logger.warning(
                "GOOGLE_CREDENTIALS_FILE %s does not exist; the Sheets client cannot start",
                self.GOOGLE_CREDENTIALS_FILE,
            )

    def log_configuration(self) -> None:
        """Log the current configuration state (excluding sensitive values)."""
        logger.info(f"Environment: {self.ENVIRONMENT}")
        logger.info(f"Listening on: {self.HOST}:{self.PORT}")
        logger.info(f"Spreadsheet: {self.SHEET_ID} (tab {self.LEADS_SHEET_NAME})")
        logger.info(f"Timezone: {self.TIMEZONE}")
        logger.info(f"CORS origins: {', '.join(self.CORS_ORIGINS)}")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
