# Logging adapter for package-wide logging
from covidash.adapters.logging_adapter import LoggingAdapter

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from rich import print

from covidash.core.constants import DEFAULT_LOCALE, TESTED_LOOKBACK_DAYS
from covidash.core.interfaces.logging import LoggingPort

# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class DashSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }
    COVIDASH_LOG_LEVEL: str = "INFO"
    # development | test | production
    COVIDASH_ENV: str = "production"
    # Babel locale identifier used when callers don't pass one
    COVIDASH_LOCALE: str = DEFAULT_LOCALE
    COVIDASH_RETRY_MAX_ATTEMPTS: int = Field(default=5, ge=1)
    COVIDASH_RETRY_INTERVAL_MS: float = Field(default=1000, ge=0)
    # days after which tested/tpr figures are considered stale
    COVIDASH_TESTED_LOOKBACK_DAYS: int = Field(default=TESTED_LOOKBACK_DAYS, ge=0)

    def print_settings(self, logger: LoggingPort):
        """Prints the settings for debugging purposes"""
        logger.info("covidash settings:")
        print(self)

    @field_validator("COVIDASH_ENV", mode="before")
    def normalize_env(cls, value: str) -> str:
        """Lower-case and strip the environment name."""
        return str(value).strip().lower()


app_settings = DashSettings()

logger = LoggingAdapter("covidash", app_settings.COVIDASH_LOG_LEVEL)


def is_development_or_test(settings: DashSettings | None = None) -> bool:
    """Return True when running in a development or test environment."""
    settings = settings or app_settings
    return settings.COVIDASH_ENV in ("development", "test")
