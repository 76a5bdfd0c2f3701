"""Configuration models for core domain components.

Pydantic-based configuration classes that validate retry settings in one
place, enabling dependency injection and testability.
"""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel):
    """Configuration for the retrying invoker.

    Attributes:
        max_attempts: Total attempts permitted, including the first one
        interval_ms: Fixed delay in milliseconds between a failed attempt and the next
    """

    max_attempts: int = Field(
        default=5,
        ge=1,
        description="Maximum number of attempts (1 means no retry)"
    )

    interval_ms: float = Field(
        default=1000,
        ge=0,
        description="Fixed wait in milliseconds between consecutive attempts"
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    @classmethod
    def from_app_settings(cls, settings) -> "RetryConfig":
        """Factory method to construct config from a DashSettings instance.

        Args:
            settings: DashSettings instance from core.settings

        Returns:
            RetryConfig with values from app settings
        """
        return cls(
            max_attempts=settings.COVIDASH_RETRY_MAX_ATTEMPTS,
            interval_ms=settings.COVIDASH_RETRY_INTERVAL_MS,
        )
