"""
Toolkit configuration settings.
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Self


class Settings(BaseSettings):
    """Toolkit settings loaded from environment variables."""

    # Application
    APP_NAME: str = "composite-index"
    ENV: str = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Reliability
    # Conventional minimum for exploratory composite indices. Tighter
    # instruments usually ask for 0.70.
    ALPHA_THRESHOLD: float = Field(
        default=0.60,
        ge=0.0,
        le=1.0,
        description="Minimum raw Cronbach's alpha for an item set to be considered reliable",
    )
    AUTO_REVERSE: bool = Field(
        default=True,
        description="Reverse-score items anti-correlated with the rest of the set before scoring",
    )

    # Rescaling target interval used when callers don't pass one
    RESCALE_MIN: float = 0.0
    RESCALE_MAX: float = 100.0

    # Correlation summaries
    CORRELATION_DECIMALS: int = Field(
        default=2,
        ge=0,
        description="Decimal places used when rounding pairwise correlation coefficients",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env not defined in Settings
    )

    @model_validator(mode="after")
    def validate_rescale_interval(self) -> Self:
        """Validate that the default rescaling interval is not reversed or empty."""
        if self.RESCALE_MIN >= self.RESCALE_MAX:
            raise ValueError(
                f"RESCALE_MIN must be less than RESCALE_MAX, "
                f"got [{self.RESCALE_MIN}, {self.RESCALE_MAX}]"
            )
        return self


settings = Settings()
