"""
Configuration settings for stockta.

Uses pydantic-settings for environment variable management with nested models
for the logging and analysis configuration domains. The indicator functions
never read these settings; only the analyzer facade and application entry
points do.
"""

from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from stockta.config.constants import (
    DEFAULT_BAND_PERIOD,
    DEFAULT_EMA_PERIODS,
    DEFAULT_OSCILLATOR_PERIOD,
    DEFAULT_SMA_PERIODS,
    DEFAULT_STD_DEV_MULTIPLIER,
)
from stockta.utils.logger import LogConfig


def _parse_periods(raw: str) -> list[int]:
    return [int(x.strip()) for x in raw.split(",") if x.strip()]


class AnalysisSettings(BaseSettings):
    """Default indicator parameters."""

    oscillator_period: int = Field(
        default=DEFAULT_OSCILLATOR_PERIOD,
        gt=0,
        description="RSI/Stochastic/ADX lookback period",
    )
    band_period: int = Field(
        default=DEFAULT_BAND_PERIOD,
        gt=0,
        description="Bollinger/CCI lookback period",
    )
    std_dev_multiplier: float = Field(
        default=DEFAULT_STD_DEV_MULTIPLIER,
        ge=0,
        description="Bollinger band width in standard deviations",
    )
    sma_periods: Annotated[list[int], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_SMA_PERIODS),
        description="SMA windows to compute (comma-separated in the environment)",
    )
    ema_periods: Annotated[list[int], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_EMA_PERIODS),
        description="EMA windows to compute (comma-separated in the environment)",
    )

    @field_validator("sma_periods", "ema_periods", mode="before")
    @classmethod
    def parse_periods(cls, value):
        """Accept comma-separated strings as well as sequences."""
        if isinstance(value, str):
            try:
                return _parse_periods(value)
            except ValueError as e:
                raise ValueError(f"Periods must be comma-separated integers: {value!r}") from e
        return value

    @field_validator("sma_periods", "ema_periods")
    @classmethod
    def validate_periods(cls, value: list[int]) -> list[int]:
        """Reject non-positive windows."""
        if any(p <= 0 for p in value):
            raise ValueError(f"Periods must be positive: {value!r}")
        return value

    model_config = SettingsConfigDict(
        env_prefix="TA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "pretty"] = Field(
        default="pretty", description="Console output format"
    )
    file_path: Optional[str] = Field(
        default=None, description="Optional log file path"
    )
    environment: str = Field(default="dev", description="Environment name")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def to_log_config(self) -> LogConfig:
        """
        Build the LogConfig consumed by setup_logging.

        Returns:
            LogConfig populated from these settings
        """
        return LogConfig(
            level=self.level,
            format=self.format,
            file_path=self.file_path,
            environment=self.environment,
        )


class Settings(BaseSettings):
    """
    Main settings class combining all configuration domains.

    Loads configuration from environment variables and .env file.
    """

    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance (singleton pattern).

    Returns:
        Singleton Settings instance
    """
    return Settings()
