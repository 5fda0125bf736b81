"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storepulse.core import constants


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "StorePulse"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Anomalies
    iqr_multiplier: float = constants.IQR_MULTIPLIER
    anomaly_min_group_size: int = constants.MIN_GROUP_SIZE
    weekly_min_weeks: int = constants.MIN_GROUP_SIZE
    weekly_zscore_sigma: float = constants.WEEKLY_ZSCORE_SIGMA

    # Volatility
    risk_medium_threshold: float = constants.RISK_MEDIUM_THRESHOLD
    risk_high_threshold: float = constants.RISK_HIGH_THRESHOLD

    # Alerts
    drop_alert_threshold: float = constants.DROP_ALERT_THRESHOLD

    # Forecasting
    forecast_horizon_weeks: int = constants.FORECAST_HORIZON_WEEKS
    forecast_validation_split: float = constants.VALIDATION_SPLIT
    forecast_base_window: int = constants.BASE_LEVEL_WINDOW
    forecast_base_weight: float = constants.BASE_WEIGHT
    forecast_confidence_band: float = constants.CONFIDENCE_BAND
    forecast_default_holiday_factor: float = constants.DEFAULT_HOLIDAY_FACTOR
    forecast_trend_band_pct: float = constants.TREND_LABEL_BAND_PCT

    @field_validator("forecast_validation_split", "forecast_base_weight")
    @classmethod
    def validate_fraction(cls, v: float) -> float:
        """Validate that a fraction lies strictly between 0 and 1.

        Args:
            v: Fraction value.

        Returns:
            Validated fraction.

        Raises:
            ValueError: If the value is outside (0, 1).
        """
        if not 0.0 < v < 1.0:
            raise ValueError(f"Expected a fraction in (0, 1), got {v}")
        return v

    @field_validator("iqr_multiplier", "weekly_zscore_sigma", "forecast_confidence_band")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Reject zero or negative multipliers."""
        if v <= 0:
            raise ValueError(f"Expected a positive value, got {v}")
        return v

    @field_validator("anomaly_min_group_size")
    @classmethod
    def validate_min_group_size(cls, v: int) -> int:
        """Require at least one record per (store, dept) group."""
        if v < 1:
            raise ValueError(f"anomaly_min_group_size must be at least 1, got {v}")
        return v

    @field_validator("weekly_min_weeks")
    @classmethod
    def validate_min_weeks(cls, v: int) -> int:
        """Require two weeks, the minimum for a sample standard deviation."""
        if v < 2:
            raise ValueError(f"weekly_min_weeks must be at least 2, got {v}")
        return v

    @model_validator(mode="after")
    def validate_risk_thresholds(self) -> "Settings":
        """Ensure the medium risk threshold sits below the high one."""
        if self.risk_medium_threshold >= self.risk_high_threshold:
            raise ValueError(
                f"risk_medium_threshold ({self.risk_medium_threshold}) must be lower than "
                f"risk_high_threshold ({self.risk_high_threshold})"
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
