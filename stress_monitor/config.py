"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast)
- Type safety with Pydantic
- Subject attributes are inputs, never hard-coded in the engine
"""

import os
from functools import lru_cache
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from stress_monitor.domain.models import DuplicatePolicy, Sex, SubjectProfile

# Load environment variables from .env file
load_dotenv()


class SubjectConfig(BaseModel):
    """Default subject the monitor classifies for."""

    sex: Sex = Field(default=Sex.FEMALE, description="Subject sex")
    age_years: int = Field(default=30, ge=0, description="Subject age in whole years")

    def profile(self) -> SubjectProfile:
        return SubjectProfile.build(self.sex, self.age_years)


class StoreConfig(BaseModel):
    """Series store behaviour."""

    duplicate_policy: DuplicatePolicy = Field(
        default=DuplicatePolicy.REPLACE,
        description="Whether a second reading for a day replaces or is rejected",
    )


class MonitoringConfig(BaseModel):
    """Acquisition cycle settings."""

    fetch_timeout_seconds: float = Field(
        default=10.0, gt=0.0, description="Timeout for a single HRV fetch"
    )
    poll_interval_seconds: float = Field(
        default=300.0, gt=0.0, description="Interval between HRV fetches when polling"
    )


class DisplayConfig(BaseModel):
    """Values the rendering collaborator needs from us."""

    gauge_full_scale_ms: float = Field(
        default=100.0, gt=0.0, description="HRV value at which the gauge is full"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    subject: SubjectConfig = Field(default_factory=SubjectConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""

    def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
        v = val.strip().lower()
        if v in {"dev", "development"}:
            return "development"
        if v in {"stage", "staging"}:
            return "staging"
        return "production"

    def _level_to_literal(val: str) -> Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        v = val.strip().upper()
        return cast(
            Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO",
        )

    def _format_to_literal(val: str | None, debug: bool) -> Literal["json", "console"]:
        if val is None:
            return "console" if debug else "json"
        return "console" if val.strip().lower() == "console" else "json"

    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    subject_config = SubjectConfig(
        sex=Sex(os.getenv("SUBJECT_SEX", Sex.FEMALE.value).strip().lower()),
        age_years=int(os.getenv("SUBJECT_AGE_YEARS", "30")),
    )

    store_config = StoreConfig(
        duplicate_policy=DuplicatePolicy(
            os.getenv("STORE_DUPLICATE_POLICY", DuplicatePolicy.REPLACE.value).strip().lower()
        ),
    )

    monitoring_config = MonitoringConfig(
        fetch_timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "10.0")),
        poll_interval_seconds=float(os.getenv("POLL_INTERVAL_SECONDS", "300.0")),
    )

    display_config = DisplayConfig(
        gauge_full_scale_ms=float(os.getenv("GAUGE_FULL_SCALE_MS", "100.0")),
    )

    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format=_format_to_literal(os.getenv("LOG_FORMAT"), debug),
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        subject=subject_config,
        store=store_config,
        monitoring=monitoring_config,
        display=display_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def validate_config() -> None:
    """Validate configuration at startup."""
    try:
        config = get_config()
        print(f"✅ Configuration loaded for {config.environment} environment")
        print(
            f"✅ Subject profile: {config.subject.sex.value}, {config.subject.age_years} years"
        )
    except Exception as e:
        print(f"❌ Configuration validation failed: {e}")
        raise


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\n🔧 CONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level} ({config.logging.format})")

    print("\n🫀 SUBJECT")
    print(f"Sex: {config.subject.sex.value}")
    print(f"Age: {config.subject.age_years}")

    print("\n📊 MONITORING")
    print(f"Fetch Timeout: {config.monitoring.fetch_timeout_seconds}s")
    print(f"Poll Interval: {config.monitoring.poll_interval_seconds}s")
    print(f"Duplicate Policy: {config.store.duplicate_policy.value}")
    print(f"Gauge Full Scale: {config.display.gauge_full_scale_ms}ms")


if __name__ == "__main__":
    validate_config()
    print_config_summary()
