"""
ISQ Reconciler Configuration Module
===================================

Centralized configuration management using environment variables.
Supports both .env files and system environment variables.

Environment Variables:
    RECON_MAX_OPTIONS: Cap on reconciled / buyer option lists (default: 8, max: 8)
    RECON_BUYER_ISQ_COUNT: Number of buyer ISQs selected (default: 2)
    RECON_MEASUREMENT_TOLERANCE_MM: Measurement equality tolerance (default: 0.5)
    RECON_INCLUDE_TERTIARY: Match tertiary seller specs too (default: false)

    LOG_LEVEL: Root log level (default: INFO)
    LOG_FILE: Optional log file path (rotated)
    LOG_JSON: Emit JSON log lines (default: false)

    CORS_ORIGINS: Extra allowed origins for the API, comma-separated
    ENVIRONMENT: development / production (default: development)
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv

from ..reconciliation.synonym_tables import DEFAULT_THRESHOLDS, MatchingThresholds


# Load environment variables from .env file if present
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def get_env(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Get environment variable with optional default and required validation.

    Raises:
        ValueError: If required=True and variable is not set
    """
    value = os.getenv(key, default)
    if required and value is None:
        raise ValueError(f"Required environment variable '{key}' is not set")
    return value


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be an integer, got: {value}")


def get_env_float(key: str, default: float) -> float:
    """Get environment variable as float."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable '{key}' must be a float, got: {value}")


def get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class ReconciliationConfig:
    """Reconciliation engine limits."""

    max_options: int = field(default_factory=lambda: get_env_int(
        "RECON_MAX_OPTIONS", DEFAULT_THRESHOLDS.max_reconciled_options))
    buyer_isq_count: int = field(default_factory=lambda: get_env_int(
        "RECON_BUYER_ISQ_COUNT", DEFAULT_THRESHOLDS.buyer_isq_count))
    measurement_tolerance_mm: float = field(default_factory=lambda: get_env_float(
        "RECON_MEASUREMENT_TOLERANCE_MM", DEFAULT_THRESHOLDS.measurement_tolerance_mm))

    # Tertiary seller specs are excluded from matching unless enabled
    include_tertiary: bool = field(default_factory=lambda: get_env_bool("RECON_INCLUDE_TERTIARY", False))

    def __post_init__(self):
        """Validate configuration."""
        if self.max_options <= 0:
            raise ValueError("max_options must be positive")
        if self.max_options > DEFAULT_THRESHOLDS.max_reconciled_options:
            raise ValueError(
                f"max_options cannot exceed {DEFAULT_THRESHOLDS.max_reconciled_options}"
            )
        if self.buyer_isq_count < 0:
            raise ValueError("buyer_isq_count cannot be negative")
        if self.measurement_tolerance_mm < 0:
            raise ValueError("measurement_tolerance_mm cannot be negative")

    def to_thresholds(self) -> MatchingThresholds:
        return MatchingThresholds(
            max_reconciled_options=self.max_options,
            buyer_isq_count=self.buyer_isq_count,
            measurement_tolerance_mm=self.measurement_tolerance_mm,
            min_partial_token_length=DEFAULT_THRESHOLDS.min_partial_token_length,
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: get_env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: get_env("LOG_FILE"))

    # Structured logging
    json_logs: bool = field(default_factory=lambda: get_env_bool("LOG_JSON", False))


@dataclass
class ApiConfig:
    """HTTP API configuration."""

    cors_origins: List[str] = field(default_factory=lambda: [
        o.strip() for o in get_env("CORS_ORIGINS", "").split(",") if o.strip()
    ])


@dataclass
class Settings:
    """Main application settings container."""

    reconciliation: ReconciliationConfig = field(default_factory=ReconciliationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    api: ApiConfig = field(default_factory=ApiConfig)

    # Application metadata
    app_name: str = "isq-reconciler"
    app_version: str = "1.0.0"
    environment: str = field(default_factory=lambda: get_env("ENVIRONMENT", "development"))

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() in ("production", "prod")


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
