"""
Configuration management for GitFormat.

This module provides centralized configuration with:
- Environment-specific settings
- Type validation and defaults
- Decoder limits and batch error policy
- Logging configuration
"""

from typing import Dict, Any
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import BaseSettings as PydanticBaseSettings


class DecoderSettings(BaseSettings):
    """Format decoder configuration settings."""

    max_output_size: int = Field(
        default=64 * 1024 * 1024,
        description="Largest git output, in characters, the decoder will scan",
    )
    stop_on_error: bool = Field(
        default=True, description="Abort a batch on the first malformed record"
    )

    @field_validator("max_output_size")
    @classmethod
    def validate_max_output_size(cls, v):
        if v <= 0:
            raise ValueError("Maximum output size must be positive")
        return v


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class Settings(PydanticBaseSettings):
    """
    Main application settings with environment-specific configuration.

    Nested values are read from the environment with a ``__`` delimiter,
    e.g. ``DECODER__MAX_OUTPUT_SIZE=1048576`` or ``MONITORING__LOG_LEVEL=debug``.
    """

    app_name: str = Field(default="GitFormat", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Enable debug mode")

    decoder: DecoderSettings = Field(default_factory=DecoderSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        valid_environments = ["development", "testing", "staging", "production"]
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator("debug")
    @classmethod
    def validate_debug_mode(cls, v, info):
        if info.data.get("environment") == "production" and v:
            raise ValueError("Debug mode cannot be enabled in production")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration object

    Example:
        >>> settings = get_settings()
        >>> print(settings.decoder.max_output_size)
    """
    return Settings()


# Global settings instance
settings = get_settings()


def export_config() -> Dict[str, Any]:
    """
    Export the effective configuration for display.

    Returns:
        Dict[str, Any]: Configuration export
    """
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
        "debug": settings.debug,
        "decoder": {
            "max_output_size": settings.decoder.max_output_size,
            "stop_on_error": settings.decoder.stop_on_error,
        },
        "monitoring": {
            "log_level": settings.monitoring.log_level,
            "log_format": settings.monitoring.log_format,
        },
    }


if __name__ == "__main__":
    import json

    print("Configuration Export:")
    print(json.dumps(export_config(), indent=2))
