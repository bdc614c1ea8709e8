"""Configuration management with pydantic-settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from introspector.models import Environment


class IntrospectorSettings(BaseSettings):
    """introspector application settings loaded from environment variables.

    All settings use the INTROSPECTOR_ prefix for environment variables.
    """

    # Capture configuration
    environment: Environment = Field(
        default=Environment.HEADLESS,
        description="Host environment tag recorded on new sessions",
    )
    player_handle: str = Field(
        default="introspect-player",
        description="Operator handle recorded on new sessions",
    )

    # Governance configuration
    patterns_file: Path | None = Field(
        default=None,
        description="YAML file replacing the built-in governance pattern set",
    )
    policy_version: str = Field(
        default="gov-policy-v3.1.0",
        description="Policy version stamped on governance summaries",
    )
    reviewer_role: str = Field(
        default="auto-introspect-harvester-py",
        description="Reviewer role stamped on governance summaries",
    )

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log output format: console or json",
    )

    model_config = SettingsConfigDict(
        env_prefix="INTROSPECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
_settings: IntrospectorSettings | None = None


def get_settings() -> IntrospectorSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = IntrospectorSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
