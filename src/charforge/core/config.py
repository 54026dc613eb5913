"""Configuration management for charforge.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from charforge.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.starting_gold
    200

Environment Variables:
    CHARFORGE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CHARFORGE_JSON_LOGS: Emit JSON log lines instead of console output
    CHARFORGE_RULES_STARTING_GOLD: Gold a new character starts with
    CHARFORGE_RULES_FEAT_INTERVAL: Levels between base feat slots
    CHARFORGE_RULES_BONUS_FEAT_MARKER: Feature id substring for bonus feats
    CHARFORGE_RULES_COMBAT_FEATS: JSON list of feat ids allowed in bonus slots
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from charforge.core.constants import (
    BASE_ARMOR_CLASS,
    BONUS_FEAT_MARKER,
    DEFAULT_COMBAT_FEATS,
    DEFAULT_STARTING_GOLD,
    FEAT_SLOT_INTERVAL,
)
from charforge.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """House-rule knobs for the character rules engine.

    Attributes:
        starting_gold: Gold a freshly created character holds.
        base_armor_class: Armor class before dexterity and bonuses.
        feat_interval: A base feat slot is granted at level 1 and every
            ``feat_interval`` levels after it.
        bonus_feat_marker: Substring of a class feature id that grants an
            extra whitelisted feat slot.
        combat_feats: Feat ids permitted in a bonus combat feat slot.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARFORGE_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    starting_gold: int = Field(
        default=DEFAULT_STARTING_GOLD,
        ge=0,
        description="Gold a new character starts with",
    )
    base_armor_class: int = Field(
        default=BASE_ARMOR_CLASS,
        description="Armor class before dexterity and bonuses",
    )
    feat_interval: int = Field(
        default=FEAT_SLOT_INTERVAL,
        description="Levels between base feat slots",
    )
    bonus_feat_marker: str = Field(
        default=BONUS_FEAT_MARKER,
        description="Class feature id substring that grants a bonus feat",
    )
    combat_feats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_COMBAT_FEATS),
        description="Feat ids allowed in bonus combat feat slots",
    )

    @field_validator("feat_interval", mode="after")
    @classmethod
    def validate_feat_interval(cls, value: int) -> int:
        """Reject intervals that would never grant a second slot.

        Raises:
            ConfigurationError: If the interval is below 1.
        """
        if value < 1:
            raise ConfigurationError(
                f"feat_interval must be at least 1, got {value}",
                config_key="feat_interval",
            )
        return value

    @field_validator("bonus_feat_marker", mode="after")
    @classmethod
    def validate_marker(cls, value: str) -> str:
        """Reject a blank marker, which would match every feature id."""
        if not value.strip():
            raise ConfigurationError(
                "bonus_feat_marker must not be blank",
                config_key="bonus_feat_marker",
            )
        return value


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines.
        rules: Rules engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="charforge",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
