"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        CharforgeError: Base exception for all application errors.
        ValidationError: Malformed boundary input.
        DomainError: Rule violations against current character state.
        NotFoundError: Unknown identifiers.

    Configuration:
        Settings: Main application settings class.
        RulesSettings: House-rule knobs for the rules engine.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        character_context: Tag a block of log entries with a character id.
"""

from __future__ import annotations

from charforge.core.config import (
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from charforge.core.exceptions import (
    CharforgeError,
    ClassFeatureSelectionError,
    ConfigurationError,
    DomainError,
    FeatNotAllowedError,
    FeatPrerequisiteError,
    InsufficientGoldError,
    InvalidGoldAmountError,
    NotFoundError,
    SlotOccupiedError,
    ValidationError,
)
from charforge.core.logging import (
    bind_context,
    character_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Exceptions
    "CharforgeError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "DomainError",
    "SlotOccupiedError",
    "InsufficientGoldError",
    "InvalidGoldAmountError",
    "FeatNotAllowedError",
    "FeatPrerequisiteError",
    "ClassFeatureSelectionError",
    # Configuration
    "Settings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "character_context",
    "clear_context",
]
