"""Custom exception hierarchy for the charforge rules engine.

This module defines the exception taxonomy used by the character aggregate
and its boundary helpers. All exceptions inherit from CharforgeError,
enabling unified error handling at the application boundary while
preserving rule-specific context in ``details``.

The three families are:

- ValidationError: malformed input at the boundary.
- DomainError: a rule violation given the current character state. A
  DomainError always leaves the aggregate exactly as it was.
- NotFoundError: a reference to an unknown character, slot, feature or
  catalog entry.

Example:
    >>> from charforge.core.exceptions import InsufficientGoldError
    >>> raise InsufficientGoldError("Cannot afford item", required=150, available=50)
"""

from __future__ import annotations

from typing import Any


class CharforgeError(Exception):
    """Base exception for all charforge errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(CharforgeError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(CharforgeError):
    """Raised when boundary input fails validation.

    This covers missing required fields, non-numeric values and
    unrecognized bonus categories. No state is changed when it is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


# =============================================================================
# Lookup Exceptions
# =============================================================================


class NotFoundError(CharforgeError):
    """Raised when an operation references an unknown identifier."""

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        identifier: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not-found error with lookup context.

        Args:
            message: Human-readable error description.
            resource: Kind of resource looked up (character, feat_slot, ...).
            identifier: The identifier that could not be resolved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if resource:
            combined_details["resource"] = resource
        if identifier is not None:
            combined_details["identifier"] = identifier
        super().__init__(message, details=combined_details)


# =============================================================================
# Domain Rule Exceptions
# =============================================================================


class DomainError(CharforgeError):
    """Base exception for rule violations against the current character state.

    Raised synchronously at the point of violation. The aggregate is left
    exactly as it was before the call.
    """


class SlotOccupiedError(DomainError):
    """Raised when equipping into a slot that already holds an item."""

    def __init__(
        self,
        message: str,
        *,
        slot: str | None = None,
        occupant_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize slot error with slot context.

        Args:
            message: Human-readable error description.
            slot: The equipment slot that is occupied.
            occupant_id: Identifier of the item currently in the slot.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if slot:
            combined_details["slot"] = slot
        if occupant_id:
            combined_details["occupant_id"] = occupant_id
        super().__init__(message, details=combined_details)


class InsufficientGoldError(DomainError):
    """Raised when a purchase or subtraction exceeds the gold balance."""

    def __init__(
        self,
        message: str,
        *,
        required: int | None = None,
        available: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize gold error with balance context.

        Args:
            message: Human-readable error description.
            required: Amount of gold the operation needs.
            available: Current gold balance.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if required is not None:
            combined_details["required"] = required
        if available is not None:
            combined_details["available"] = available
        super().__init__(message, details=combined_details)


class InvalidGoldAmountError(DomainError):
    """Raised when a gold operation receives a negative amount."""

    def __init__(
        self,
        message: str,
        *,
        amount: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if amount is not None:
            combined_details["amount"] = amount
        super().__init__(message, details=combined_details)


class FeatNotAllowedError(DomainError):
    """Raised when a feat selection falls outside a slot's whitelist."""

    def __init__(
        self,
        message: str,
        *,
        slot_id: str | None = None,
        feat_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize feat error with slot context.

        Args:
            message: Human-readable error description.
            slot_id: The feat slot being assigned.
            feat_id: The rejected feat.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if slot_id:
            combined_details["slot_id"] = slot_id
        if feat_id:
            combined_details["feat_id"] = feat_id
        super().__init__(message, details=combined_details)


class FeatPrerequisiteError(DomainError):
    """Raised when a character does not meet a feat's prerequisites."""

    def __init__(
        self,
        message: str,
        *,
        feat_id: str | None = None,
        unmet: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if feat_id:
            combined_details["feat_id"] = feat_id
        if unmet:
            combined_details["unmet"] = unmet
        super().__init__(message, details=combined_details)


class ClassFeatureSelectionError(DomainError):
    """Raised when a class feature choice cannot be recorded.

    The feature may be unknown to the character, may not require a
    selection, or the option may not be one of its declared choices.
    """

    def __init__(
        self,
        message: str,
        *,
        feature_id: str | None = None,
        option: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize selection error with feature context.

        Args:
            message: Human-readable error description.
            feature_id: The class feature the selection targets.
            option: The rejected option.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if feature_id:
            combined_details["feature_id"] = feature_id
        if option:
            combined_details["option"] = option
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "CharforgeError",
    # Configuration & validation
    "ConfigurationError",
    "ValidationError",
    # Lookup
    "NotFoundError",
    # Domain rules
    "DomainError",
    "SlotOccupiedError",
    "InsufficientGoldError",
    "InvalidGoldAmountError",
    "FeatNotAllowedError",
    "FeatPrerequisiteError",
    "ClassFeatureSelectionError",
]
