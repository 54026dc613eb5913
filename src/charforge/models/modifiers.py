"""Modifier models: the atomic unit of a bonus.

A Modifier says who grants a bonus, what stat it targets, which bonus
category it belongs to, how large it is, whether it is currently active and
optionally under what circumstances it applies.

``ModifierInput`` is the boundary shape callers submit to create a
modifier. It is strict where ``Modifier`` is lenient: catalog data may carry
any category string, but user input must name a known ``BonusType``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self
from uuid import uuid4

from pydantic import (
    AliasChoices,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError as PydanticValidationError,
    model_validator,
)

from charforge.core.exceptions import ValidationError
from charforge.models.base import CharforgeModel
from charforge.models.enums import BonusType


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return uuid4().hex


class ApplicabilityCondition(CharforgeModel):
    """Circumstances under which a modifier applies.

    Attributes:
        armor_types: Required armor state. ``"none"`` means unarmored; any
            other entry means some armor must be worn.
        weapon_groups: Weapon groups the bonus is limited to.
        situations: Situational flags (e.g. ``"fear"``).
    """

    model_config = ConfigDict(frozen=True)

    armor_types: list[str] = Field(default_factory=list)
    weapon_groups: list[str] = Field(default_factory=list)
    situations: list[str] = Field(default_factory=list)


class Modifier(CharforgeModel):
    """A named, sourced, signed adjustment to a stat.

    Attributes:
        id: Unique identifier within the owning character.
        name: Display name; defaults to ``"<source> (<target>)"``.
        source: Free-text attribution ("Belt of Giant Strength").
        target: Stat key, or None for a broadly applicable bonus.
        bonus_type: Bonus category governing stacking.
        value: Signed integer adjustment.
        active: Inactive modifiers never contribute.
        applicable_when: Optional applicability condition.
        condition: Free-text note about when the bonus applies. Not evaluated.
    """

    id: str = Field(default_factory=new_id)
    name: str = ""
    source: str
    target: str | None = None
    bonus_type: str = Field(
        default=BonusType.UNTYPED.value,
        validation_alias=AliasChoices("bonus_type", "bonusType", "type"),
        serialization_alias="bonusType",
    )
    value: int
    active: bool = True
    applicable_when: ApplicabilityCondition | None = None
    condition: str | None = None

    @model_validator(mode="before")
    @classmethod
    def default_name(cls, data: Any) -> Any:
        """Derive a display name from source and target when none is given."""
        if isinstance(data, Mapping) and not data.get("name"):
            data = dict(data)
            source = data.get("source", "")
            target = data.get("target")
            data["name"] = f"{source} ({target})" if target else str(source)
        return data

    def applies_to(self, stat_name: str) -> bool:
        """Check whether this modifier targets ``stat_name`` or every stat."""
        return self.target is None or self.target == stat_name

    def with_fresh_id(self) -> Self:
        """Return an independent copy carrying a new identifier.

        Modifiers are owned by exactly one character, so catalog modifiers
        are copied on attachment rather than shared.
        """
        return self.model_copy(update={"id": new_id()}, deep=True)


class ModifierInput(CharforgeModel):
    """Boundary payload for creating a modifier.

    Attributes:
        source: Who grants the bonus. Required, non-blank.
        target: Stat key. Required, non-blank.
        bonus_type: Must be a ``BonusType`` member.
        value: Integer value. Booleans and numeric strings are rejected.
        active: Defaults to True.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    bonus_type: BonusType
    value: StrictInt
    active: bool = True

    def to_modifier(self) -> Modifier:
        """Build an owned Modifier from this payload."""
        return Modifier(
            source=self.source,
            target=self.target,
            bonus_type=self.bonus_type,
            value=self.value,
            active=self.active,
        )


def parse_modifier_input(payload: Mapping[str, Any]) -> ModifierInput:
    """Validate a raw modifier-creation payload.

    Args:
        payload: Mapping in the boundary shape
            ``{source, target, bonusType, value, active?}``.

    Returns:
        The validated input model.

    Raises:
        ValidationError: If a field is missing, non-numeric or names an
            unknown bonus category.
    """
    try:
        return ModifierInput.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"]) or None
        invalid_value = first.get("input")
        raise ValidationError(
            f"Invalid modifier input: {first['msg']}",
            field_name=field_name,
            invalid_value=invalid_value if not isinstance(invalid_value, Mapping) else None,
            details={"error_count": exc.error_count()},
        ) from exc


__all__ = [
    "ApplicabilityCondition",
    "Modifier",
    "ModifierInput",
    "new_id",
    "parse_modifier_input",
]
