"""Context-conditional applicability of modifiers.

A modifier with an ``applicable_when`` clause only contributes while the
character's current situation satisfies it. The evaluated policy is
armor presence:

- ``armor_types`` containing ``"none"``: applies only while no armor is
  equipped.
- ``armor_types`` naming any other type: applies only while armor is
  equipped. Light/medium/heavy are not told apart.

Weapon-group and situational requirements are not evaluated. Their checks
always pass and are kept as separate functions so a finer policy can
replace them without touching the armor rule.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from charforge.core.constants import NO_ARMOR
from charforge.models.equipment import Equipment
from charforge.models.modifiers import ApplicabilityCondition, Modifier


@dataclass(frozen=True)
class ApplicabilityContext:
    """Snapshot of the situation modifiers are checked against.

    Attributes:
        armor_equipped: Whether any item of type armor is worn.
        armor_groups: Groups of the worn armor items.
        weapon_groups: Groups of the wielded weapons.
        situations: Active situational flags.
    """

    armor_equipped: bool = False
    armor_groups: frozenset[str] = field(default_factory=frozenset)
    weapon_groups: frozenset[str] = field(default_factory=frozenset)
    situations: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_equipment(
        cls,
        items: Iterable[Equipment],
        situations: Iterable[str] = (),
    ) -> ApplicabilityContext:
        """Build a context by scanning equipped items."""
        items = list(items)
        armor = [item for item in items if item.is_armor]
        weapons = [item for item in items if item.type == "weapon"]
        return cls(
            armor_equipped=bool(armor),
            armor_groups=frozenset(item.group for item in armor if item.group),
            weapon_groups=frozenset(item.group for item in weapons if item.group),
            situations=frozenset(situations),
        )


def armor_requirement_met(
    condition: ApplicabilityCondition, context: ApplicabilityContext
) -> bool:
    if not condition.armor_types:
        return True
    if NO_ARMOR in condition.armor_types:
        return not context.armor_equipped
    return context.armor_equipped


def weapon_group_requirement_met(
    condition: ApplicabilityCondition, context: ApplicabilityContext
) -> bool:
    """Extension point. Weapon-group matching is not evaluated yet."""
    return True


def situation_requirement_met(
    condition: ApplicabilityCondition, context: ApplicabilityContext
) -> bool:
    """Extension point. Situational flags are not evaluated yet."""
    return True


def is_applicable(modifier: Modifier, context: ApplicabilityContext) -> bool:
    """Check whether ``modifier`` applies in ``context``.

    Modifiers without an ``applicable_when`` clause always apply. Activity
    and targeting are checked by the caller.
    """
    condition = modifier.applicable_when
    if condition is None:
        return True
    return (
        armor_requirement_met(condition, context)
        and weapon_group_requirement_met(condition, context)
        and situation_requirement_met(condition, context)
    )


__all__ = [
    "ApplicabilityContext",
    "armor_requirement_met",
    "is_applicable",
    "situation_requirement_met",
    "weapon_group_requirement_met",
]
