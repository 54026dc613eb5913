"""Level progression math.

Static rules for feat-slot grants, base attack bonus, base saves and hit
points, computed from the speed tags on a class definition.
"""

from __future__ import annotations

from collections.abc import Iterable

from charforge.core.constants import FEAT_SLOT_INTERVAL, FIRST_LEVEL, GOOD_SAVE_BASE
from charforge.models.enums import Progression, SaveProgression, SavingThrow
from charforge.models.progression import CharacterLevel, ClassDefinition


def grants_base_feat_slot(level_number: int, interval: int = FEAT_SLOT_INTERVAL) -> bool:
    """Check whether reaching ``level_number`` earns a base feat slot.

    One slot at first level and one every ``interval`` levels after it
    (1, 4, 7, 10, ... for the default interval of 3).
    """
    return level_number == FIRST_LEVEL or (level_number - 1) % interval == 0


def base_attack_bonus_for(progression: str, class_level: int) -> int:
    """Base attack bonus for ``class_level`` levels of one class."""
    if progression == Progression.FAST:
        return class_level
    if progression == Progression.MEDIUM:
        return class_level * 3 // 4
    return class_level // 2


def base_save_for(progression: str, class_level: int) -> int:
    """Base saving throw bonus for ``class_level`` levels of one class."""
    if class_level <= 0:
        return 0
    if progression == SaveProgression.FAST:
        return GOOD_SAVE_BASE + class_level // 2
    return class_level // 3


def class_levels(levels: Iterable[CharacterLevel]) -> dict[str, tuple[ClassDefinition, int]]:
    """Count levels per class, keeping first-seen class order."""
    counts: dict[str, tuple[ClassDefinition, int]] = {}
    for level in levels:
        definition, count = counts.get(level.class_id, (level.class_definition, 0))
        counts[level.class_id] = (definition, count + 1)
    return counts


def total_base_attack_bonus(levels: Iterable[CharacterLevel]) -> int:
    return sum(
        base_attack_bonus_for(definition.base_attack_bonus_progression, count)
        for definition, count in class_levels(levels).values()
    )


def total_base_save(levels: Iterable[CharacterLevel], save: SavingThrow | str) -> int:
    return sum(
        base_save_for(definition.saving_throw_progressions.for_save(save), count)
        for definition, count in class_levels(levels).values()
    )


def hit_points_for_level(hit_die: int, con_mod: int, *, first_level: bool) -> int:
    """Hit points gained on one level.

    The first character level takes the full die; later levels take the
    die average rounded up. At least 1 hit point is always gained.
    """
    from_die = hit_die if first_level else hit_die // 2 + 1
    return max(1, from_die + con_mod)


def total_hit_points(levels: Iterable[CharacterLevel], con_mod: int) -> int:
    return sum(
        hit_points_for_level(
            level.class_definition.hit_die,
            con_mod,
            first_level=index == 0,
        )
        for index, level in enumerate(levels)
    )


__all__ = [
    "base_attack_bonus_for",
    "base_save_for",
    "class_levels",
    "grants_base_feat_slot",
    "hit_points_for_level",
    "total_base_attack_bonus",
    "total_base_save",
    "total_hit_points",
]
