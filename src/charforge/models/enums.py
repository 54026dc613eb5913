"""Enumeration types for charforge.

All enums are ``StrEnum`` so they serialize to their plain string values
and compare equal to them.
"""

from __future__ import annotations

from enum import StrEnum


class BonusType(StrEnum):
    """Bonus categories accepted at the modifier-creation boundary.

    Whether a category stacks is decided by the resolver, not by this
    enum: only the named non-stacking categories take the best value,
    everything else (including categories outside this enum that arrive
    through catalog data) stacks.
    """

    UNTYPED = "untyped"
    ENHANCEMENT = "enhancement"
    MORALE = "morale"
    COMPETENCE = "competence"
    LUCK = "luck"
    DODGE = "dodge"
    CIRCUMSTANCE = "circumstance"
    RACIAL = "racial"
    ARMOR_TRAINING = "armor-training"


class EquipmentSlot(StrEnum):
    """Fixed body and gear positions. Each holds at most one item."""

    HEAD = "head"
    NECK = "neck"
    SHOULDERS = "shoulders"
    CHEST = "chest"
    HANDS = "hands"
    RING1 = "ring1"
    RING2 = "ring2"
    WAIST = "waist"
    LEGS = "legs"
    FEET = "feet"
    WEAPON = "weapon"
    OFFHAND = "offhand"
    SHOULDERS_CLOAK = "shoulders_cloak"


class EquipmentType(StrEnum):
    """Equipment category used by armor-presence checks."""

    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"


class ActionType(StrEnum):
    """Action economy cost of an attack or ability."""

    STANDARD = "standard"
    MOVE = "move"
    SWIFT = "swift"
    FREE = "free"


class TargetType(StrEnum):
    ENEMY = "enemy"
    AREA = "area"
    SELF = "self"


class FeatSlotSource(StrEnum):
    """Where a feat slot came from."""

    BASE_LEVEL = "baseLevel"
    CLASS_LEVEL = "classLevel"
    OTHER = "other"


class ClassFeatureType(StrEnum):
    PASSIVE = "passive"
    ACTIVE = "active"
    CONDITIONAL = "conditional"


class ApplicableType(StrEnum):
    """What a conditional class feature keys off."""

    WEAPON = "weapon"
    ARMOR = "armor"
    WEAPON_GROUP = "weaponGroup"
    ARMOR_TYPE = "armorType"


class Progression(StrEnum):
    """Base attack bonus progression speed."""

    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"


class SaveProgression(StrEnum):
    """Saving throw progression speed."""

    FAST = "fast"
    SLOW = "slow"


class SavingThrow(StrEnum):
    FORTITUDE = "fortitude"
    REFLEX = "reflex"
    WILL = "will"


__all__ = [
    "BonusType",
    "EquipmentSlot",
    "EquipmentType",
    "ActionType",
    "TargetType",
    "FeatSlotSource",
    "ClassFeatureType",
    "ApplicableType",
    "Progression",
    "SaveProgression",
    "SavingThrow",
]
