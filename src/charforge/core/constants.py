"""Rules constants for charforge.

This module defines the fixed numbers of the d20-style rules the engine
implements. Values that a table may want to house-rule are mirrored as
defaults in ``charforge.core.config.RulesSettings``.
"""

from __future__ import annotations

# =============================================================================
# Ability Scores & Armor Class
# =============================================================================

ABILITY_SCORE_BASELINE = 10
"""Score at which an ability modifier is zero."""

BASE_ARMOR_CLASS = 10
"""Universal armor class before dexterity and bonuses."""

ARMOR_CLASS_STAT = "armorClass"
"""Stat key whose bonus portion is layered onto the armor class formula."""

DEXTERITY_STAT = "dexterity"
CONSTITUTION_STAT = "constitution"

# =============================================================================
# Progression
# =============================================================================

FEAT_SLOT_INTERVAL = 3
"""A base feat slot is earned at level 1 and every this many levels after."""

FIRST_LEVEL = 1

GOOD_SAVE_BASE = 2
"""Flat bonus a fast-progression save starts with."""

# =============================================================================
# Class Features
# =============================================================================

BONUS_FEAT_MARKER = "bonus-feat"
"""Substring in a class feature id that signals a bonus combat feat grant."""

DEFAULT_COMBAT_FEATS: tuple[str, ...] = (
    "power-attack",
    "cleave",
    "weapon-focus",
    "weapon-specialization",
    "dodge",
    "mobility",
    "improved-initiative",
    "combat-reflexes",
    "point-blank-shot",
    "precise-shot",
    "rapid-shot",
    "two-weapon-fighting",
    "combat-expertise",
    "improved-trip",
    "improved-disarm",
    "blind-fight",
)
"""Feat ids a bonus combat feat slot may hold unless configured otherwise."""

# =============================================================================
# Equipment & Currency
# =============================================================================

NO_ARMOR = "none"
"""Armor-type sentinel meaning the wearer must be unarmored."""

DEFAULT_STARTING_GOLD = 200
"""Starting gold for a new character, in gold pieces."""


__all__ = [
    "ABILITY_SCORE_BASELINE",
    "BASE_ARMOR_CLASS",
    "ARMOR_CLASS_STAT",
    "DEXTERITY_STAT",
    "CONSTITUTION_STAT",
    "FEAT_SLOT_INTERVAL",
    "FIRST_LEVEL",
    "GOOD_SAVE_BASE",
    "BONUS_FEAT_MARKER",
    "DEFAULT_COMBAT_FEATS",
    "NO_ARMOR",
    "DEFAULT_STARTING_GOLD",
]
