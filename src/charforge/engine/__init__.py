"""Rules engine for charforge.

Submodules:
    resolver: Pure stat resolution with per-category stacking rules
    applicability: Context checks for conditional modifiers
    progression: Feat-slot grants, base attack bonus, saves, hit points
    character: The Character aggregate and its command interface

Example:
    >>> from charforge.engine import Character, resolve_stat
    >>> hero = Character({"strength": 10}, gold=200)
    >>> hero.add_modifier(Modifier(source="Belt", target="strength",
    ...                            bonus_type="enhancement", value=2))
    >>> hero.resolve_stat("strength").total
    12
"""

from __future__ import annotations

# =============================================================================
# Resolution
# =============================================================================
from charforge.engine.resolver import (
    NON_STACKING_BONUS_TYPES,
    BreakdownEntry,
    StatResult,
    ability_modifier,
    resolve_stat,
    stacks,
)
from charforge.engine.applicability import (
    ApplicabilityContext,
    is_applicable,
)

# =============================================================================
# Progression
# =============================================================================
from charforge.engine.progression import (
    base_attack_bonus_for,
    base_save_for,
    grants_base_feat_slot,
    hit_points_for_level,
)

# =============================================================================
# Aggregate
# =============================================================================
from charforge.engine.character import (
    Character,
    CharacterUpdateRequest,
    CharacterUpdateResult,
    Grant,
)


__all__ = [
    # Resolution
    "NON_STACKING_BONUS_TYPES",
    "BreakdownEntry",
    "StatResult",
    "ability_modifier",
    "resolve_stat",
    "stacks",
    "ApplicabilityContext",
    "is_applicable",
    # Progression
    "base_attack_bonus_for",
    "base_save_for",
    "grants_base_feat_slot",
    "hit_points_for_level",
    # Aggregate
    "Character",
    "CharacterUpdateRequest",
    "CharacterUpdateResult",
    "Grant",
]
