"""Pydantic V2 schemas for charforge.

Submodules:
    enums: Enumeration types (BonusType, EquipmentSlot, Progression, ...)
    modifiers: Modifier, ApplicabilityCondition, ModifierInput
    equipment: Equipment, Attack, Ability
    progression: ClassDefinition, ClassFeature, Feat, FeatSlot, CharacterLevel
    catalog: Validated catalog of classes, feats and equipment
    records: Persisted character representation

Example:
    >>> from charforge.models import Modifier, BonusType
    >>> belt = Modifier(source="Belt", target="strength",
    ...                 bonus_type=BonusType.ENHANCEMENT, value=2)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from charforge.models.enums import (
    ActionType,
    ApplicableType,
    BonusType,
    ClassFeatureType,
    EquipmentSlot,
    EquipmentType,
    FeatSlotSource,
    Progression,
    SaveProgression,
    SavingThrow,
    TargetType,
)

# =============================================================================
# Modifiers & Equipment
# =============================================================================
from charforge.models.modifiers import (
    ApplicabilityCondition,
    Modifier,
    ModifierInput,
    new_id,
    parse_modifier_input,
)
from charforge.models.equipment import Ability, Attack, Damage, Equipment

# =============================================================================
# Progression
# =============================================================================
from charforge.models.progression import (
    CharacterLevel,
    ClassDefinition,
    ClassFeature,
    Feat,
    FeatPrerequisites,
    FeatSlot,
    SaveProgressions,
)

# =============================================================================
# Catalog & Records
# =============================================================================
from charforge.models.catalog import Catalog
from charforge.models.records import CharacterRecord, CharacterSummary, StoredCharacter


__all__ = [
    # === Enumerations ===
    "ActionType",
    "ApplicableType",
    "BonusType",
    "ClassFeatureType",
    "EquipmentSlot",
    "EquipmentType",
    "FeatSlotSource",
    "Progression",
    "SaveProgression",
    "SavingThrow",
    "TargetType",
    # === Modifiers & Equipment ===
    "ApplicabilityCondition",
    "Modifier",
    "ModifierInput",
    "new_id",
    "parse_modifier_input",
    "Ability",
    "Attack",
    "Damage",
    "Equipment",
    # === Progression ===
    "CharacterLevel",
    "ClassDefinition",
    "ClassFeature",
    "Feat",
    "FeatPrerequisites",
    "FeatSlot",
    "SaveProgressions",
    # === Catalog & Records ===
    "Catalog",
    "CharacterRecord",
    "CharacterSummary",
    "StoredCharacter",
]
