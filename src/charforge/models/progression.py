"""Progression models: classes, class features, levels, feats and feat slots.

Class definitions and feats are static catalog data and are frozen.
Feat slots are owned by a character and move from unassigned to assigned
exactly once.
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from charforge.models.base import CharforgeModel
from charforge.models.enums import (
    ApplicableType,
    ClassFeatureType,
    FeatSlotSource,
    Progression,
    SaveProgression,
    SavingThrow,
)
from charforge.models.equipment import Ability, Attack
from charforge.models.modifiers import Modifier, new_id


# =============================================================================
# Class Features & Definitions
# =============================================================================


class ClassFeature(CharforgeModel):
    """A capability a class grants at a specific level.

    A feature with ``requires_selection`` is inert until the player records
    one of ``selectable_options`` for it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    description: str = ""
    level: int = Field(ge=1)
    type: ClassFeatureType = ClassFeatureType.PASSIVE

    modifiers: list[Modifier] = Field(default_factory=list)
    abilities: list[Ability] = Field(default_factory=list)

    applicable_type: ApplicableType | None = None
    applicable_groups: list[str] = Field(default_factory=list)

    requires_selection: bool = False
    selection_label: str | None = None
    selectable_options: list[str] = Field(default_factory=list)


class SaveProgressions(CharforgeModel):
    model_config = ConfigDict(frozen=True)

    fortitude: SaveProgression = SaveProgression.SLOW
    reflex: SaveProgression = SaveProgression.SLOW
    will: SaveProgression = SaveProgression.SLOW

    def for_save(self, save: SavingThrow | str) -> str:
        return getattr(self, SavingThrow(save).value)


class ClassDefinition(CharforgeModel):
    """Static catalog entry for a character class.

    Attributes:
        id: Catalog identifier, e.g. ``"fighter"``.
        name: Display name.
        hit_die: Hit die size (10 for a d10).
        base_attack_bonus_progression: BAB speed tag.
        saving_throw_progressions: Save speed tags.
        class_features: Features keyed by the level that grants them.
        modifiers_per_level: Modifiers granted on every level of this class.
        attacks_per_level: Attacks granted on every level of this class.
        abilities_per_level: Abilities granted on every level of this class.
        feat_slots_per_level: Extra class feat slots per level of this class.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    hit_die: int = Field(default=8, ge=1)
    base_attack_bonus_progression: Progression = Progression.MEDIUM
    saving_throw_progressions: SaveProgressions = Field(default_factory=SaveProgressions)
    class_features: dict[int, list[ClassFeature]] = Field(default_factory=dict)
    modifiers_per_level: list[Modifier] = Field(default_factory=list)
    attacks_per_level: list[Attack] = Field(default_factory=list)
    abilities_per_level: list[Ability] = Field(default_factory=list)
    feat_slots_per_level: int = Field(default=0, ge=0)

    def features_at(self, level: int) -> list[ClassFeature]:
        """Return the features granted at exactly ``level``."""
        return list(self.class_features.get(level, []))


# =============================================================================
# Feats
# =============================================================================


class FeatPrerequisites(CharforgeModel):
    """Requirements a character must meet before taking a feat."""

    model_config = ConfigDict(frozen=True)

    level: int | None = None
    base_attack_bonus: int | None = None
    feats: list[str] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)


class Feat(CharforgeModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    description: str = ""
    prerequisites: FeatPrerequisites | None = None
    modifiers: list[Modifier] = Field(default_factory=list)
    attacks: list[Attack] = Field(default_factory=list)
    abilities: list[Ability] = Field(default_factory=list)


class FeatSlot(CharforgeModel):
    """An earned opportunity to select one feat.

    Attributes:
        id: Slot identifier.
        granted_at_level: Character level that granted the slot.
        source: Where the slot came from.
        feat_selected: The chosen feat id; None while unassigned.
        whitelist: Optional list of feat ids the slot may hold.
    """

    id: str = Field(default_factory=new_id)
    granted_at_level: int = Field(ge=1)
    source: FeatSlotSource = FeatSlotSource.BASE_LEVEL
    feat_selected: str | None = None
    whitelist: list[str] | None = None

    @property
    def is_assigned(self) -> bool:
        return self.feat_selected is not None

    def permits(self, feat_id: str) -> bool:
        """Check ``feat_id`` against the whitelist, if the slot has one."""
        return self.whitelist is None or feat_id in self.whitelist


# =============================================================================
# Character Levels
# =============================================================================


class CharacterLevel(CharforgeModel):
    """One entry of a character's append-only level history."""

    level_number: int = Field(ge=1)
    class_definition: ClassDefinition
    modifiers: list[Modifier] = Field(default_factory=list)
    attacks: list[Attack] = Field(default_factory=list)
    abilities: list[Ability] = Field(default_factory=list)
    feat_slots: list[FeatSlot] = Field(default_factory=list)

    @property
    def class_id(self) -> str:
        return self.class_definition.id


__all__ = [
    "CharacterLevel",
    "ClassDefinition",
    "ClassFeature",
    "Feat",
    "FeatPrerequisites",
    "FeatSlot",
    "SaveProgressions",
]
