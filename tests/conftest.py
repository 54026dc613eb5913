"""Pytest configuration and shared fixtures.

This module provides common fixtures for the charforge test suite:
settings isolation, sample stats, and a small catalog of classes, feats
and equipment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from charforge.core.config import RulesSettings
from charforge.engine.character import Character
from charforge.models import (
    Ability,
    Attack,
    Catalog,
    ClassDefinition,
    ClassFeature,
    Equipment,
    Feat,
    Modifier,
)


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from charforge.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def rules() -> RulesSettings:
    """Rules with a short, known combat feat list."""
    return RulesSettings(
        starting_gold=200,
        combat_feats=["power-attack", "weapon-focus", "dodge"],
    )


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_base_stats() -> dict[str, int]:
    return {
        "strength": 16,
        "dexterity": 14,
        "constitution": 14,
        "intelligence": 10,
        "wisdom": 12,
        "charisma": 8,
        "armorClass": 0,
    }


@pytest.fixture
def character(sample_base_stats: dict[str, int], rules: RulesSettings) -> Character:
    """A level 0 character with 200 gold."""
    return Character(sample_base_stats, gold=200, name="Valeros", rules=rules)


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def fighter() -> ClassDefinition:
    """Fighter with a level 1 bonus feat, armor training at 3 and a
    selection-gated weapon training at 5."""
    return ClassDefinition(
        id="fighter",
        name="Fighter",
        hit_die=10,
        base_attack_bonus_progression="fast",
        saving_throw_progressions={"fortitude": "fast", "reflex": "slow", "will": "slow"},
        class_features={
            1: [ClassFeature(id="fighter-bonus-feat", name="Bonus Feat", level=1)],
            3: [
                ClassFeature(
                    id="armor-training-1",
                    name="Armor Training",
                    level=3,
                    modifiers=[
                        Modifier(
                            source="Armor Training",
                            target="armorClass",
                            bonus_type="armor-training",
                            value=1,
                            applicable_when={"armor_types": ["light", "medium", "heavy"]},
                        )
                    ],
                )
            ],
            5: [
                ClassFeature(
                    id="weapon-training-1",
                    name="Weapon Training",
                    level=5,
                    type="conditional",
                    requires_selection=True,
                    selection_label="Select a weapon group",
                    selectable_options=["blades-heavy", "bows"],
                    modifiers=[Modifier(source="Weapon Training", target="attack", value=1)],
                    abilities=[Ability(name="Weapon Mastery", action="free")],
                )
            ],
        },
    )


@pytest.fixture
def commoner() -> ClassDefinition:
    """A class with no features at all."""
    return ClassDefinition(
        id="commoner",
        name="Commoner",
        hit_die=6,
        base_attack_bonus_progression="slow",
    )


@pytest.fixture
def chain_shirt() -> Equipment:
    return Equipment(
        id="chain-shirt",
        name="Chain Shirt",
        slot="chest",
        cost=100,
        type="armor",
        group="light-armor",
        modifiers=[Modifier(source="Chain Shirt", target="armorClass", bonus_type="armor", value=4)],
    )


@pytest.fixture
def belt() -> Equipment:
    return Equipment(
        id="belt-of-strength",
        name="Belt of Giant Strength",
        slot="waist",
        cost=150,
        modifiers=[Modifier(source="Belt", target="strength", bonus_type="enhancement", value=2)],
    )


@pytest.fixture
def longsword() -> Equipment:
    return Equipment(
        id="longsword",
        name="Longsword",
        slot="weapon",
        cost=15,
        type="weapon",
        group="blades-heavy",
        attacks=[Attack(name="Longsword", damage={"dice": "1d8", "bonus": 0})],
        ability=Ability(name="Parry", action="swift"),
    )


@pytest.fixture
def feats() -> dict[str, Feat]:
    return {
        "power-attack": Feat(
            id="power-attack",
            name="Power Attack",
            prerequisites={"base_attack_bonus": 1, "stats": {"strength": 13}},
            modifiers=[Modifier(source="Power Attack", target="damage", value=2)],
        ),
        "weapon-focus": Feat(
            id="weapon-focus",
            name="Weapon Focus",
            prerequisites={"base_attack_bonus": 1},
            modifiers=[Modifier(source="Weapon Focus", target="attack", value=1)],
        ),
        "dodge": Feat(
            id="dodge",
            name="Dodge",
            prerequisites={"stats": {"dexterity": 13}},
            modifiers=[
                Modifier(source="Dodge", target="armorClass", bonus_type="dodge", value=1)
            ],
        ),
        "cleave": Feat(
            id="cleave",
            name="Cleave",
            prerequisites={"feats": ["power-attack"]},
        ),
        "toughness": Feat(
            id="toughness",
            name="Toughness",
            modifiers=[Modifier(source="Toughness", target="hitPoints", value=3)],
        ),
    }


@pytest.fixture
def catalog(
    fighter: ClassDefinition,
    commoner: ClassDefinition,
    feats: dict[str, Feat],
    chain_shirt: Equipment,
    belt: Equipment,
    longsword: Equipment,
) -> Catalog:
    return Catalog(
        classes={"fighter": fighter, "commoner": commoner},
        feats=feats,
        equipment={item.id: item for item in (chain_shirt, belt, longsword)},
    )
