"""Tests for level progression math."""

from __future__ import annotations

import pytest

from charforge.engine.progression import (
    base_attack_bonus_for,
    base_save_for,
    grants_base_feat_slot,
    hit_points_for_level,
    total_base_attack_bonus,
    total_base_save,
    total_hit_points,
)
from charforge.models import CharacterLevel, ClassDefinition


class TestFeatSlotGrants:
    def test_default_interval(self) -> None:
        granted = [level for level in range(1, 13) if grants_base_feat_slot(level)]
        assert granted == [1, 4, 7, 10]

    def test_custom_interval(self) -> None:
        granted = [level for level in range(1, 10) if grants_base_feat_slot(level, 2)]
        assert granted == [1, 3, 5, 7, 9]


class TestBaseAttackBonus:
    @pytest.mark.parametrize(
        ("progression", "level", "expected"),
        [
            ("fast", 1, 1),
            ("fast", 20, 20),
            ("medium", 1, 0),
            ("medium", 4, 3),
            ("medium", 20, 15),
            ("slow", 1, 0),
            ("slow", 5, 2),
            ("slow", 20, 10),
        ],
    )
    def test_progressions(self, progression: str, level: int, expected: int) -> None:
        assert base_attack_bonus_for(progression, level) == expected


class TestBaseSaves:
    @pytest.mark.parametrize(
        ("progression", "level", "expected"),
        [
            ("fast", 0, 0),
            ("fast", 1, 2),
            ("fast", 4, 4),
            ("slow", 0, 0),
            ("slow", 1, 0),
            ("slow", 3, 1),
            ("slow", 20, 6),
        ],
    )
    def test_progressions(self, progression: str, level: int, expected: int) -> None:
        assert base_save_for(progression, level) == expected


class TestHitPoints:
    def test_first_level_takes_full_die(self) -> None:
        assert hit_points_for_level(10, 2, first_level=True) == 12

    def test_later_levels_take_average(self) -> None:
        assert hit_points_for_level(10, 2, first_level=False) == 8
        assert hit_points_for_level(6, 0, first_level=False) == 4

    def test_minimum_one(self) -> None:
        assert hit_points_for_level(4, -5, first_level=False) == 1


class TestTotals:
    """Tests for totals across a multiclass level history."""

    @pytest.fixture
    def levels(self, fighter: ClassDefinition, commoner: ClassDefinition) -> list[CharacterLevel]:
        history = [(1, fighter), (2, fighter), (3, commoner), (4, commoner)]
        return [
            CharacterLevel(level_number=number, class_definition=definition)
            for number, definition in history
        ]

    def test_base_attack_bonus_per_class(self, levels: list[CharacterLevel]) -> None:
        # fighter 2 (fast) + commoner 2 (slow)
        assert total_base_attack_bonus(levels) == 2 + 1

    def test_base_save_per_class(self, levels: list[CharacterLevel]) -> None:
        assert total_base_save(levels, "fortitude") == 3 + 0
        assert total_base_save(levels, "will") == 0

    def test_hit_points(self, levels: list[CharacterLevel]) -> None:
        # d10 full, d10 average, then two d6 averages, con +1 each
        assert total_hit_points(levels, 1) == 11 + 7 + 5 + 5

    def test_empty_history(self) -> None:
        assert total_base_attack_bonus([]) == 0
        assert total_base_save([], "reflex") == 0
        assert total_hit_points([], 3) == 0
