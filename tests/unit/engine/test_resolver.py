"""Tests for the stat resolver and its stacking rules."""

from __future__ import annotations

import pytest

from charforge.engine.resolver import (
    NON_STACKING_BONUS_TYPES,
    ability_modifier,
    resolve_stat,
    stacks,
)
from charforge.models import Modifier


def _mod(source: str, bonus_type: str, value: int, *, active: bool = True) -> Modifier:
    return Modifier(
        source=source,
        target="strength",
        bonus_type=bonus_type,
        value=value,
        active=active,
    )


class TestStackingPolicy:
    """Tests for which categories stack."""

    @pytest.mark.parametrize("bonus_type", ["enhancement", "morale", "competence", "luck"])
    def test_named_categories_do_not_stack(self, bonus_type: str) -> None:
        assert bonus_type in NON_STACKING_BONUS_TYPES
        assert not stacks(bonus_type)

    @pytest.mark.parametrize(
        "bonus_type",
        ["untyped", "dodge", "circumstance", "racial", "armor-training", "sacred", "armor"],
    )
    def test_everything_else_stacks(self, bonus_type: str) -> None:
        assert stacks(bonus_type)


class TestResolveStat:
    """Tests for resolve_stat."""

    def test_no_modifiers(self) -> None:
        result = resolve_stat(14, [])

        assert result.total == 14
        assert result.breakdown == []
        assert result.bonus == 0

    def test_enhancement_best_of(self) -> None:
        """Test that only the best enhancement bonus counts."""
        result = resolve_stat(10, [_mod("Belt", "enhancement", 2), _mod("Potion", "enhancement", 1)])

        assert result.total == 12
        assert len(result.breakdown) == 1
        assert result.breakdown[0].source == "Belt"
        assert result.breakdown[0].bonus_type == "enhancement"
        assert result.breakdown[0].value == 2

    def test_best_of_independent_of_order(self) -> None:
        result = resolve_stat(10, [_mod("Potion", "enhancement", 1), _mod("Belt", "enhancement", 2)])

        assert result.total == 12
        assert [entry.source for entry in result.breakdown] == ["Belt"]

    def test_dodge_stacks(self) -> None:
        result = resolve_stat(0, [_mod("Dodge", "dodge", 2), _mod("Haste", "dodge", 1)])

        assert result.total == 3
        assert [(entry.source, entry.value) for entry in result.breakdown] == [
            ("Dodge", 2),
            ("Haste", 1),
        ]

    def test_tie_first_wins(self) -> None:
        result = resolve_stat(10, [_mod("A", "enhancement", 2), _mod("B", "enhancement", 2)])

        assert result.total == 12
        assert [entry.source for entry in result.breakdown] == ["A"]

    def test_inactive_discarded(self) -> None:
        result = resolve_stat(
            10,
            [_mod("Belt", "enhancement", 4, active=False), _mod("Potion", "enhancement", 1)],
        )

        assert result.total == 11
        assert [entry.source for entry in result.breakdown] == ["Potion"]

    def test_unknown_category_stacks(self) -> None:
        result = resolve_stat(0, [_mod("Shrine", "sacred", 1), _mod("Altar", "sacred", 1)])
        assert result.total == 2

    def test_negative_best_of_takes_highest(self) -> None:
        result = resolve_stat(10, [_mod("Curse", "luck", -3), _mod("Omen", "luck", -1)])

        assert result.total == 9
        assert [entry.source for entry in result.breakdown] == ["Omen"]

    def test_mixed_categories(self) -> None:
        """Test stacking and non-stacking buckets combine."""
        modifiers = [
            _mod("Belt", "enhancement", 2),
            _mod("Rage", "morale", 2),
            _mod("Heroism", "morale", 1),
            _mod("Bull", "untyped", 1),
            _mod("Ring", "enhancement", 1),
            _mod("Training", "untyped", 1),
        ]

        result = resolve_stat(10, modifiers)

        assert result.total == 10 + 2 + 2 + 1 + 1
        assert [entry.source for entry in result.breakdown] == ["Belt", "Rage", "Bull", "Training"]
        assert result.bonus == 6

    @pytest.mark.parametrize("values", [[1], [1, 2], [3, -1, 2], [5, 5, 5, 5]])
    def test_stacking_is_additive(self, values: list[int]) -> None:
        modifiers = [_mod(f"Source {i}", "circumstance", v) for i, v in enumerate(values)]
        assert resolve_stat(7, modifiers).total == 7 + sum(values)

    @pytest.mark.parametrize("values", [[1], [1, 2], [3, -1, 2], [-4, -2]])
    def test_non_stacking_is_best_of(self, values: list[int]) -> None:
        modifiers = [_mod(f"Source {i}", "competence", v) for i, v in enumerate(values)]
        assert resolve_stat(7, modifiers).total == 7 + max(values)

    def test_inputs_not_mutated(self) -> None:
        modifiers = [_mod("Belt", "enhancement", 2), _mod("Potion", "enhancement", 1)]
        before = [modifier.model_copy() for modifier in modifiers]

        resolve_stat(10, modifiers)
        resolve_stat(10, modifiers)

        assert modifiers == before

    def test_boundary_dump(self) -> None:
        result = resolve_stat(10, [_mod("Belt", "enhancement", 2)])

        assert result.model_dump(by_alias=True) == {
            "total": 12,
            "breakdown": [{"source": "Belt", "bonusType": "enhancement", "value": 2}],
        }


class TestAbilityModifier:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [(1, -5), (7, -2), (9, -1), (10, 0), (11, 0), (12, 1), (18, 4), (19, 4)],
    )
    def test_floors_toward_negative(self, score: int, expected: int) -> None:
        assert ability_modifier(score) == expected
