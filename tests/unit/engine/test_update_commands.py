"""Tests for the Character command interface."""

from __future__ import annotations

from typing import Any

import pytest

from charforge.engine.character import (
    Character,
    CharacterUpdateRequest,
    CharacterUpdateResult,
)
from charforge.models import ClassDefinition, Equipment, Modifier


def _apply(character: Character, command: str, **payload: Any) -> CharacterUpdateResult:
    return character.apply(CharacterUpdateRequest(command=command, payload=payload))


class TestUpdateRequest:
    def test_request_id_echoed(self, character: Character) -> None:
        request = CharacterUpdateRequest(command="add_gold", payload={"amount": 5})

        result = character.apply(request)

        assert result.request_id == request.request_id

    def test_unknown_command_rejected(self) -> None:
        from pydantic import ValidationError as PydanticValidationError

        with pytest.raises(PydanticValidationError):
            CharacterUpdateRequest(command="level_down")


class TestModifierCommands:
    """Tests for add, toggle and remove through apply."""

    def test_add_modifier(self, character: Character) -> None:
        result = _apply(
            character, "add_modifier", source="Bless", target="attack", bonusType="morale", value=1
        )

        assert result.success
        assert result.error_kind is None
        assert result.value["bonusType"] == "morale"
        assert result.value["id"]
        assert character.resolve_stat("attack").total == 1

    def test_add_modifier_unknown_category(self, character: Character) -> None:
        result = _apply(
            character, "add_modifier", source="Bless", target="attack", bonusType="divine", value=1
        )

        assert not result.success
        assert result.error_kind == "validation"
        assert result.details["field_name"] == "bonusType"
        assert character.modifiers == []

    def test_toggle_and_remove(self, character: Character) -> None:
        modifier = character.add_modifier(Modifier(source="Bless", target="attack", value=1))

        toggled = _apply(character, "toggle_modifier", id=modifier.id, active=False)
        assert toggled.success
        assert toggled.message == "Updated"
        assert character.resolve_stat("attack").total == 0

        removed = _apply(character, "remove_modifier", id=modifier.id)
        assert removed.success
        assert removed.message == "Deleted"
        assert character.modifiers == []

    def test_toggle_unknown_id_succeeds(self, character: Character) -> None:
        assert _apply(character, "toggle_modifier", id="missing", active=True).success

    def test_toggle_requires_boolean(self, character: Character) -> None:
        modifier = character.add_modifier(Modifier(source="Bless", target="attack", value=1))

        result = _apply(character, "toggle_modifier", id=modifier.id, active="no")

        assert result.error_kind == "validation"
        assert character.get_modifier(modifier.id).active is True

    def test_missing_field(self, character: Character) -> None:
        result = _apply(character, "remove_modifier")

        assert result.error_kind == "validation"
        assert result.details["field_name"] == "id"


class TestEquipmentCommands:
    def test_equip_and_unequip(self, character: Character, belt: Equipment) -> None:
        equipped = _apply(character, "equip_item", item=belt.model_dump(by_alias=True))

        assert equipped.success
        assert equipped.value == 50
        assert character.resolve_stat("strength").total == 18

        unequipped = _apply(character, "unequip_item", slot="waist")

        assert unequipped.success
        assert unequipped.value == 200

    def test_equip_unaffordable(self, character: Character, belt: Equipment) -> None:
        character.subtract_gold(100)

        result = _apply(character, "equip_item", item=belt.model_dump())

        assert not result.success
        assert result.error_kind == "domain"
        assert result.details == {"required": 150, "available": 100}
        assert character.gold == 100
        assert character.equipment == {}

    def test_equip_invalid_item(self, character: Character) -> None:
        result = _apply(character, "equip_item", item={"id": "tail-ring", "slot": "tail"})

        assert result.error_kind == "validation"
        assert result.details["field_name"] == "item"

    def test_unequip_empty_slot(self, character: Character) -> None:
        result = _apply(character, "unequip_item", slot="feet")

        assert result.success
        assert result.message == "Slot already empty"
        assert result.value == 200

    def test_unequip_unknown_slot(self, character: Character) -> None:
        assert _apply(character, "unequip_item", slot="tail").error_kind == "validation"


class TestGoldCommands:
    @pytest.mark.parametrize(
        ("command", "amount", "error_kind"),
        [
            ("add_gold", -5, "domain"),
            ("subtract_gold", 500, "domain"),
            ("add_gold", "5", "validation"),
            ("add_gold", True, "validation"),
        ],
    )
    def test_rejected(
        self, character: Character, command: str, amount: Any, error_kind: str
    ) -> None:
        result = _apply(character, command, amount=amount)

        assert not result.success
        assert result.error_kind == error_kind
        assert character.gold == 200

    def test_balance_returned(self, character: Character) -> None:
        assert _apply(character, "add_gold", amount=25).value == 225
        assert _apply(character, "subtract_gold", amount=225).value == 0


class TestSelectionCommands:
    def test_select_feat(self, character: Character, fighter: ClassDefinition) -> None:
        character.add_level(1, fighter)
        slot_id = character.available_feat_slots()[0].id

        result = _apply(character, "select_feat", slot_id=slot_id, feat_id="toughness")

        assert result.success
        assert result.value["featSelected"] == "toughness"

    def test_select_feat_unknown_slot(self, character: Character) -> None:
        result = _apply(character, "select_feat", slot_id="missing", feat_id="toughness")

        assert result.error_kind == "not_found"

    def test_select_feature_option(self, character: Character, fighter: ClassDefinition) -> None:
        for number in range(1, 6):
            character.add_level(number, fighter)

        rejected = _apply(
            character, "select_feature_option", feature_id="weapon-training-1", option="axes"
        )
        accepted = _apply(
            character, "select_feature_option", feature_id="weapon-training-1", option="bows"
        )

        assert rejected.error_kind == "domain"
        assert rejected.details["allowed"] == ["blades-heavy", "bows"]
        assert accepted.success
        assert character.feature_selections == {"weapon-training-1": "bows"}
