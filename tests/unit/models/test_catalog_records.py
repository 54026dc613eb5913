"""Tests for catalog, progression and record models."""

from __future__ import annotations

import pytest

from charforge.core.exceptions import NotFoundError
from charforge.models import (
    Catalog,
    CharacterRecord,
    ClassDefinition,
    FeatSlot,
    StoredCharacter,
)


class TestCatalog:
    """Tests for Catalog validation and lookups."""

    def test_entry_ids_filled_from_keys(self) -> None:
        """Test that catalog files may omit ids inside entries."""
        catalog = Catalog.model_validate(
            {
                "classes": {"rogue": {"name": "Rogue", "hitDie": 8}},
                "feats": {"dodge": {"name": "Dodge"}},
                "equipment": {"cloak": {"name": "Cloak", "slot": "shoulders_cloak"}},
            }
        )

        assert catalog.get_class("rogue").id == "rogue"
        assert catalog.get_class("rogue").hit_die == 8
        assert catalog.get_feat("dodge").id == "dodge"
        assert catalog.get_equipment("cloak").id == "cloak"

    def test_class_features_keyed_by_level_string(self) -> None:
        """Test JSON level keys are read as integers."""
        catalog = Catalog.model_validate(
            {
                "classes": {
                    "fighter": {
                        "classFeatures": {
                            "1": [{"id": "fighter-bonus-feat", "level": 1}],
                        }
                    }
                }
            }
        )

        features = catalog.get_class("fighter").features_at(1)
        assert [feature.id for feature in features] == ["fighter-bonus-feat"]

    @pytest.mark.parametrize(
        ("lookup", "resource"),
        [("get_class", "class"), ("get_feat", "feat"), ("get_equipment", "equipment")],
    )
    def test_unknown_entries(self, catalog: Catalog, lookup: str, resource: str) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            getattr(catalog, lookup)("missing")

        assert exc_info.value.details == {"resource": resource, "identifier": "missing"}


class TestClassDefinition:
    def test_defaults(self) -> None:
        definition = ClassDefinition(id="adept")

        assert definition.hit_die == 8
        assert definition.base_attack_bonus_progression == "medium"
        assert definition.saving_throw_progressions.for_save("will") == "slow"
        assert definition.features_at(1) == []

    def test_features_at_exact_level(self, fighter: ClassDefinition) -> None:
        assert [f.id for f in fighter.features_at(3)] == ["armor-training-1"]
        assert fighter.features_at(4) == []

    def test_save_progressions(self, fighter: ClassDefinition) -> None:
        assert fighter.saving_throw_progressions.for_save("fortitude") == "fast"
        assert fighter.saving_throw_progressions.for_save("reflex") == "slow"


class TestFeatSlot:
    """Tests for FeatSlot whitelist handling."""

    def test_unrestricted_slot(self) -> None:
        slot = FeatSlot(granted_at_level=1)

        assert not slot.is_assigned
        assert slot.permits("anything")

    def test_whitelisted_slot(self) -> None:
        slot = FeatSlot(granted_at_level=1, source="classLevel", whitelist=["dodge"])

        assert slot.permits("dodge")
        assert not slot.permits("toughness")

    def test_assigned(self) -> None:
        slot = FeatSlot(granted_at_level=4, feat_selected="dodge")
        assert slot.is_assigned


class TestCharacterRecord:
    """Tests for the persisted character shape."""

    def test_wire_shape(self) -> None:
        record = CharacterRecord.model_validate(
            {
                "name": "Valeros",
                "class": "fighter",
                "level": 2,
                "baseStats": {"strength": 16},
                "selectedFeats": ["dodge"],
                "equippedItems": ["belt-of-strength"],
                "featureSelections": {"weapon-training-1": "bows"},
                "gold": 50,
            }
        )

        assert record.class_id == "fighter"
        assert record.base_stats == {"strength": 16}
        data = record.model_dump(by_alias=True)
        assert data["class"] == "fighter"
        assert data["selectedFeats"] == ["dodge"]
        assert data["featureSelections"] == {"weapon-training-1": "bows"}

    def test_defaults(self) -> None:
        record = CharacterRecord()

        assert record.name == "New Character"
        assert record.class_id is None
        assert record.level == 0
        assert record.gold is None

    def test_summary(self) -> None:
        stored = StoredCharacter(
            id="abc",
            record=CharacterRecord(name="Seelah", class_id="paladin", level=3),
        )

        summary = stored.to_summary()

        assert summary.model_dump(by_alias=True) == {
            "id": "abc",
            "name": "Seelah",
            "class": "paladin",
            "level": 3,
        }
