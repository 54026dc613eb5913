"""Character aggregate: the owner of all mutable character state.

The Character composes the rule resolver, feat slot registry, equipment
slot manager and class feature applicator into one consistent state
machine. It is mutated only through its own methods, and every rejected
mutation leaves it exactly as it was.

Every modifier, attack and ability attached on behalf of a source
(equipment, class feature, feat, class level) is copied with a fresh id and
recorded in a grant ledger, so detaching that source removes exactly what
it added.

Access model: one writer at a time per character. Reads such as
``resolve_stat`` do not mutate state but must not interleave with a
concurrent mutation of the same instance; callers serialize per character.

Example:
    >>> hero = Character({"strength": 16, "dexterity": 12}, gold=200, name="Valeros")
    >>> hero.add_level(1, fighter)
    >>> hero.equip_item(chain_shirt)
    >>> hero.resolve_armor_class()
    15
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from charforge.core.config import RulesSettings, get_settings
from charforge.core.constants import ARMOR_CLASS_STAT, CONSTITUTION_STAT, DEXTERITY_STAT
from charforge.core.exceptions import (
    CharforgeError,
    ClassFeatureSelectionError,
    DomainError,
    FeatNotAllowedError,
    FeatPrerequisiteError,
    InsufficientGoldError,
    InvalidGoldAmountError,
    NotFoundError,
    SlotOccupiedError,
    ValidationError,
)
from charforge.core.logging import get_logger
from charforge.engine.applicability import ApplicabilityContext, is_applicable
from charforge.engine.progression import (
    grants_base_feat_slot,
    total_base_attack_bonus,
    total_base_save,
    total_hit_points,
)
from charforge.engine.resolver import StatResult, ability_modifier, resolve_stat
from charforge.models.catalog import Catalog
from charforge.models.enums import EquipmentSlot, FeatSlotSource, SavingThrow
from charforge.models.equipment import Ability, Attack, Equipment
from charforge.models.modifiers import Modifier, new_id, parse_modifier_input
from charforge.models.progression import (
    CharacterLevel,
    ClassDefinition,
    ClassFeature,
    Feat,
    FeatSlot,
)
from charforge.models.records import CharacterRecord


logger = get_logger(__name__)


# =============================================================================
# Grant Ledger
# =============================================================================


@dataclass
class Grant:
    """What one source attached to a character.

    Attributes:
        key: Ledger key, e.g. ``"equipment:chest"`` or ``"feature:armor-training:3"``.
        modifier_ids: Ids of the attached modifier copies.
        attack_ids: Ids of the attached attack copies.
        ability_ids: Ids of the attached ability copies.
        feat_slot_ids: Feat slots created by the source.
        pending: True while a selection-gated feature is still inert.
    """

    key: str
    modifier_ids: list[str] = field(default_factory=list)
    attack_ids: list[str] = field(default_factory=list)
    ability_ids: list[str] = field(default_factory=list)
    feat_slot_ids: list[str] = field(default_factory=list)
    pending: bool = False


def _equipment_key(slot: str) -> str:
    return f"equipment:{slot}"


def _feature_key(feature_id: str, level: int) -> str:
    return f"feature:{feature_id}:{level}"


def _feat_key(slot_id: str) -> str:
    return f"feat:{slot_id}"


def _level_key(level_number: int) -> str:
    return f"level:{level_number}"


def _normalize_slot(slot: EquipmentSlot | str) -> str:
    try:
        return EquipmentSlot(slot).value
    except ValueError:
        raise ValidationError(
            f"Unknown equipment slot: {slot}",
            field_name="slot",
            invalid_value=slot,
        ) from None


# =============================================================================
# Update Requests
# =============================================================================


UpdateCommand = Literal[
    "add_modifier",
    "toggle_modifier",
    "remove_modifier",
    "equip_item",
    "unequip_item",
    "add_gold",
    "subtract_gold",
    "select_feat",
    "select_feature_option",
]


class CharacterUpdateRequest(BaseModel):
    """A single mutation command for ``Character.apply``."""

    model_config = ConfigDict(frozen=True)

    request_id: UUID = Field(default_factory=uuid4)
    command: UpdateCommand
    payload: dict[str, Any] = Field(default_factory=dict)


class CharacterUpdateResult(BaseModel):
    """Outcome of a command: success, or the kind of error that stopped it."""

    request_id: UUID
    success: bool
    message: str
    error_kind: Literal["validation", "domain", "not_found"] | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    value: Any = None


def _error_kind(exc: CharforgeError) -> Literal["validation", "domain", "not_found"]:
    if isinstance(exc, NotFoundError):
        return "not_found"
    if isinstance(exc, DomainError):
        return "domain"
    return "validation"


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise ValidationError(f"Missing required field: {key}", field_name=key)
    return payload[key]


def _check_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Field {key} must be an integer", field_name=key, invalid_value=value
        )
    return value


def _require_int(payload: Mapping[str, Any], key: str) -> int:
    return _check_int(_require(payload, key), key)


# =============================================================================
# Character Aggregate
# =============================================================================


class Character:
    """Aggregate root for a character's stats and progression.

    Args:
        base_stats: Stat key to base value. Unknown keys resolve to 0.
        gold: Starting gold. Defaults to the configured starting gold.
        name: Display name.
        rules: Rules settings. Defaults to the application settings.

    Raises:
        InvalidGoldAmountError: If ``gold`` is negative.
    """

    def __init__(
        self,
        base_stats: Mapping[str, int] | None = None,
        gold: int | None = None,
        *,
        name: str = "New Character",
        rules: RulesSettings | None = None,
    ) -> None:
        self._rules = rules if rules is not None else get_settings().rules
        if gold is None:
            gold = self._rules.starting_gold
        if gold < 0:
            raise InvalidGoldAmountError("Starting gold cannot be negative", amount=gold)

        self.name = name
        self._base_stats: dict[str, int] = dict(base_stats or {})
        self._modifiers: list[Modifier] = []
        self._levels: list[CharacterLevel] = []
        self._feat_slots: list[FeatSlot] = []
        self._equipment: dict[str, Equipment] = {}
        self._attacks: list[Attack] = []
        self._abilities: list[Ability] = []
        self._gold = gold
        self._class_features: dict[str, ClassFeature] = {}
        self._feature_selections: dict[str, str] = {}
        self._grants: dict[str, Grant] = {}

    def __repr__(self) -> str:
        return f"Character(name={self.name!r}, level={self.level}, gold={self._gold})"

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def rules(self) -> RulesSettings:
        return self._rules

    @property
    def gold(self) -> int:
        return self._gold

    @property
    def level(self) -> int:
        return len(self._levels)

    @property
    def base_stats(self) -> dict[str, int]:
        return dict(self._base_stats)

    @property
    def modifiers(self) -> list[Modifier]:
        return [modifier.model_copy() for modifier in self._modifiers]

    @property
    def levels(self) -> list[CharacterLevel]:
        return list(self._levels)

    @property
    def feat_slots(self) -> list[FeatSlot]:
        return [slot.model_copy() for slot in self._feat_slots]

    @property
    def equipment(self) -> dict[str, Equipment]:
        return dict(self._equipment)

    @property
    def attacks(self) -> list[Attack]:
        return [attack.model_copy() for attack in self._attacks]

    @property
    def abilities(self) -> list[Ability]:
        return [ability.model_copy() for ability in self._abilities]

    @property
    def class_features(self) -> dict[str, ClassFeature]:
        return dict(self._class_features)

    @property
    def feature_selections(self) -> dict[str, str]:
        return dict(self._feature_selections)

    def get_base_stat(self, stat_name: str) -> int:
        return self._base_stats.get(stat_name, 0)

    def get_modifier(self, modifier_id: str) -> Modifier | None:
        for modifier in self._modifiers:
            if modifier.id == modifier_id:
                return modifier.model_copy()
        return None

    def equipped_item(self, slot: EquipmentSlot | str) -> Equipment | None:
        return self._equipment.get(_normalize_slot(slot))

    # -------------------------------------------------------------------------
    # Modifier lifecycle
    # -------------------------------------------------------------------------

    def add_modifier(self, modifier: Modifier) -> Modifier:
        """Append a copy of ``modifier``. Duplicates are kept; each contributes.

        The copy keeps the modifier's id, so callers can toggle or remove
        it by that id, but the character never shares the caller's object.
        """
        modifier = modifier.model_copy(deep=True)
        self._modifiers.append(modifier)
        logger.debug(
            "Modifier added",
            character=self.name,
            modifier_id=modifier.id,
            target=modifier.target,
            bonus_type=modifier.bonus_type,
            value=modifier.value,
        )
        return modifier

    def add_modifier_from_input(self, payload: Mapping[str, Any]) -> Modifier:
        """Validate a boundary payload and append the resulting modifier.

        Raises:
            ValidationError: If the payload is malformed. Nothing is added.
        """
        return self.add_modifier(parse_modifier_input(payload).to_modifier())

    def toggle_modifier(self, modifier_id: str, active: bool) -> bool:
        """Set a modifier's active flag in place.

        Returns:
            True if the modifier exists. Unknown ids are a no-op.
        """
        for modifier in self._modifiers:
            if modifier.id == modifier_id:
                modifier.active = active
                logger.debug(
                    "Modifier toggled",
                    character=self.name,
                    modifier_id=modifier_id,
                    active=active,
                )
                return True
        return False

    def remove_modifier(self, modifier_id: str) -> bool:
        """Remove a modifier by id. Idempotent.

        Returns:
            True if something was removed.
        """
        before = len(self._modifiers)
        self._modifiers = [m for m in self._modifiers if m.id != modifier_id]
        removed = len(self._modifiers) != before
        if removed:
            logger.debug("Modifier removed", character=self.name, modifier_id=modifier_id)
        return removed

    # -------------------------------------------------------------------------
    # Stat resolution
    # -------------------------------------------------------------------------

    def applicability_context(self, situations: Iterable[str] = ()) -> ApplicabilityContext:
        return ApplicabilityContext.from_equipment(self._equipment.values(), situations)

    def eligible_modifiers(
        self, stat_name: str, *, situations: Iterable[str] = ()
    ) -> list[Modifier]:
        """Active modifiers that target ``stat_name`` and apply right now."""
        context = self.applicability_context(situations)
        return [
            modifier
            for modifier in self._modifiers
            if modifier.applies_to(stat_name)
            and modifier.active
            and is_applicable(modifier, context)
        ]

    def resolve_stat(self, stat_name: str, *, situations: Iterable[str] = ()) -> StatResult:
        """Resolve a stat against the current base value and modifiers.

        Pure read: never mutates the character.
        """
        return resolve_stat(
            self.get_base_stat(stat_name),
            self.eligible_modifiers(stat_name, situations=situations),
        )

    def resolve_ability_modifier(self, stat_name: str) -> int:
        return ability_modifier(self.resolve_stat(stat_name).total)

    def resolve_armor_class(self) -> int:
        """Armor class: base + dexterity modifier + armorClass bonuses.

        Only the bonus portion of the ``armorClass`` stat is added, so its
        raw base value is not counted on top of the universal base.
        """
        armor_class = self.resolve_stat(ARMOR_CLASS_STAT)
        bonus = armor_class.total - self.get_base_stat(ARMOR_CLASS_STAT)
        return (
            self._rules.base_armor_class
            + self.resolve_ability_modifier(DEXTERITY_STAT)
            + bonus
        )

    @property
    def base_attack_bonus(self) -> int:
        return total_base_attack_bonus(self._levels)

    def base_save(self, save: SavingThrow | str) -> int:
        return total_base_save(self._levels, save)

    def max_hit_points(self) -> int:
        return total_hit_points(
            self._levels, self.resolve_ability_modifier(CONSTITUTION_STAT)
        )

    # -------------------------------------------------------------------------
    # Grant ledger
    # -------------------------------------------------------------------------

    def _attach(
        self,
        grant: Grant,
        *,
        modifiers: Iterable[Modifier] = (),
        attacks: Iterable[Attack] = (),
        abilities: Iterable[Ability] = (),
    ) -> None:
        for modifier in modifiers:
            owned = modifier.with_fresh_id()
            self._modifiers.append(owned)
            grant.modifier_ids.append(owned.id)
        for attack in attacks:
            owned_attack = attack.model_copy(update={"id": new_id()}, deep=True)
            self._attacks.append(owned_attack)
            grant.attack_ids.append(owned_attack.id)
        for ability in abilities:
            owned_ability = ability.model_copy(update={"id": new_id()}, deep=True)
            self._abilities.append(owned_ability)
            grant.ability_ids.append(owned_ability.id)

    def _detach(self, grant: Grant) -> None:
        modifier_ids = set(grant.modifier_ids)
        attack_ids = set(grant.attack_ids)
        ability_ids = set(grant.ability_ids)
        self._modifiers = [m for m in self._modifiers if m.id not in modifier_ids]
        self._attacks = [a for a in self._attacks if a.id not in attack_ids]
        self._abilities = [a for a in self._abilities if a.id not in ability_ids]

    # -------------------------------------------------------------------------
    # Leveling
    # -------------------------------------------------------------------------

    def add_level(self, level_number: int, class_definition: ClassDefinition) -> CharacterLevel:
        """Append a level of ``class_definition``.

        Levels are expected in sequence; no gap filling is done. A base feat
        slot is granted at level 1 and every ``feat_interval`` levels after,
        and the class features listed for exactly this level are applied.
        """
        grant = Grant(key=_level_key(level_number))
        self._attach(
            grant,
            modifiers=class_definition.modifiers_per_level,
            attacks=class_definition.attacks_per_level,
            abilities=class_definition.abilities_per_level,
        )

        slots: list[FeatSlot] = []
        if grants_base_feat_slot(level_number, self._rules.feat_interval):
            slots.append(
                FeatSlot(granted_at_level=level_number, source=FeatSlotSource.BASE_LEVEL)
            )
        for _ in range(class_definition.feat_slots_per_level):
            slots.append(
                FeatSlot(granted_at_level=level_number, source=FeatSlotSource.CLASS_LEVEL)
            )
        self._feat_slots.extend(slots)
        grant.feat_slot_ids.extend(slot.id for slot in slots)
        self._grants[grant.key] = grant

        modifier_ids = set(grant.modifier_ids)
        attack_ids = set(grant.attack_ids)
        ability_ids = set(grant.ability_ids)
        level = CharacterLevel(
            level_number=level_number,
            class_definition=class_definition,
            modifiers=[m.model_copy() for m in self._modifiers if m.id in modifier_ids],
            attacks=[a.model_copy() for a in self._attacks if a.id in attack_ids],
            abilities=[a.model_copy() for a in self._abilities if a.id in ability_ids],
            feat_slots=[slot.model_copy() for slot in slots],
        )
        self._levels.append(level)
        logger.info(
            "Level added",
            character=self.name,
            level=level_number,
            class_id=class_definition.id,
            feat_slots=len(slots),
        )

        for feature in class_definition.features_at(level_number):
            self.add_class_feature(feature, level_number=level_number)
        return level

    # -------------------------------------------------------------------------
    # Class features
    # -------------------------------------------------------------------------

    def add_class_feature(self, feature: ClassFeature, *, level_number: int | None = None) -> None:
        """Apply a class feature.

        The feature is recorded as owned and its modifiers and abilities are
        attached, unless it requires a selection that has not been made, in
        which case it stays inert until ``select_class_feature_option``. A
        feature whose id carries the bonus-feat marker also grants a class
        feat slot limited to the configured combat feats.
        """
        granted_at = level_number if level_number is not None else max(self.level, feature.level)
        key = _feature_key(feature.id, granted_at)
        if key in self._grants:
            logger.debug("Class feature already applied", character=self.name, feature_id=feature.id)
            return

        grant = Grant(key=key)
        self._class_features[feature.id] = feature
        if feature.requires_selection and feature.id not in self._feature_selections:
            grant.pending = True
        else:
            self._attach(grant, modifiers=feature.modifiers, abilities=feature.abilities)

        if self._rules.bonus_feat_marker in feature.id:
            slot = FeatSlot(
                granted_at_level=max(granted_at, 1),
                source=FeatSlotSource.CLASS_LEVEL,
                whitelist=list(self._rules.combat_feats),
            )
            self._feat_slots.append(slot)
            grant.feat_slot_ids.append(slot.id)

        self._grants[key] = grant
        logger.info(
            "Class feature applied",
            character=self.name,
            feature_id=feature.id,
            pending=grant.pending,
        )

    def _feature_grants(self, feature_id: str) -> list[Grant]:
        prefix = f"feature:{feature_id}:"
        return [grant for key, grant in self._grants.items() if key.startswith(prefix)]

    def remove_class_feature(self, feature_id: str) -> bool:
        """Retract a class feature and everything it attached.

        Unassigned bonus feat slots the feature created are removed too;
        assigned slots are kept.

        Returns:
            True if the feature was owned.
        """
        if feature_id not in self._class_features:
            return False
        for grant in self._feature_grants(feature_id):
            self._detach(grant)
            slot_ids = set(grant.feat_slot_ids)
            self._feat_slots = [
                slot for slot in self._feat_slots
                if slot.id not in slot_ids or slot.is_assigned
            ]
            del self._grants[grant.key]
        del self._class_features[feature_id]
        self._feature_selections.pop(feature_id, None)
        logger.info("Class feature removed", character=self.name, feature_id=feature_id)
        return True

    def select_class_feature_option(self, feature_id: str, option: str) -> None:
        """Record the choice for a selection-gated class feature.

        The first recorded choice activates the feature's modifiers and
        abilities.

        Raises:
            ClassFeatureSelectionError: If the feature is not owned, does not
                take a selection, or ``option`` is not one of its choices.
        """
        feature = self._class_features.get(feature_id)
        if feature is None:
            logger.warning("Unknown class feature", character=self.name, feature_id=feature_id)
            raise ClassFeatureSelectionError(
                f"Character has no class feature {feature_id}", feature_id=feature_id
            )
        if not feature.requires_selection:
            raise ClassFeatureSelectionError(
                f"Class feature {feature_id} does not take a selection",
                feature_id=feature_id,
            )
        if option not in feature.selectable_options:
            logger.warning(
                "Class feature option rejected",
                character=self.name,
                feature_id=feature_id,
                option=option,
            )
            raise ClassFeatureSelectionError(
                f"{option} is not a valid choice for {feature_id}",
                feature_id=feature_id,
                option=option,
                details={"allowed": list(feature.selectable_options)},
            )

        self._feature_selections[feature_id] = option
        for grant in self._feature_grants(feature_id):
            if grant.pending:
                self._attach(grant, modifiers=feature.modifiers, abilities=feature.abilities)
                grant.pending = False
        logger.info(
            "Class feature option selected",
            character=self.name,
            feature_id=feature_id,
            option=option,
        )

    # -------------------------------------------------------------------------
    # Feats
    # -------------------------------------------------------------------------

    def _find_slot(self, slot_id: str) -> FeatSlot:
        for slot in self._feat_slots:
            if slot.id == slot_id:
                return slot
        raise NotFoundError(f"Unknown feat slot: {slot_id}", resource="feat_slot", identifier=slot_id)

    def available_feat_slots(self) -> list[FeatSlot]:
        return [slot.model_copy() for slot in self._feat_slots if not slot.is_assigned]

    def selected_feats(self) -> list[str]:
        return [slot.feat_selected for slot in self._feat_slots if slot.feat_selected is not None]

    def select_feat(self, slot_id: str, feat_id: str) -> FeatSlot:
        """Assign ``feat_id`` to a feat slot.

        Assignment is terminal. Re-selecting the same feat is a no-op; the
        whitelist is checked only here, never re-validated later.

        Raises:
            NotFoundError: If the slot does not exist.
            FeatNotAllowedError: If the slot's whitelist excludes the feat.
            DomainError: If the slot already holds a different feat.
        """
        slot = self._find_slot(slot_id)
        if slot.feat_selected == feat_id:
            return slot.model_copy()
        if slot.is_assigned:
            raise DomainError(
                f"Feat slot {slot_id} already holds {slot.feat_selected}",
                details={"slot_id": slot_id, "feat_selected": slot.feat_selected},
            )
        if not slot.permits(feat_id):
            logger.warning(
                "Feat rejected by whitelist",
                character=self.name,
                slot_id=slot_id,
                feat_id=feat_id,
            )
            raise FeatNotAllowedError(
                f"Feat {feat_id} is not allowed in slot {slot_id}",
                slot_id=slot_id,
                feat_id=feat_id,
            )

        slot.feat_selected = feat_id
        logger.info("Feat selected", character=self.name, slot_id=slot_id, feat_id=feat_id)
        return slot.model_copy()

    def unmet_prerequisites(self, feat: Feat) -> list[str]:
        """List the prerequisites of ``feat`` the character does not meet."""
        prerequisites = feat.prerequisites
        if prerequisites is None:
            return []
        unmet: list[str] = []
        if prerequisites.level is not None and self.level < prerequisites.level:
            unmet.append(f"level {prerequisites.level}")
        if (
            prerequisites.base_attack_bonus is not None
            and self.base_attack_bonus < prerequisites.base_attack_bonus
        ):
            unmet.append(f"base attack bonus +{prerequisites.base_attack_bonus}")
        selected = set(self.selected_feats())
        unmet.extend(f"feat {required}" for required in prerequisites.feats if required not in selected)
        for stat_name, minimum in prerequisites.stats.items():
            if self.resolve_stat(stat_name).total < minimum:
                unmet.append(f"{stat_name} {minimum}")
        return unmet

    def apply_feat(self, slot_id: str, feat: Feat, *, check_prerequisites: bool = True) -> FeatSlot:
        """Select ``feat`` into a slot and attach what it grants.

        Raises:
            FeatPrerequisiteError: If prerequisites are checked and unmet.
            NotFoundError: If the slot does not exist.
            FeatNotAllowedError: If the slot's whitelist excludes the feat.
        """
        if check_prerequisites:
            unmet = self.unmet_prerequisites(feat)
            if unmet:
                raise FeatPrerequisiteError(
                    f"Prerequisites not met for {feat.id}", feat_id=feat.id, unmet=unmet
                )
        key = _feat_key(slot_id)
        already_applied = key in self._grants
        slot = self.select_feat(slot_id, feat.id)
        if not already_applied:
            grant = Grant(key=key)
            self._attach(
                grant,
                modifiers=feat.modifiers,
                attacks=feat.attacks,
                abilities=feat.abilities,
            )
            self._grants[key] = grant
        return slot

    # -------------------------------------------------------------------------
    # Currency
    # -------------------------------------------------------------------------

    def add_gold(self, amount: int) -> int:
        """Add gold and return the new balance.

        Raises:
            ValidationError: If ``amount`` is not an integer.
            InvalidGoldAmountError: If ``amount`` is negative.
        """
        amount = _check_int(amount, "amount")
        if amount < 0:
            raise InvalidGoldAmountError("Cannot add a negative amount of gold", amount=amount)
        self._gold += amount
        logger.debug("Gold added", character=self.name, amount=amount, balance=self._gold)
        return self._gold

    def subtract_gold(self, amount: int) -> int:
        """Subtract gold and return the new balance.

        Raises:
            ValidationError: If ``amount`` is not an integer.
            InvalidGoldAmountError: If ``amount`` is negative.
            InsufficientGoldError: If the balance would drop below zero.
        """
        amount = _check_int(amount, "amount")
        if amount < 0:
            raise InvalidGoldAmountError(
                "Cannot subtract a negative amount of gold", amount=amount
            )
        if amount > self._gold:
            raise InsufficientGoldError(
                "Not enough gold", required=amount, available=self._gold
            )
        self._gold -= amount
        logger.debug("Gold subtracted", character=self.name, amount=amount, balance=self._gold)
        return self._gold

    # -------------------------------------------------------------------------
    # Equipment
    # -------------------------------------------------------------------------

    def equip_item(self, item: Equipment) -> None:
        """Buy and wear an item.

        Raises:
            SlotOccupiedError: If the item's slot already holds an item.
            InsufficientGoldError: If the item costs more than the balance.
        """
        slot = _normalize_slot(item.slot)
        occupant = self._equipment.get(slot)
        if occupant is not None:
            logger.warning(
                "Equipment slot occupied",
                character=self.name,
                slot=slot,
                item_id=item.id,
                occupant_id=occupant.id,
            )
            raise SlotOccupiedError(
                f"Slot {slot} already holds {occupant.name or occupant.id}",
                slot=slot,
                occupant_id=occupant.id,
            )
        if self._gold < item.cost:
            logger.warning(
                "Cannot afford item",
                character=self.name,
                item_id=item.id,
                cost=item.cost,
                gold=self._gold,
            )
            raise InsufficientGoldError(
                f"Cannot afford {item.name or item.id}",
                required=item.cost,
                available=self._gold,
            )

        self._gold -= item.cost
        grant = Grant(key=_equipment_key(slot))
        self._attach(
            grant,
            modifiers=item.modifiers,
            attacks=item.attacks,
            abilities=[item.ability] if item.ability is not None else [],
        )
        self._grants[grant.key] = grant
        self._equipment[slot] = item
        logger.info(
            "Item equipped",
            character=self.name,
            item_id=item.id,
            slot=slot,
            cost=item.cost,
            gold=self._gold,
        )

    def unequip_item(self, slot: EquipmentSlot | str) -> Equipment | None:
        """Remove the item in ``slot``, refunding its cost.

        Returns:
            The removed item, or None if the slot was empty.
        """
        slot = _normalize_slot(slot)
        item = self._equipment.pop(slot, None)
        if item is None:
            return None
        grant = self._grants.pop(_equipment_key(slot), None)
        if grant is not None:
            self._detach(grant)
        self._gold += item.cost
        logger.info(
            "Item unequipped",
            character=self.name,
            item_id=item.id,
            slot=slot,
            refund=item.cost,
            gold=self._gold,
        )
        return item

    # -------------------------------------------------------------------------
    # Command interface
    # -------------------------------------------------------------------------

    def apply(self, request: CharacterUpdateRequest) -> CharacterUpdateResult:
        """Run one mutation command and report the outcome as a value.

        Domain, validation and lookup errors are returned in the result
        rather than raised. The character is unchanged on failure.
        """
        handlers: dict[str, Callable[[Mapping[str, Any]], tuple[str, Any]]] = {
            "add_modifier": self._cmd_add_modifier,
            "toggle_modifier": self._cmd_toggle_modifier,
            "remove_modifier": self._cmd_remove_modifier,
            "equip_item": self._cmd_equip_item,
            "unequip_item": self._cmd_unequip_item,
            "add_gold": self._cmd_add_gold,
            "subtract_gold": self._cmd_subtract_gold,
            "select_feat": self._cmd_select_feat,
            "select_feature_option": self._cmd_select_feature_option,
        }
        handler = handlers[request.command]
        try:
            message, value = handler(request.payload)
        except CharforgeError as exc:
            return CharacterUpdateResult(
                request_id=request.request_id,
                success=False,
                message=exc.message,
                error_kind=_error_kind(exc),
                details=exc.details,
            )
        return CharacterUpdateResult(
            request_id=request.request_id,
            success=True,
            message=message,
            value=value,
        )

    def _cmd_add_modifier(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        modifier = self.add_modifier_from_input(payload)
        return "Modifier added", modifier.model_dump(by_alias=True)

    def _cmd_toggle_modifier(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        active = _require(payload, "active")
        if not isinstance(active, bool):
            raise ValidationError("Field active must be a boolean", field_name="active", invalid_value=active)
        self.toggle_modifier(str(_require(payload, "id")), active)
        return "Updated", None

    def _cmd_remove_modifier(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        self.remove_modifier(str(_require(payload, "id")))
        return "Deleted", None

    def _cmd_equip_item(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        try:
            item = Equipment.model_validate(_require(payload, "item"))
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid equipment: {exc.errors()[0]['msg']}", field_name="item"
            ) from exc
        self.equip_item(item)
        return f"Equipped {item.name or item.id}", self._gold

    def _cmd_unequip_item(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        item = self.unequip_item(_require(payload, "slot"))
        return ("Slot already empty" if item is None else f"Unequipped {item.name or item.id}"), self._gold

    def _cmd_add_gold(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        return "Gold added", self.add_gold(_require_int(payload, "amount"))

    def _cmd_subtract_gold(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        return "Gold subtracted", self.subtract_gold(_require_int(payload, "amount"))

    def _cmd_select_feat(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        slot = self.select_feat(str(_require(payload, "slot_id")), str(_require(payload, "feat_id")))
        return "Feat selected", slot.model_dump(by_alias=True)

    def _cmd_select_feature_option(self, payload: Mapping[str, Any]) -> tuple[str, Any]:
        feature_id = str(_require(payload, "feature_id"))
        option = str(_require(payload, "option"))
        self.select_class_feature_option(feature_id, option)
        return "Option selected", option

    # -------------------------------------------------------------------------
    # Persistence shape
    # -------------------------------------------------------------------------

    def to_record(self) -> CharacterRecord:
        """Snapshot the character's decisions in the persisted shape."""
        equipped = [
            self._equipment[slot.value].id
            for slot in EquipmentSlot
            if slot.value in self._equipment
        ]
        return CharacterRecord(
            name=self.name,
            class_id=self._levels[0].class_id if self._levels else None,
            level=self.level,
            base_stats=dict(self._base_stats),
            selected_feats=self.selected_feats(),
            equipped_items=equipped,
            feature_selections=dict(self._feature_selections),
            gold=self._gold,
        )

    @classmethod
    def from_record(
        cls,
        record: CharacterRecord,
        catalog: Catalog,
        *,
        rules: RulesSettings | None = None,
    ) -> Character:
        """Rebuild a character from a persisted record.

        Equipped items are re-bought from a balance that includes their
        cost, so the resulting gold equals the recorded balance. Each feat
        goes to the first open whitelisted slot that admits it, falling back
        to the first open unrestricted slot.

        Raises:
            NotFoundError: If the record references unknown catalog entries.
            ValidationError: If a leveled record has no class.
            FeatNotAllowedError: If a feat fits no open slot.
        """
        rules = rules if rules is not None else get_settings().rules
        items = [catalog.get_equipment(item_id) for item_id in record.equipped_items]
        balance = record.gold if record.gold is not None else rules.starting_gold
        character = cls(
            record.base_stats,
            balance + sum(item.cost for item in items),
            name=record.name,
            rules=rules,
        )

        if record.level > 0:
            if record.class_id is None:
                raise ValidationError(
                    "A leveled character record needs a class", field_name="class"
                )
            class_definition = catalog.get_class(record.class_id)
            for level_number in range(1, record.level + 1):
                character.add_level(level_number, class_definition)

        for feature_id, option in record.feature_selections.items():
            character.select_class_feature_option(feature_id, option)

        for feat_id in record.selected_feats:
            # whitelisted slots first
            slot = min(
                (s for s in character._feat_slots if not s.is_assigned and s.permits(feat_id)),
                key=lambda s: s.whitelist is None,
                default=None,
            )
            if slot is None:
                raise FeatNotAllowedError(
                    f"No open feat slot admits {feat_id}", feat_id=feat_id
                )
            feat = catalog.feats.get(feat_id)
            if feat is None:
                character.select_feat(slot.id, feat_id)
            else:
                character.apply_feat(slot.id, feat, check_prerequisites=False)

        for item in items:
            character.equip_item(item)

        logger.info(
            "Character restored",
            character=character.name,
            level=character.level,
            gold=character.gold,
        )
        return character


__all__ = [
    "Character",
    "CharacterUpdateRequest",
    "CharacterUpdateResult",
    "Grant",
    "UpdateCommand",
]
