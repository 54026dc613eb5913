"""Equipment, attack and ability models.

Equipment occupies exactly one ``EquipmentSlot`` and, while equipped,
contributes its modifiers, attacks and optional ability to the wearer.
"""

from __future__ import annotations

from pydantic import ConfigDict, Field

from charforge.models.base import CharforgeModel
from charforge.models.enums import ActionType, EquipmentSlot, EquipmentType, TargetType
from charforge.models.modifiers import Modifier, new_id


class Damage(CharforgeModel):
    """Damage roll of an attack, e.g. ``1d8`` plus a flat bonus."""

    model_config = ConfigDict(frozen=True)

    dice: str = Field(description="Dice expression, e.g. '1d6' or '2d8'")
    bonus: int = 0


class Attack(CharforgeModel):
    """An attack option granted by equipment, a feat or a class level."""

    id: str = Field(default_factory=new_id)
    name: str
    action: ActionType = ActionType.STANDARD
    damage: Damage
    target_type: TargetType = TargetType.ENEMY
    attack_bonus: int | None = None


class Ability(CharforgeModel):
    """A usable ability. Abilities are descriptive data; using one is a
    concern of the hosting layer."""

    id: str = Field(default_factory=new_id)
    name: str
    action: ActionType = ActionType.STANDARD
    description: str | None = None


class Equipment(CharforgeModel):
    """A catalog item that can be bought and worn in one slot.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        slot: The single slot the item occupies.
        cost: Price in gold pieces.
        modifiers: Bonuses granted while equipped.
        attacks: Attacks granted while equipped.
        ability: Ability granted while equipped.
        type: Weapon, armor or shield.
        group: Weapon or armor group, e.g. ``"swords"`` or ``"light-armor"``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    slot: EquipmentSlot
    cost: int = Field(default=0, ge=0)
    modifiers: list[Modifier] = Field(default_factory=list)
    attacks: list[Attack] = Field(default_factory=list)
    ability: Ability | None = None
    type: EquipmentType | None = None
    group: str | None = None

    @property
    def is_armor(self) -> bool:
        return self.type == EquipmentType.ARMOR


__all__ = [
    "Ability",
    "Attack",
    "Damage",
    "Equipment",
]
