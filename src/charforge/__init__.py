"""charforge - d20 character rules engine.

Resolves character stats from a base value plus competing typed bonuses,
and manages the progression (levels, feats, equipment, class features,
gold) that produces those bonuses.

Example:
    >>> from charforge import Character, Modifier
    >>> hero = Character({"strength": 10}, gold=200, name="Valeros")
    >>> hero.add_modifier(Modifier(source="Belt", target="strength",
    ...                            bonus_type="enhancement", value=2))
    >>> hero.resolve_stat("strength").total
    12

Modules:
    core: Configuration, logging, and exceptions.
    models: Pydantic V2 schemas for modifiers, equipment, classes and feats.
    engine: Stat resolver and the Character aggregate.
    storage: Keyed character store for hosting layers.
"""

from __future__ import annotations

# Core
from charforge.core.config import RulesSettings, Settings, get_settings
from charforge.core.exceptions import (
    CharforgeError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from charforge.core.logging import configure_logging, get_logger

# Models
from charforge.models import (
    BonusType,
    Catalog,
    CharacterRecord,
    ClassDefinition,
    ClassFeature,
    Equipment,
    EquipmentSlot,
    Feat,
    FeatSlot,
    Modifier,
)

# Engine
from charforge.engine import (
    Character,
    CharacterUpdateRequest,
    CharacterUpdateResult,
    StatResult,
    resolve_stat,
)

# Storage
from charforge.storage import CharacterStore


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "CharforgeError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
    "RulesSettings",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "BonusType",
    "Catalog",
    "CharacterRecord",
    "ClassDefinition",
    "ClassFeature",
    "Equipment",
    "EquipmentSlot",
    "Feat",
    "FeatSlot",
    "Modifier",
    # Engine
    "Character",
    "CharacterUpdateRequest",
    "CharacterUpdateResult",
    "StatResult",
    "resolve_stat",
    # Storage
    "CharacterStore",
]
