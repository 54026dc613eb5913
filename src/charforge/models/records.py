"""Persisted character representation.

``CharacterRecord`` is the serialization contract an external store must
preserve across save and load. It records decisions (class, level, chosen
feats, equipped item ids, feature choices), not derived values; the
aggregate is rebuilt from it against a catalog.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from charforge.models.base import CharforgeModel


class CharacterRecord(CharforgeModel):
    """Serialized character.

    Attributes:
        name: Character name.
        class_id: Class catalog id (``"class"`` on the wire).
        level: Character level; 0 means not yet leveled.
        base_stats: Stat key to base value.
        selected_feats: Chosen feat ids, in slot order.
        equipped_items: Equipment catalog ids currently worn.
        feature_selections: Class feature id to chosen option.
        gold: Gold balance after the equipped items were bought. Optional;
            when absent the configured starting gold is assumed.
    """

    name: str = "New Character"
    class_id: str | None = Field(default=None, alias="class")
    level: int = Field(default=0, ge=0)
    base_stats: dict[str, int] = Field(default_factory=dict)
    selected_feats: list[str] = Field(default_factory=list)
    equipped_items: list[str] = Field(default_factory=list)
    feature_selections: dict[str, str] = Field(default_factory=dict)
    gold: int | None = Field(default=None, ge=0)


class CharacterSummary(CharforgeModel):
    """Listing entry for a stored character."""

    id: str
    name: str
    class_id: str | None = Field(default=None, alias="class")
    level: int


class StoredCharacter(CharforgeModel):
    """A record as held by a character store."""

    id: str
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    record: CharacterRecord

    def to_summary(self) -> CharacterSummary:
        return CharacterSummary(
            id=self.id,
            name=self.record.name,
            class_id=self.record.class_id,
            level=self.record.level,
        )


__all__ = [
    "CharacterRecord",
    "CharacterSummary",
    "StoredCharacter",
]
