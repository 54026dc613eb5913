"""Catalog of externally supplied class, feat and equipment definitions.

How catalogs are stored or edited is a concern of the hosting layer; this
model only validates already-loaded mappings against the shapes the rules
engine relies on and provides lookups.

Example:
    >>> catalog = Catalog.model_validate({"classes": {...}, "feats": {...}})
    >>> fighter = catalog.get_class("fighter")
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, model_validator

from charforge.core.exceptions import NotFoundError
from charforge.models.base import CharforgeModel
from charforge.models.equipment import Equipment
from charforge.models.progression import ClassDefinition, Feat


def _fill_ids(entries: Any) -> Any:
    # Catalog files key entries by id and may omit the id inside the entry.
    if not isinstance(entries, dict):
        return entries
    filled = {}
    for key, entry in entries.items():
        if isinstance(entry, dict) and "id" not in entry:
            entry = {**entry, "id": key}
        filled[key] = entry
    return filled


class Catalog(CharforgeModel):
    """Validated id-keyed definitions."""

    model_config = ConfigDict(frozen=True)

    classes: dict[str, ClassDefinition] = Field(default_factory=dict)
    feats: dict[str, Feat] = Field(default_factory=dict)
    equipment: dict[str, Equipment] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def default_entry_ids(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {
                key: _fill_ids(value) if key in ("classes", "feats", "equipment") else value
                for key, value in data.items()
            }
        return data

    def get_class(self, class_id: str) -> ClassDefinition:
        try:
            return self.classes[class_id]
        except KeyError:
            raise NotFoundError(
                f"Unknown class: {class_id}", resource="class", identifier=class_id
            ) from None

    def get_feat(self, feat_id: str) -> Feat:
        try:
            return self.feats[feat_id]
        except KeyError:
            raise NotFoundError(
                f"Unknown feat: {feat_id}", resource="feat", identifier=feat_id
            ) from None

    def get_equipment(self, item_id: str) -> Equipment:
        try:
            return self.equipment[item_id]
        except KeyError:
            raise NotFoundError(
                f"Unknown equipment: {item_id}", resource="equipment", identifier=item_id
            ) from None


__all__ = ["Catalog"]
