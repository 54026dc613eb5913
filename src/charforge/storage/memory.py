"""In-memory character store.

The store belongs to the hosting layer and is passed explicitly to
whatever serves requests; the rules engine itself holds no process-wide
state. Records are kept in the persisted ``CharacterRecord`` shape.

The store also hands out one lock per character id so a host serving
many characters concurrently can serialize access to each of them.
"""

from __future__ import annotations

import threading
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from charforge.core.exceptions import NotFoundError, ValidationError
from charforge.core.logging import character_context, get_logger
from charforge.engine.character import Character
from charforge.models.catalog import Catalog
from charforge.models.records import CharacterRecord, CharacterSummary, StoredCharacter


logger = get_logger(__name__)


class CharacterStore:
    """Keyed store of character records.

    Example:
        >>> store = CharacterStore()
        >>> stored = store.create(CharacterRecord(name="Valeros", class_id="fighter", level=1))
        >>> store.get(stored.id).record.name
        'Valeros'
    """

    def __init__(self) -> None:
        self._records: dict[str, StoredCharacter] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, character_id: object) -> bool:
        return character_id in self._records

    @contextmanager
    def lock(self, character_id: str) -> Generator[None, None, None]:
        """Hold the per-character lock for the duration of the block.

        Log entries emitted inside the block carry the character id.

        Raises:
            NotFoundError: If no character has this id.
        """
        with self._guard:
            if character_id not in self._records:
                raise NotFoundError(
                    "Character not found", resource="character", identifier=character_id
                )
            character_lock = self._locks.setdefault(character_id, threading.Lock())
        with character_lock, character_context(character_id):
            yield

    def create(self, record: CharacterRecord) -> StoredCharacter:
        """Store a new record under a fresh id."""
        stored = StoredCharacter(id=str(uuid4()), record=record.model_copy(deep=True))
        self._records[stored.id] = stored
        logger.info("Character stored", character_id=stored.id, name=record.name)
        return stored.model_copy(deep=True)

    def save(self, character: Character) -> StoredCharacter:
        return self.create(character.to_record())

    def get(self, character_id: str) -> StoredCharacter:
        """Fetch a stored record.

        Raises:
            NotFoundError: If no character has this id.
        """
        stored = self._records.get(character_id)
        if stored is None:
            raise NotFoundError(
                "Character not found", resource="character", identifier=character_id
            )
        return stored.model_copy(deep=True)

    def load(self, character_id: str, catalog: Catalog) -> Character:
        """Rebuild the live aggregate for a stored record."""
        return Character.from_record(self.get(character_id).record, catalog)

    def list_summaries(self) -> list[CharacterSummary]:
        return [stored.to_summary() for stored in self._records.values()]

    def update(self, character_id: str, changes: Mapping[str, Any]) -> StoredCharacter:
        """Merge ``changes`` into a stored record.

        ``changes`` uses the persisted field names (either spelling).

        Raises:
            NotFoundError: If no character has this id.
            ValidationError: If the merged record is invalid.
        """
        stored = self._records.get(character_id)
        if stored is None:
            raise NotFoundError(
                "Character not found", resource="character", identifier=character_id
            )
        aliases = {
            info.alias: name
            for name, info in CharacterRecord.model_fields.items()
            if info.alias
        }
        normalized = {aliases.get(key, key): value for key, value in changes.items()}
        merged = {**stored.record.model_dump(), **normalized}
        try:
            record = CharacterRecord.model_validate(merged)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            raise ValidationError(
                f"Invalid character update: {first['msg']}",
                field_name=".".join(str(part) for part in first["loc"]) or None,
            ) from exc

        updated = stored.model_copy(update={"record": record, "updated_at": datetime.now()})
        self._records[character_id] = updated
        logger.info("Character updated", character_id=character_id, fields=sorted(changes))
        return updated.model_copy(deep=True)

    def replace(self, character_id: str, character: Character) -> StoredCharacter:
        return self.update(character_id, character.to_record().model_dump(by_alias=True))

    def delete(self, character_id: str) -> None:
        """Remove a stored record.

        Raises:
            NotFoundError: If no character has this id.
        """
        if self._records.pop(character_id, None) is None:
            raise NotFoundError(
                "Character not found", resource="character", identifier=character_id
            )
        with self._guard:
            self._locks.pop(character_id, None)
        logger.info("Character deleted", character_id=character_id)


__all__ = ["CharacterStore"]
