"""Storage module for charforge.

Provides the keyed character store a hosting layer owns and passes to the
code that serves character operations.
"""

from charforge.storage.memory import CharacterStore

__all__ = [
    "CharacterStore",
]
