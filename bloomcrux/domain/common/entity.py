"""
Entity base classes.

An entity keeps its identity while its attributes change: a deck renamed
twice is still the same deck. Equality and hashing therefore only look at
``id``.

Example:
    @dataclass
    class Folder(Entity[FolderId]):
        id: FolderId
        name: str

        def rename(self, name: str) -> None:
            self.name = name
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar

from .value_object import ValueObject


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Typed integer identifier.

    Separate subclasses (``DeckId``, ``CardId`` ...) stop a card id from being
    passed where a deck id is expected. The value ``0`` marks an entity that
    has not been persisted yet; the database assigns the real key.
    """

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"{type(self).__name__} must be non-negative")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @property
    def is_persisted(self) -> bool:
        return self.value != 0

    @classmethod
    def generate(cls) -> Self:
        """Placeholder id for a new entity; replaced on insert."""
        return cls(0)

    def to_primitive(self) -> int:
        return self.value


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """Identity-compared domain object. Subclasses declare ``id: IdType``."""

    id: IdType

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"
