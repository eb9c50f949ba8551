"""Card entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bloomcrux.domain.common.entity import Entity
from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import CardId, DeckId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.library.value_objects.card_type import CardType


@dataclass
class Card(Entity[CardId]):
    """
    A study card in a deck.

    Business Rules:
    - Front (the prompt) cannot be empty
    - Bloom level defaults from the card type when not chosen explicitly
    - ``meta`` carries type-specific content (options, answer keys, ...)
    """

    id: CardId
    deck_id: DeckId
    card_type: CardType
    front: str
    back: str = ""
    bloom_level: BloomLevel | None = None
    meta: dict[str, Any] = field(default_factory=dict)
    position: int = 0
    starred: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.front or not self.front.strip():
            raise ValidationError("Card front cannot be empty", field="front")
        if self.position < 0:
            raise ValidationError("Card position cannot be negative", field="position")
        if self.bloom_level is None:
            self.bloom_level = self.card_type.default_bloom_level

    @property
    def level(self) -> BloomLevel:
        return self.bloom_level or self.card_type.default_bloom_level

    def update_content(
        self,
        front: str | None = None,
        back: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if front is not None:
            if not front.strip():
                raise ValidationError("Card front cannot be empty", field="front")
            self.front = front.strip()
        if back is not None:
            self.back = back.strip()
        if meta is not None:
            self.meta = dict(meta)

    def change_type(self, card_type: CardType, bloom_level: BloomLevel | None = None) -> None:
        """Switch format; the level follows the new type unless given."""
        self.card_type = card_type
        self.bloom_level = bloom_level or card_type.default_bloom_level

    def set_bloom_level(self, bloom_level: BloomLevel) -> None:
        self.bloom_level = bloom_level

    def move_to(self, position: int) -> None:
        if position < 0:
            raise ValidationError("Card position cannot be negative", field="position")
        self.position = position

    def set_starred(self, starred: bool) -> None:
        self.starred = starred

    @classmethod
    def create(
        cls,
        deck_id: DeckId,
        card_type: CardType,
        front: str,
        back: str = "",
        bloom_level: BloomLevel | None = None,
        meta: dict[str, Any] | None = None,
        position: int = 0,
    ) -> "Card":
        """Create a new card (ID will be 0 until persisted)."""
        return cls(
            id=CardId.generate(),
            deck_id=deck_id,
            card_type=card_type,
            front=front.strip(),
            back=back.strip(),
            bloom_level=bloom_level,
            meta=dict(meta or {}),
            position=position,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CardId,
        deck_id: DeckId,
        card_type: CardType,
        front: str,
        back: str,
        bloom_level: BloomLevel | None,
        meta: dict[str, Any],
        position: int,
        starred: bool,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "Card":
        """Reconstitute a card from persistence."""
        return cls(
            id=id,
            deck_id=deck_id,
            card_type=card_type,
            front=front,
            back=back,
            bloom_level=bloom_level,
            meta=meta,
            position=position,
            starred=starred,
            created_at=created_at,
            updated_at=updated_at,
        )
