"""Use case for card management within decks."""

from typing import Any

import structlog

from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.library.entities.card import Card
from bloomcrux.domain.library.value_objects.card_type import CardType
from bloomcrux.exceptions import CardNotFoundError, DeckNotFoundError

logger = structlog.get_logger(__name__)


class CardUseCase:
    """Card CRUD and starring."""

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        deck_repository: DeckRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.card_repository = card_repository
        self.deck_repository = deck_repository

    def list_cards(self, deck_id: int, user_id: int) -> list[Card]:
        return self.card_repository.find_by_deck(self._owned_deck_id(deck_id, user_id))

    def list_starred(self, deck_id: int, user_id: int) -> list[Card]:
        return self.card_repository.find_starred(self._owned_deck_id(deck_id, user_id))

    def create_card(
        self,
        deck_id: int,
        user_id: int,
        card_type: CardType,
        front: str,
        back: str = "",
        bloom_level: BloomLevel | None = None,
        meta: dict[str, Any] | None = None,
    ) -> Card:
        """
        Append a card to a deck.

        The Bloom level defaults from the card type when not given.

        Raises:
            DeckNotFoundError: If deck is not found
        """
        deck_id_vo = self._owned_deck_id(deck_id, user_id)
        card = Card.create(
            deck_id=deck_id_vo,
            card_type=card_type,
            front=front,
            back=back,
            bloom_level=bloom_level,
            meta=meta,
            position=self.card_repository.next_position(deck_id_vo),
        )
        card = self.card_repository.save(card)
        logger.info(
            "created_card",
            card_id=card.id.value,
            deck_id=deck_id,
            bloom_level=card.level.value,
        )
        return card

    def update_card(
        self,
        card_id: int,
        user_id: int,
        front: str | None = None,
        back: str | None = None,
        meta: dict[str, Any] | None = None,
        card_type: CardType | None = None,
        bloom_level: BloomLevel | None = None,
        position: int | None = None,
    ) -> Card:
        card = self._get_owned(card_id, user_id)
        card.update_content(front=front, back=back, meta=meta)
        if card_type is not None and card_type != card.card_type:
            card.change_type(card_type, bloom_level)
        elif bloom_level is not None:
            card.set_bloom_level(bloom_level)
        if position is not None:
            card.move_to(position)

        card = self.card_repository.save(card)
        logger.info("updated_card", card_id=card_id)
        return card

    def delete_card(self, card_id: int, user_id: int) -> None:
        if not self.card_repository.delete(CardId(card_id), UserId(user_id)):
            raise CardNotFoundError(card_id)
        logger.info("deleted_card", card_id=card_id)

    def set_starred(self, card_id: int, user_id: int, starred: bool) -> Card:
        card = self._get_owned(card_id, user_id)
        card.set_starred(starred)
        return self.card_repository.save(card)

    def _get_owned(self, card_id: int, user_id: int) -> Card:
        card = self.card_repository.find_by_id(CardId(card_id), UserId(user_id))
        if not card:
            raise CardNotFoundError(card_id)
        return card

    def _owned_deck_id(self, deck_id: int, user_id: int) -> DeckId:
        deck = self.deck_repository.find_by_id(DeckId(deck_id), UserId(user_id))
        if not deck:
            raise DeckNotFoundError(deck_id)
        return deck.id
