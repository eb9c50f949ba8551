"""Use case for deck management."""

from dataclasses import dataclass

import structlog

from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.application.library.protocols.folder_repository import FolderRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import DeckId, FolderId, UserId
from bloomcrux.domain.library.entities.card import Card
from bloomcrux.domain.library.entities.deck import Deck
from bloomcrux.exceptions import DeckNotFoundError, FolderNotFoundError

logger = structlog.get_logger(__name__)


@dataclass
class DeckWithCardCount:
    deck: Deck
    card_count: int


@dataclass
class DeckWithCards:
    deck: Deck
    cards: list[Card]


class DeckUseCase:
    """Deck CRUD, including moving decks between folders."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        folder_repository: FolderRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.folder_repository = folder_repository

    def list_decks(
        self, user_id: int, folder_id: int | None = None, unfiled_only: bool = False
    ) -> list[DeckWithCardCount]:
        """
        List the user's decks with card counts.

        Args:
            user_id: ID of the user
            folder_id: Only decks in this folder
            unfiled_only: Only decks outside any folder

        Raises:
            FolderNotFoundError: If folder_id is given but not owned by the user
        """
        user_id_vo = UserId(user_id)
        folder_id_vo = self._resolve_folder(folder_id, user_id_vo)
        decks = self.deck_repository.find_by_user(
            user_id_vo, folder_id=folder_id_vo, unfiled_only=unfiled_only
        )
        counts = self.deck_repository.count_cards_by_deck(user_id_vo)
        return [DeckWithCardCount(deck=d, card_count=counts.get(d.id.value, 0)) for d in decks]

    def create_deck(
        self,
        user_id: int,
        title: str,
        description: str | None = None,
        folder_id: int | None = None,
    ) -> Deck:
        user_id_vo = UserId(user_id)
        deck = Deck.create(
            user_id=user_id_vo,
            title=title,
            description=description,
            folder_id=self._resolve_folder(folder_id, user_id_vo),
        )
        deck = self.deck_repository.save(deck)
        logger.info("created_deck", deck_id=deck.id.value, user_id=user_id)
        return deck

    def get_deck(self, deck_id: int, user_id: int) -> DeckWithCards:
        deck = self._get_owned(deck_id, user_id)
        return DeckWithCards(deck=deck, cards=self.card_repository.find_by_deck(deck.id))

    def update_deck(
        self,
        deck_id: int,
        user_id: int,
        title: str | None = None,
        description: str | None = None,
        folder_id: int | None = None,
        unfile: bool = False,
    ) -> Deck:
        """
        Update deck details and/or move it.

        Args:
            folder_id: Move the deck into this folder
            unfile: Move the deck out of its folder (ignored when folder_id is set)

        Raises:
            DeckNotFoundError: If deck is not found
            FolderNotFoundError: If the target folder is not found
        """
        deck = self._get_owned(deck_id, user_id)
        deck.update_details(title=title, description=description)
        if folder_id is not None:
            deck.move_to_folder(self._resolve_folder(folder_id, deck.user_id))
        elif unfile:
            deck.move_to_folder(None)

        deck = self.deck_repository.save(deck)
        logger.info("updated_deck", deck_id=deck_id)
        return deck

    def delete_deck(self, deck_id: int, user_id: int) -> None:
        if not self.deck_repository.delete(DeckId(deck_id), UserId(user_id)):
            raise DeckNotFoundError(deck_id)
        logger.info("deleted_deck", deck_id=deck_id)

    def _get_owned(self, deck_id: int, user_id: int) -> Deck:
        deck = self.deck_repository.find_by_id(DeckId(deck_id), UserId(user_id))
        if not deck:
            raise DeckNotFoundError(deck_id)
        return deck

    def _resolve_folder(self, folder_id: int | None, user_id: UserId) -> FolderId | None:
        if folder_id is None:
            return None
        folder = self.folder_repository.find_by_id(FolderId(folder_id), user_id)
        if not folder:
            raise FolderNotFoundError(folder_id)
        return folder.id
