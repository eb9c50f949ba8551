"""Helpers shared by the quest use cases."""

from collections import Counter

from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.config import get_settings
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.services.mission_composer import QuestCard, QuestSettings
from bloomcrux.domain.library.entities.card import Card
from bloomcrux.exceptions import DeckNotFoundError


def quest_settings() -> QuestSettings:
    settings = get_settings()
    return QuestSettings(
        pass_threshold=settings.QUEST_PASS_THRESHOLD,
        mission_cap=settings.QUEST_MISSION_CAP,
        blasts_percent=settings.QUEST_BLASTS_PERCENT,
    )


def load_owned_cards(
    deck_repository: DeckRepositoryProtocol,
    card_repository: CardRepositoryProtocol,
    deck_id: DeckId,
    user_id: UserId,
) -> list[Card]:
    """Cards of a deck the user owns; raises DeckNotFoundError otherwise."""
    deck = deck_repository.find_by_id(deck_id, user_id)
    if not deck:
        raise DeckNotFoundError(deck_id.value)
    return card_repository.find_by_deck(deck.id)


def card_counts(cards: list[Card]) -> dict[BloomLevel, int]:
    return dict(Counter(card.level for card in cards))


def to_quest_cards(cards: list[Card]) -> list[QuestCard]:
    return [QuestCard(card_id=card.id.value, bloom_level=card.level) for card in cards]
