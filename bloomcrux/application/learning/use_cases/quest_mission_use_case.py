"""Use case for composing quest missions."""

import structlog

from bloomcrux.application.learning.protocols.card_mastery_repository import (
    CardMasteryRepositoryProtocol,
)
from bloomcrux.application.learning.protocols.card_performance_repository import (
    CardPerformanceRepositoryProtocol,
)
from bloomcrux.application.learning.use_cases.dtos import Mission
from bloomcrux.application.learning.use_cases.quest_support import (
    load_owned_cards,
    quest_settings,
    to_quest_cards,
)
from bloomcrux.application.library.protocols.card_repository import CardRepositoryProtocol
from bloomcrux.application.library.protocols.deck_repository import DeckRepositoryProtocol
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.services.mission_composer import (
    MissionRequest,
    compose_mission,
    split_into_missions,
)
from bloomcrux.domain.learning.services.review_queues import struggle_queue
from bloomcrux.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class GetMissionUseCase:
    """Compose the card list of one mission at a Bloom level."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        card_performance_repository: CardPerformanceRepositoryProtocol,
        card_mastery_repository: CardMasteryRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository
        self.card_performance_repository = card_performance_repository
        self.card_mastery_repository = card_mastery_repository

    def get_mission(
        self,
        deck_id: int,
        user_id: int,
        bloom_level: BloomLevel,
        mission_index: int = 0,
        seed: str | None = None,
    ) -> Mission:
        """
        Compose a mission.

        Review cards are the learner's struggling lower-level cards when any
        have mastery records; otherwise the most-missed cards by counters.

        Args:
            deck_id: ID of the deck
            user_id: ID of the user
            bloom_level: Level the mission targets
            mission_index: Which chunk of the level's cards to play
            seed: Optional shuffle seed; defaults to deck, level and index

        Raises:
            DeckNotFoundError: If deck is not found
            ValidationError: If mission_index is past the last mission
        """
        deck_id_vo = DeckId(deck_id)
        user_id_vo = UserId(user_id)
        cards = load_owned_cards(self.deck_repository, self.card_repository, deck_id_vo, user_id_vo)
        settings = quest_settings()

        quest_cards = to_quest_cards(cards)
        level_cards = [c for c in quest_cards if c.bloom_level == bloom_level]
        total_missions = len(split_into_missions(level_cards, settings.mission_cap))
        if mission_index < 0 or (total_missions and mission_index >= total_missions):
            raise ValidationError(
                f"Mission index {mission_index} out of range (0..{max(0, total_missions - 1)})"
            )

        performance = {
            p.card_id.value: p
            for p in self.card_performance_repository.find_by_deck(user_id_vo, deck_id_vo)
        }
        lower_levels = set(bloom_level.lower_levels())
        lower_masteries = [
            m
            for m in self.card_mastery_repository.find_by_deck(user_id_vo, deck_id_vo)
            if m.bloom in lower_levels
        ]
        review_candidates = [m.card_id.value for m in struggle_queue(lower_masteries)]

        composition = compose_mission(
            MissionRequest(
                deck_id=deck_id,
                level=bloom_level,
                cards=quest_cards,
                performance=performance,
                settings=settings,
                review_candidate_ids=review_candidates or None,
                mission_index=mission_index,
                seed=seed,
            )
        )

        by_id = {card.id.value: card for card in cards}
        logger.info(
            "composed_mission",
            deck_id=deck_id,
            bloom_level=bloom_level.value,
            mission_index=mission_index,
            total=composition.debug.total,
        )
        return Mission(
            composition=composition,
            cards=[by_id[cid] for cid in composition.mission_ids],
            mission_index=mission_index,
            total_missions=total_missions,
        )
