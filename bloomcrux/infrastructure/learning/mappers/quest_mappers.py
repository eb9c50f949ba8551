"""Mappers for quest state: performance counters, level mastery, attempts and progress."""

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, MissionAttemptId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.bloom_mastery import BloomMastery
from bloomcrux.domain.learning.entities.card_performance import CardPerformance
from bloomcrux.domain.learning.entities.mission_attempt import LevelBreakdown, MissionAttempt
from bloomcrux.domain.learning.entities.quest_progress import QuestProgress
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import BloomMastery as BloomMasteryORM
from bloomcrux.models import CardPerformance as CardPerformanceORM
from bloomcrux.models import MissionAttempt as MissionAttemptORM
from bloomcrux.models import QuestProgress as QuestProgressORM


class CardPerformanceMapper:
    def to_domain(self, orm_model: CardPerformanceORM) -> CardPerformance:
        return CardPerformance(
            user_id=UserId(orm_model.user_id),
            deck_id=DeckId(orm_model.deck_id),
            card_id=CardId(orm_model.card_id),
            attempts=orm_model.attempts,
            correct=orm_model.correct,
            last_seen_at=as_utc(orm_model.last_seen_at),
        )

    def to_orm(
        self, domain: CardPerformance, orm_model: CardPerformanceORM | None = None
    ) -> CardPerformanceORM:
        if orm_model is None:
            orm_model = CardPerformanceORM(
                user_id=domain.user_id.value,
                deck_id=domain.deck_id.value,
                card_id=domain.card_id.value,
            )
        orm_model.attempts = domain.attempts
        orm_model.correct = domain.correct
        orm_model.last_seen_at = domain.last_seen_at
        return orm_model


class BloomMasteryMapper:
    def to_domain(self, orm_model: BloomMasteryORM) -> BloomMastery:
        return BloomMastery(
            user_id=UserId(orm_model.user_id),
            deck_id=DeckId(orm_model.deck_id),
            bloom_level=BloomLevel.from_string(orm_model.bloom_level),
            correctness_ewma=orm_model.correctness_ewma,
            retention_strength=orm_model.retention_strength,
            coverage=orm_model.coverage,
            mastery_pct=orm_model.mastery_pct,
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain: BloomMastery, orm_model: BloomMasteryORM | None = None
    ) -> BloomMasteryORM:
        if orm_model is None:
            orm_model = BloomMasteryORM(
                user_id=domain.user_id.value,
                deck_id=domain.deck_id.value,
                bloom_level=domain.bloom_level.value,
            )
        orm_model.correctness_ewma = domain.correctness_ewma
        orm_model.retention_strength = domain.retention_strength
        orm_model.coverage = domain.coverage
        orm_model.mastery_pct = domain.mastery_pct
        return orm_model


class MissionAttemptMapper:
    """Breakdown is stored as ``{level: {scorePct, cardsSeen, cardsCorrect}}``."""

    def to_domain(self, orm_model: MissionAttemptORM) -> MissionAttempt:
        breakdown = {
            BloomLevel.from_string(level): LevelBreakdown(
                score_pct=float(part.get("scorePct", 0)),
                cards_seen=int(part.get("cardsSeen", 0)),
                cards_correct=int(part.get("cardsCorrect", 0)),
            )
            for level, part in (orm_model.breakdown or {}).items()
        }
        return MissionAttempt(
            id=MissionAttemptId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            deck_id=DeckId(orm_model.deck_id),
            bloom_level=BloomLevel.from_string(orm_model.bloom_level),
            score_pct=orm_model.score_pct,
            cards_seen=orm_model.cards_seen,
            cards_correct=orm_model.cards_correct,
            mode=orm_model.mode,
            breakdown=breakdown,
            started_at=as_utc(orm_model.started_at),
            ended_at=as_utc(orm_model.ended_at),
        )

    def to_orm(self, domain: MissionAttempt) -> MissionAttemptORM:
        return MissionAttemptORM(
            user_id=domain.user_id.value,
            deck_id=domain.deck_id.value,
            bloom_level=domain.bloom_level.value,
            mode=domain.mode,
            score_pct=domain.score_pct,
            cards_seen=domain.cards_seen,
            cards_correct=domain.cards_correct,
            breakdown={
                level.value: {
                    "scorePct": part.score_pct,
                    "cardsSeen": part.cards_seen,
                    "cardsCorrect": part.cards_correct,
                }
                for level, part in domain.breakdown.items()
            },
            started_at=domain.started_at,
            ended_at=domain.ended_at,
        )


class QuestProgressMapper:
    def to_domain(self, orm_model: QuestProgressORM) -> QuestProgress:
        return QuestProgress.from_dict(
            UserId(orm_model.user_id), DeckId(orm_model.deck_id), orm_model.per_bloom
        )

    def to_orm(
        self, domain: QuestProgress, orm_model: QuestProgressORM | None = None
    ) -> QuestProgressORM:
        if orm_model is None:
            orm_model = QuestProgressORM(
                user_id=domain.user_id.value, deck_id=domain.deck_id.value
            )
        orm_model.per_bloom = domain.to_dict()
        return orm_model
