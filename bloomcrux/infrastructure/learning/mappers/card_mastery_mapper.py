"""Mapper for CardMastery ORM ↔ Domain conversion."""

from datetime import datetime

from bloomcrux.domain.common.value_objects.ids import CardId, DeckId, UserId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.value_objects.mastery import (
    AccuracyTrack,
    CardMastery,
    ConfidenceTrack,
    ReviewHistoryEntry,
    SpacingEvidence,
    SrsState,
)
from bloomcrux.infrastructure.common.time import as_utc
from bloomcrux.models import CardMastery as CardMasteryORM


class CardMasteryMapper:
    """
    Mapper for CardMastery ORM ↔ Domain conversion.

    The nested value objects are flattened into columns; review history is
    stored as a JSON list of ``{"ts": iso8601, "grade": float}``.
    """

    def to_domain(self, orm_model: CardMasteryORM) -> CardMastery:
        history = tuple(
            ReviewHistoryEntry(
                ts=as_utc(datetime.fromisoformat(entry["ts"])),  # type: ignore[arg-type]
                grade=float(entry["grade"]),
            )
            for entry in orm_model.history or []
        )
        return CardMastery(
            card_id=CardId(orm_model.card_id),
            bloom=BloomLevel.from_string(orm_model.bloom_level),
            srs=SrsState(
                ef=orm_model.ef,
                reps=orm_model.reps,
                interval_days=orm_model.interval_days,
                next_due=as_utc(orm_model.next_due_at),
                history=history,
                lapses=orm_model.lapses,
                stability=orm_model.stability,
                difficulty=orm_model.difficulty,
                relearn_stage=orm_model.relearn_stage,
                retention_target=orm_model.retention_target,
            ),
            spacing=SpacingEvidence(
                spaced_short_ok=orm_model.spaced_short_ok,
                spaced_long_ok=orm_model.spaced_long_ok,
                consecutive_spaced_successes=orm_model.consecutive_spaced_successes,
                last_gap_days=orm_model.last_gap_days,
            ),
            accuracy=AccuracyTrack(
                k=orm_model.accuracy_k,
                ptr=orm_model.accuracy_ptr,
                outcomes=tuple(int(x) for x in orm_model.accuracy_outcomes or []),
            ),
            confidence=ConfidenceTrack(
                ewma=orm_model.confidence_ewma, lam=orm_model.confidence_lambda
            ),
            retention=orm_model.retention,
            accuracy_signal=orm_model.accuracy,
            confidence_signal=orm_model.confidence,
            mastery=orm_model.mastery,
            card_type=orm_model.card_type,
            updated_at=as_utc(orm_model.updated_at),
        )

    def to_orm(
        self,
        domain: CardMastery,
        user_id: UserId,
        deck_id: DeckId,
        orm_model: CardMasteryORM | None = None,
    ) -> CardMasteryORM:
        if orm_model is None:
            orm_model = CardMasteryORM(
                user_id=user_id.value, deck_id=deck_id.value, card_id=domain.card_id.value
            )
        srs = domain.srs
        orm_model.bloom_level = domain.bloom.value
        orm_model.card_type = domain.card_type
        orm_model.ef = srs.ef
        orm_model.reps = srs.reps
        orm_model.interval_days = srs.interval_days
        orm_model.next_due_at = srs.next_due
        orm_model.history = [{"ts": h.ts.isoformat(), "grade": h.grade} for h in srs.history]
        orm_model.lapses = srs.lapses
        orm_model.stability = srs.stability
        orm_model.difficulty = srs.difficulty
        orm_model.relearn_stage = srs.relearn_stage
        orm_model.retention_target = srs.retention_target
        orm_model.spaced_short_ok = domain.spacing.spaced_short_ok
        orm_model.spaced_long_ok = domain.spacing.spaced_long_ok
        orm_model.consecutive_spaced_successes = domain.spacing.consecutive_spaced_successes
        orm_model.last_gap_days = domain.spacing.last_gap_days
        orm_model.accuracy_k = domain.accuracy.k
        orm_model.accuracy_ptr = domain.accuracy.ptr
        orm_model.accuracy_outcomes = list(domain.accuracy.outcomes)
        orm_model.confidence_ewma = domain.confidence.ewma
        orm_model.confidence_lambda = domain.confidence.lam
        orm_model.retention = domain.retention
        orm_model.accuracy = domain.accuracy_signal
        orm_model.confidence = domain.confidence_signal
        orm_model.mastery = domain.mastery
        if domain.updated_at is not None:
            orm_model.updated_at = domain.updated_at
        return orm_model
