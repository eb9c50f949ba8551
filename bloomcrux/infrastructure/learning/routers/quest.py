"""API routes for quest mode: missions, completion, progress and reviews."""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from bloomcrux.application.learning.use_cases.card_performance_use_case import (
    CardPerformanceUseCase,
)
from bloomcrux.application.learning.use_cases.complete_mission_use_case import (
    CompleteMissionUseCase,
)
from bloomcrux.application.learning.use_cases.dtos import PerformanceReport, ReviewInput
from bloomcrux.application.learning.use_cases.quest_mission_use_case import GetMissionUseCase
from bloomcrux.application.learning.use_cases.quest_progress_use_case import (
    MAX_ATTEMPTS_LISTED,
    QuestProgressUseCase,
)
from bloomcrux.application.learning.use_cases.review_use_case import ReviewUseCase
from bloomcrux.core import container
from bloomcrux.domain.common.exceptions import DomainError
from bloomcrux.domain.identity.entities.user import User
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.card_performance import CardPerformance
from bloomcrux.domain.learning.entities.mission_attempt import LevelBreakdown
from bloomcrux.domain.learning.value_objects.mastery import CardMastery
from bloomcrux.exceptions import BloomCruxError
from bloomcrux.infrastructure.common.di import inject_use_case
from bloomcrux.infrastructure.identity.dependencies import get_current_user
from bloomcrux.infrastructure.learning.schemas import (
    CardMasteryListResponse,
    CardMasterySchema,
    CardPerformanceListResponse,
    CardPerformanceMergeRequest,
    CardPerformanceSchema,
    LevelBreakdownPayload,
    MissionAttemptSchema,
    MissionAttemptsResponse,
    MissionCompleteRequest,
    MissionCompleteResponse,
    MissionDebugInfo,
    MissionResponse,
    QuestProgressResponse,
    QuestResetRequest,
    QuestResetResponse,
    ReviewsRequest,
)
from bloomcrux.infrastructure.library.routers.cards import to_card_schema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quest", tags=["quest"])


def _performance_schema(perf: CardPerformance) -> CardPerformanceSchema:
    return CardPerformanceSchema(
        card_id=perf.card_id.value,
        attempts=perf.attempts,
        correct=perf.correct,
        last_seen_at=perf.last_seen_at,
    )


def _card_mastery_schema(record: CardMastery) -> CardMasterySchema:
    return CardMasterySchema(
        card_id=record.card_id.value,
        bloom_level=record.bloom,
        card_type=record.card_type,
        retention=record.retention,
        accuracy=record.accuracy_signal,
        confidence=record.confidence_signal,
        mastery=record.mastery,
        ef=record.srs.ef,
        reps=record.srs.reps,
        interval_days=record.srs.interval_days,
        lapses=record.srs.lapses,
        next_due_at=record.srs.next_due,
        updated_at=record.updated_at,
    )


@router.get("/{deck_id}/mission", response_model=MissionResponse, status_code=status.HTTP_200_OK)
def get_mission(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    bloom_level: BloomLevel = Query(..., description="Level to play"),
    mission_index: int = Query(0, ge=0, description="Which chunk of the level's cards"),
    seed: str | None = Query(None, description="Shuffle seed; defaults to deck, level and index"),
    use_case: GetMissionUseCase = Depends(inject_use_case(container.get_mission_use_case)),
) -> MissionResponse:
    """
    Compose a mission at a Bloom level.

    The same seed always yields the same card order.

    Args:
        deck_id: ID of the deck
        bloom_level: Level to play
        mission_index: Index of the mission within the level
        seed: Optional shuffle seed

    Raises:
        HTTPException: 404 if the deck is not found, 400 if mission_index is out of range
    """
    try:
        mission = use_case.get_mission(
            deck_id=deck_id,
            user_id=current_user.id.value,
            bloom_level=bloom_level,
            mission_index=mission_index,
            seed=seed,
        )
        composition = mission.composition
        debug = composition.debug
        return MissionResponse(
            deck_id=deck_id,
            bloom_level=bloom_level,
            mission_index=mission.mission_index,
            total_missions=mission.total_missions,
            seed_used=composition.seed_used,
            primary_ids=composition.primary_ids,
            blasts_ids=composition.blasts_ids,
            review_ids=composition.review_ids,
            mission_ids=composition.mission_ids,
            cards=[to_card_schema(c) for c in mission.cards],
            debug=MissionDebugInfo(
                primary_count=debug.primary_count,
                blasts_requested=debug.blasts_requested,
                blasts_chosen=debug.blasts_chosen,
                review_requested=debug.review_requested,
                review_chosen=debug.review_chosen,
                trimmed_from_blasts=debug.trimmed_from_blasts,
                trimmed_from_review=debug.trimmed_from_review,
                total=debug.total,
            ),
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to compose mission for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{deck_id}/complete", response_model=MissionCompleteResponse, status_code=status.HTTP_200_OK
)
def complete_mission(
    deck_id: int,
    request: MissionCompleteRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CompleteMissionUseCase = Depends(
        inject_use_case(container.complete_mission_use_case)
    ),
) -> MissionCompleteResponse:
    """
    Record a finished mission.

    Quest missions update progress and level mastery; a score at or above
    the unlock threshold clears the level.
    """
    try:
        breakdown = (
            {
                level: LevelBreakdown(
                    score_pct=part.score_pct,
                    cards_seen=part.cards_seen,
                    cards_correct=part.cards_correct,
                )
                for level, part in request.breakdown.items()
            }
            if request.breakdown
            else None
        )
        result = use_case.complete_mission(
            deck_id=deck_id,
            user_id=current_user.id.value,
            bloom_level=request.bloom_level,
            score_pct=request.score_pct,
            cards_seen=request.cards_seen,
            cards_correct=request.cards_correct,
            mode=request.mode,
            breakdown=breakdown,
            started_at=request.started_at,
        )
        return MissionCompleteResponse(
            ok=True, attempt_id=result.attempt_id, unlocked=result.unlocked
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to complete mission for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{deck_id}/progress", response_model=QuestProgressResponse, status_code=status.HTTP_200_OK
)
def get_progress(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: QuestProgressUseCase = Depends(inject_use_case(container.quest_progress_use_case)),
) -> QuestProgressResponse:
    try:
        progress = use_case.get_progress(deck_id, current_user.id.value)
        return QuestProgressResponse(
            deck_id=deck_id,
            per_bloom=progress.to_dict(),
            unlocked_levels=progress.unlocked_levels(),
            mastered=progress.is_deck_mastered(),
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get quest progress for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("/{deck_id}/reset", response_model=QuestResetResponse, status_code=status.HTTP_200_OK)
def reset_quest(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    request: QuestResetRequest | None = None,
    use_case: QuestProgressUseCase = Depends(inject_use_case(container.quest_progress_use_case)),
) -> QuestResetResponse:
    """
    Reset the learner's quest state on a deck.

    Attempts, performance counters and mastery records are deleted and
    progress starts over. XP events are only deleted with ``wipe_xp``.
    """
    try:
        wipe_xp = request.wipe_xp if request else False
        result = use_case.reset(deck_id, current_user.id.value, wipe_xp=wipe_xp)
        return QuestResetResponse(
            success=True,
            message="Quest progress reset",
            attempts_cleared=result.attempts_cleared,
            performance_cleared=result.performance_cleared,
            card_mastery_cleared=result.card_mastery_cleared,
            level_mastery_cleared=result.level_mastery_cleared,
            xp_events_cleared=result.xp_events_cleared,
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to reset quest for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{deck_id}/attempts", response_model=MissionAttemptsResponse, status_code=status.HTTP_200_OK
)
def list_attempts(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    limit: int = Query(MAX_ATTEMPTS_LISTED, ge=1, le=MAX_ATTEMPTS_LISTED),
    use_case: QuestProgressUseCase = Depends(inject_use_case(container.quest_progress_use_case)),
) -> MissionAttemptsResponse:
    try:
        attempts = use_case.list_attempts(deck_id, current_user.id.value, limit=limit)
        return MissionAttemptsResponse(
            attempts=[
                MissionAttemptSchema(
                    id=a.id.value,
                    bloom_level=a.bloom_level,
                    mode=a.mode,
                    score_pct=a.score_pct,
                    cards_seen=a.cards_seen,
                    cards_correct=a.cards_correct,
                    breakdown={
                        level: LevelBreakdownPayload(
                            score_pct=part.score_pct,
                            cards_seen=part.cards_seen,
                            cards_correct=part.cards_correct,
                        )
                        for level, part in a.breakdown.items()
                    },
                    started_at=a.started_at,
                    ended_at=a.ended_at,
                )
                for a in attempts
            ]
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to list attempts for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{deck_id}/performance",
    response_model=CardPerformanceListResponse,
    status_code=status.HTTP_200_OK,
)
def get_performance(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardPerformanceUseCase = Depends(
        inject_use_case(container.card_performance_use_case)
    ),
) -> CardPerformanceListResponse:
    try:
        rows = use_case.get_performance(deck_id, current_user.id.value)
        return CardPerformanceListResponse(performance=[_performance_schema(p) for p in rows])
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to get performance for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{deck_id}/performance",
    response_model=CardPerformanceListResponse,
    status_code=status.HTTP_200_OK,
)
def merge_performance(
    deck_id: int,
    request: CardPerformanceMergeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: CardPerformanceUseCase = Depends(
        inject_use_case(container.card_performance_use_case)
    ),
) -> CardPerformanceListResponse:
    """Merge client-reported running totals into the stored counters."""
    try:
        reports = [
            PerformanceReport(
                card_id=item.card_id,
                attempts=item.attempts,
                correct=item.correct,
                last_seen_at=item.last_seen_at,
            )
            for item in request.performance
        ]
        rows = use_case.merge_performance(deck_id, current_user.id.value, reports)
        return CardPerformanceListResponse(performance=[_performance_schema(p) for p in rows])
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to merge performance for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/{deck_id}/reviews", response_model=CardMasteryListResponse, status_code=status.HTTP_200_OK
)
def record_reviews(
    deck_id: int,
    request: ReviewsRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    use_case: ReviewUseCase = Depends(inject_use_case(container.review_use_case)),
) -> CardMasteryListResponse:
    """
    Record answers to cards.

    Each answer advances the card's review schedule and mastery signals.
    Returns the updated mastery of every card answered.
    """
    try:
        records = use_case.record_reviews(
            deck_id,
            current_user.id.value,
            [
                ReviewInput(
                    card_id=item.card_id,
                    correctness=item.correctness,
                    response_ms=item.response_ms,
                    confidence=item.confidence,
                    guessed=item.guessed,
                )
                for item in request.reviews
            ],
        )
        return CardMasteryListResponse(
            kind="reviewed", cards=[_card_mastery_schema(r) for r in records]
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to record reviews for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "/{deck_id}/review-queue",
    response_model=CardMasteryListResponse,
    status_code=status.HTTP_200_OK,
)
def get_review_queue(
    deck_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    kind: Literal["due", "struggle"] = Query("due"),
    limit: int = Query(20, ge=1, le=100),
    use_case: ReviewUseCase = Depends(inject_use_case(container.review_use_case)),
) -> CardMasteryListResponse:
    try:
        records = use_case.review_queue(deck_id, current_user.id.value, kind=kind, limit=limit)
        return CardMasteryListResponse(
            kind=kind, cards=[_card_mastery_schema(r) for r in records]
        )
    except (BloomCruxError, DomainError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.error(f"Failed to build review queue for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
