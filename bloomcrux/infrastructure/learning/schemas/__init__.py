"""Learning context schemas."""

from bloomcrux.infrastructure.learning.schemas.quest_schemas import (
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
)
from bloomcrux.infrastructure.learning.schemas.review_schemas import (
    CardMasteryListResponse,
    CardMasterySchema,
    DeckMasteryResponse,
    LevelGraduationResponse,
    ReviewItem,
    ReviewsRequest,
)

__all__ = [
    "CardMasteryListResponse",
    "CardMasterySchema",
    "CardPerformanceListResponse",
    "CardPerformanceMergeRequest",
    "CardPerformanceSchema",
    "DeckMasteryResponse",
    "LevelBreakdownPayload",
    "LevelGraduationResponse",
    "MissionAttemptSchema",
    "MissionAttemptsResponse",
    "MissionCompleteRequest",
    "MissionCompleteResponse",
    "MissionDebugInfo",
    "MissionResponse",
    "QuestProgressResponse",
    "QuestResetRequest",
    "QuestResetResponse",
    "ReviewItem",
    "ReviewsRequest",
]
