"""DTOs for learning use cases."""

from bloomcrux.application.learning.use_cases.dtos.quest_dtos import (
    CompletionResult,
    LevelGraduation,
    Mission,
    PerformanceReport,
    ResetResult,
    ReviewInput,
)

__all__ = [
    "CompletionResult",
    "LevelGraduation",
    "Mission",
    "PerformanceReport",
    "ResetResult",
    "ReviewInput",
]
