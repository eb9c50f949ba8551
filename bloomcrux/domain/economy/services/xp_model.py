"""Commander XP curve, mission XP awards and token minting."""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from bloomcrux.domain.common.numbers import round_half_up
from bloomcrux.domain.learning.bloom import BloomLevel

BASE_XP_PER_CORRECT = 4
TOKENS_PER_XP = 0.25
MAX_COMMANDER_LEVEL = 30

# Cumulative XP needed to reach commander levels 1..30
LEVEL_THRESHOLDS: tuple[int, ...] = (
    0, 200, 489, 877, 1374, 1992, 2739, 3626, 4663, 5862,
    7231, 8781, 10523, 12467, 14622, 17000, 19610, 22463, 25569, 28939,
    32581, 36508, 40728, 45253, 50092, 55256, 60756, 66600, 72800, 79366,
)  # fmt: skip


@dataclass(frozen=True)
class LevelProgress:
    level: int
    current: int
    next_level: int
    to_next: int


@dataclass(frozen=True)
class LevelTally:
    """Correct and total answers at one Bloom level of a mission."""

    correct: int
    total: int


def xp_threshold_for_level(level: int) -> int:
    capped = min(MAX_COMMANDER_LEVEL, max(1, int(level)))
    return LEVEL_THRESHOLDS[capped - 1]


def progress_for(xp_total: int) -> LevelProgress:
    """Commander level reached with ``xp_total`` and the distance to the next one."""
    xp = max(0, int(xp_total))
    level = 1
    for candidate, threshold in enumerate(LEVEL_THRESHOLDS, start=1):
        if xp < threshold:
            break
        level = candidate

    next_level = min(level + 1, MAX_COMMANDER_LEVEL)
    current_threshold = xp_threshold_for_level(level)
    next_threshold = xp_threshold_for_level(next_level)
    return LevelProgress(
        level=level,
        current=max(0, xp - current_threshold),
        next_level=next_level,
        to_next=max(0, next_threshold - xp),
    )


def award_for_mission(correct: int, bloom: BloomLevel = BloomLevel.REMEMBER) -> int:
    """4 XP per correct answer, scaled by the level's multiplier."""
    return max(0, round_half_up(max(0, int(correct)) * BASE_XP_PER_CORRECT * bloom.xp_multiplier))


def award_for_breakdown(breakdown: Mapping[BloomLevel, LevelTally]) -> int:
    """Sum of per-level awards; levels with no answers contribute nothing."""
    total = 0
    for bloom, tally in breakdown.items():
        if tally.total <= 0 and tally.correct <= 0:
            continue
        total += award_for_mission(tally.correct, bloom)
    return max(0, total)


def tokens_from_xp(xp: int) -> int:
    """A quarter of the XP, rounded up."""
    return max(0, math.ceil(xp * TOKENS_PER_XP))
