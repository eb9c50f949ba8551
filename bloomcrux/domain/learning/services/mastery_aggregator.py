"""
Mastery aggregation and graduation rules for a Bloom level.

Both functions are pure: same input, same output, no I/O.
"""

from collections.abc import Sequence

from bloomcrux.domain.common.numbers import format_fixed
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.value_objects.mastery import (
    BloomLevelMastery,
    CardMastery,
    GraduationCheck,
)

WEAK_CARD_THRESHOLD = 0.60
GRADUATION_MEAN = 0.80
MAX_WEAK_SHARE = 0.10
MIN_SPACED_SHARE = 0.80
MIN_CARD_TYPES_FOR_TRANSFER = 2


def aggregate_bloom_level(bloom: BloomLevel, cards: Sequence[CardMastery]) -> BloomLevelMastery:
    """Mean mastery and weak-card share over a level's records."""
    if not cards:
        return BloomLevelMastery(bloom=bloom, mean_mastery=0.0, weak_share=0.0, cards=0)
    scores = [card.mastery for card in cards]
    weak = sum(1 for m in scores if m < WEAK_CARD_THRESHOLD)
    return BloomLevelMastery(
        bloom=bloom,
        mean_mastery=sum(scores) / len(scores),
        weak_share=weak / len(scores),
        cards=len(scores),
    )


def _has_card_type_diversity(cards: Sequence[CardMastery]) -> bool:
    types = {card.card_type for card in cards if card.card_type}
    if not types:
        # Unknown types cannot block graduation
        return True
    return len(types) >= MIN_CARD_TYPES_FOR_TRANSFER


def graduation_check(level: BloomLevelMastery, cards: Sequence[CardMastery]) -> GraduationCheck:
    """
    Decide whether a learner graduates from a level.

    Every failed rule adds a human readable reason; the check passes only
    when there are none.
    """
    reasons: list[str] = []
    if level.cards == 0 or not cards:
        reasons.append(f"No mastery records for {level.bloom.value}")

    if level.mean_mastery < GRADUATION_MEAN:
        reasons.append(
            f"Mastery {format_fixed(level.mean_mastery, 2)} < {format_fixed(GRADUATION_MEAN, 2)}"
        )
    if level.weak_share > MAX_WEAK_SHARE:
        reasons.append(
            f"Weak cards {format_fixed(level.weak_share * 100)}%"
            f" > {format_fixed(MAX_WEAK_SHARE * 100)}%"
        )

    spaced = sum(1 for card in cards if card.spacing.is_distributed)
    spaced_share = spaced / len(cards) if cards else 0.0
    if spaced_share < MIN_SPACED_SHARE:
        reasons.append(
            f"Distributed spacing evidence {format_fixed(spaced_share * 100)}%"
            f" < {format_fixed(MIN_SPACED_SHARE * 100)}%"
        )

    if level.bloom >= BloomLevel.APPLY and not _has_card_type_diversity(cards):
        reasons.append("Insufficient card-type diversity for transfer")

    return GraduationCheck(ok=not reasons, reasons=tuple(reasons))
