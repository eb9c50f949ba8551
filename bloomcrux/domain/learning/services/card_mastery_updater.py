"""Per-card mastery update applied after every answer."""

import math
import random
from dataclasses import replace
from datetime import datetime

from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.services.srs_scheduler import grade_from_outcome, sm2_review
from bloomcrux.domain.learning.value_objects.mastery import (
    AccuracyTrack,
    CardMastery,
    LatencyQuantiles,
    ReviewOutcome,
    SpacingEvidence,
    clamp01,
)

WEIGHT_R = 0.5
WEIGHT_A = 0.3
WEIGHT_C = 0.2

ACCURACY_LAMBDA = 0.7
RECOVERY_BONUS = 0.05
SPACED_STREAK_BOOST = 0.07
MAX_SPACED_STREAK_BOOST = 0.15


def retention_strength(interval_days: float, bloom: BloomLevel, spaced_streak: int = 0) -> float:
    """Next interval normalized against the level's target, plus a consolidation boost."""
    target = bloom.target_interval_days
    base = clamp01(math.log2(interval_days + 1) / math.log2(target + 1))
    boost = min(MAX_SPACED_STREAK_BOOST, SPACED_STREAK_BOOST * spaced_streak)
    return clamp01(base + boost)


def accuracy_momentum(track: AccuracyTrack, lam: float = ACCURACY_LAMBDA) -> float:
    """Recency-weighted accuracy with a small bonus for recovering from a miss."""
    k = len(track.outcomes)
    if k == 0:
        return 0.0
    weights = [lam ** (k - i) for i in range(k)]
    value = sum(w * o for w, o in zip(weights, track.outcomes, strict=True)) / sum(weights)
    if track.last_two() == (0, 1):
        value = min(1.0, value + RECOVERY_BONUS)
    return value


def card_mastery_score(retention: float, accuracy: float, confidence: float) -> float:
    return clamp01(WEIGHT_R * retention + WEIGHT_A * accuracy + WEIGHT_C * confidence)


def _confidence_point(outcome: ReviewOutcome) -> float:
    if outcome.confidence is not None:
        return outcome.confidence / 3
    if outcome.guessed:
        return 0.0
    return 0.7 if outcome.is_correct else 0.3


def update_card_mastery(
    prev: CardMastery,
    outcome: ReviewOutcome,
    now: datetime,
    latency: LatencyQuantiles | None = None,
    rng: random.Random | None = None,
) -> CardMastery:
    """
    Fold one answer into a card's mastery record.

    Grades the outcome, advances SM-2, records spacing evidence against the
    level's target interval, pushes the outcome into the accuracy buffer,
    updates the confidence EWMA and recomputes R, A, C and M.
    """
    grade = grade_from_outcome(outcome, latency)
    srs = sm2_review(prev.srs, grade, now, rng)

    last_seen = prev.srs.last_reviewed_at
    gap_days = None
    if last_seen is not None:
        gap_days = max(0.0, (now - last_seen).total_seconds() / 86400)

    target = prev.bloom.target_interval_days
    succeeded = outcome.correctness > 0
    short_gap = gap_days is not None and gap_days >= target / 2
    long_gap = gap_days is not None and gap_days >= target
    spacing = SpacingEvidence(
        spaced_short_ok=prev.spacing.spaced_short_ok or (succeeded and short_gap),
        spaced_long_ok=prev.spacing.spaced_long_ok or (succeeded and long_gap),
        consecutive_spaced_successes=(
            prev.spacing.consecutive_spaced_successes + 1
            if outcome.is_correct and short_gap
            else 0
        ),
        last_gap_days=gap_days,
    )

    accuracy = prev.accuracy.push(outcome.is_correct)
    conf = prev.confidence
    conf = replace(conf, ewma=conf.lam * conf.ewma + (1 - conf.lam) * _confidence_point(outcome))

    r = retention_strength(srs.interval_days, prev.bloom, spacing.consecutive_spaced_successes)
    a = accuracy_momentum(accuracy)
    c = clamp01(conf.ewma)

    return replace(
        prev,
        srs=srs,
        spacing=spacing,
        accuracy=accuracy,
        confidence=conf,
        retention=r,
        accuracy_signal=a,
        confidence_signal=c,
        mastery=card_mastery_score(r, a, c),
        card_type=outcome.card_type or prev.card_type,
        updated_at=now,
    )
