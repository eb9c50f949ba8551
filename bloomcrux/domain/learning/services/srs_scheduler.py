"""
SM-2 spaced repetition scheduler.

Extends classic SM-2 with:
- personal latency quantiles for the speed bonus
- a relearn ladder (20 min, 1 d, 3 d, 7 d) after a miss
- light interval fuzz on day-scale intervals to avoid review clumping
- gentle scaling by the card's retention target
- stability and difficulty signals that later feed mastery
"""

import math
import random
from dataclasses import replace
from datetime import datetime, timedelta

from bloomcrux.domain.learning.value_objects.mastery import (
    EF_MAX,
    EF_MIN,
    LatencyQuantiles,
    ReviewHistoryEntry,
    ReviewOutcome,
    SrsState,
    clamp,
    difficulty_from_ef,
)

PASSING_GRADE = 3.0
MIN_QUANTILE_SAMPLES = 20
MIN_INTERVAL_DAYS = 1 / 24
NON_TRIVIAL_INTERVAL_DAYS = 2.0
HISTORY_LIMIT = 50

# Relearn ladder: stage -> interval in days
RELEARN_STEPS: dict[int, float] = {
    0: 20 / (60 * 24),
    1: 1.0,
    2: 3.0,
    3: 7.0,
}
LAST_RELEARN_STAGE = 3


def grade_from_outcome(outcome: ReviewOutcome, latency: LatencyQuantiles | None = None) -> float:
    """
    Continuous SM-2 grade in [0, 5].

    Base is ``2 + 2c``. Speed only matters when the answer was mostly
    correct. Self-rated confidence nudges by at most 0.15 and a guess can
    never score above 3.
    """
    c = outcome.correctness
    grade = 2 + 2 * c

    if c > 0.5 and outcome.response_ms is not None:
        t = outcome.response_ms
        if latency is not None and latency.n >= MIN_QUANTILE_SAMPLES:
            if t <= latency.p25:
                grade += 0.4
            elif t >= latency.p75:
                grade -= 0.2
        elif t < 2000:
            grade += 0.25
        elif t > 8000:
            grade -= 0.15

    if outcome.confidence is not None:
        n = clamp(outcome.confidence / 3, 0, 1)
        grade += 0.3 * (n - 0.5)

    if outcome.guessed:
        grade = min(grade, 3.0)

    return clamp(grade, 0, 5)


def _update_ef(ef: float, grade: float) -> float:
    miss = 5 - grade
    return clamp(ef + (0.1 - miss * (0.08 + miss * 0.02)), EF_MIN, EF_MAX)


def _retention_scale(retention_target: float) -> float:
    return clamp(1 + (retention_target - 0.90), 0.90, 1.10)


def _fuzz(days: float, rng: random.Random) -> float:
    if days < 1:
        return days
    return days * rng.uniform(0.9, 1.1)


def _due_after(now: datetime, interval_days: float) -> datetime:
    if interval_days < 1:
        return now + timedelta(minutes=round(interval_days * 24 * 60))
    return now + timedelta(days=max(1, round(interval_days)))


def sm2_review(
    prev: SrsState | None,
    grade: float,
    now: datetime,
    rng: random.Random | None = None,
) -> SrsState:
    """
    Advance the SM-2 state by one review.

    A grade below 3 is a miss: the card enters (or stays on) the relearn
    ladder, and it counts as a lapse when the previous interval was at
    least two days or the card was already relearning. A pass climbs the
    ladder or, outside it, follows the 1 d / 6 d / interval * EF schedule.
    """
    rng = rng or random.Random()
    state = prev or SrsState.initial(now)
    history = (*state.history, ReviewHistoryEntry(ts=now, grade=grade))[-HISTORY_LIMIT:]

    ef = state.ef
    stability = state.stability
    lapses = state.lapses
    stage = state.relearn_stage
    scale = _retention_scale(state.retention_target)

    if grade < PASSING_GRADE:
        lapse = state.interval_days >= NON_TRIVIAL_INTERVAL_DAYS or stage is not None
        if lapse:
            lapses += 1
            ef = clamp(ef - 0.2, EF_MIN, EF_MAX)
        stability = max(0.5, stability * (0.80 if lapse else 0.90))

        if stage is None:
            # An early-learning miss skips the 20 minute step
            stage = 0 if lapse else 1
        interval = RELEARN_STEPS[min(stage, LAST_RELEARN_STAGE)]
        return replace(
            state,
            ef=ef,
            reps=0,
            interval_days=interval,
            next_due=_due_after(now, interval),
            history=history,
            lapses=lapses,
            stability=stability,
            difficulty=difficulty_from_ef(ef),
            relearn_stage=stage,
        )

    if stage is not None:
        if stage < LAST_RELEARN_STAGE:
            stage += 1
            interval = RELEARN_STEPS[stage]
            ef = _update_ef(ef, grade)
            stability += 0.06 * math.log2(1 + max(1.0, interval))
            return replace(
                state,
                ef=ef,
                interval_days=interval,
                next_due=now + timedelta(days=interval),
                history=history,
                stability=stability,
                difficulty=difficulty_from_ef(ef),
                relearn_stage=stage,
            )

        # Leaving the ladder restarts the schedule as a first success
        ef = _update_ef(ef, grade)
        stability += 0.10 * math.log2(1 + max(1.0, state.interval_days or 1.0))
        interval = _fuzz(1 * scale, rng)
        return replace(
            state,
            ef=ef,
            reps=1,
            interval_days=interval,
            next_due=now + timedelta(days=max(1, round(interval))),
            history=history,
            stability=stability,
            difficulty=difficulty_from_ef(ef),
            relearn_stage=None,
        )

    reps = state.reps + 1
    if reps == 1:
        interval = 1.0
    elif reps == 2:
        interval = 6.0
    else:
        interval = (state.interval_days or 6.0) * ef

    ef = _update_ef(ef, grade)
    interval = max(MIN_INTERVAL_DAYS, interval * scale)
    interval = _fuzz(interval, rng)
    stability += 0.08 * math.log2(1 + max(1.0, interval))

    return replace(
        state,
        ef=ef,
        reps=reps,
        interval_days=interval,
        next_due=_due_after(now, interval),
        history=history,
        stability=stability,
        difficulty=difficulty_from_ef(ef),
        relearn_stage=None,
    )
