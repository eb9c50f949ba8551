"""Value objects describing a learner's command over cards and levels."""

from dataclasses import dataclass, field
from datetime import datetime

from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_object import ValueObject
from bloomcrux.domain.common.value_objects.ids import CardId
from bloomcrux.domain.learning.bloom import BloomLevel

EF_DEFAULT = 2.5
EF_MIN = 1.3
EF_MAX = 2.8
DEFAULT_RETENTION_TARGET = 0.90
ACCURACY_WINDOW = 8
CONF_LAMBDA = 0.6


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def clamp01(x: float) -> float:
    return clamp(x, 0.0, 1.0)


def difficulty_from_ef(ef: float) -> float:
    """0 = easy, 1 = hard."""
    return clamp01((5 - ef) / (5 - EF_MIN))


@dataclass(frozen=True)
class ReviewOutcome(ValueObject):
    """
    One answer to one card.

    ``correctness`` is the fraction correct (0..1; multi-part cards may be
    partial). ``confidence`` is the learner's self rating 0..3.
    """

    correctness: float
    response_ms: int | None = None
    confidence: int | None = None
    guessed: bool = False
    card_type: str | None = None

    def __post_init__(self) -> None:
        if self.confidence is not None and not 0 <= self.confidence <= 3:
            raise ValidationError(
                "Confidence must be between 0 and 3", field="confidence", value=self.confidence
            )
        if self.response_ms is not None and self.response_ms < 0:
            raise ValidationError(
                "Response time cannot be negative", field="response_ms", value=self.response_ms
            )
        # Correctness is normalized rather than rejected
        object.__setattr__(self, "correctness", clamp01(float(self.correctness)))

    @property
    def is_correct(self) -> bool:
        return self.correctness > 0.5


@dataclass(frozen=True)
class LatencyQuantiles(ValueObject):
    """Per-learner response time quantiles (ms) over recent correct recalls."""

    p25: float
    p50: float
    p75: float
    n: int


@dataclass(frozen=True)
class ReviewHistoryEntry(ValueObject):
    ts: datetime
    grade: float


@dataclass(frozen=True)
class SrsState(ValueObject):
    """
    SM-2 scheduling state with relearn ladder and stability signals.

    ``relearn_stage`` is None outside the ladder, else 0..3.
    """

    ef: float = EF_DEFAULT
    reps: int = 0
    interval_days: float = 0.0
    next_due: datetime | None = None
    history: tuple[ReviewHistoryEntry, ...] = ()
    lapses: int = 0
    stability: float = 1.0
    difficulty: float = field(default_factory=lambda: difficulty_from_ef(EF_DEFAULT))
    relearn_stage: int | None = None
    retention_target: float = DEFAULT_RETENTION_TARGET

    @property
    def last_reviewed_at(self) -> datetime | None:
        return self.history[-1].ts if self.history else None

    @classmethod
    def initial(cls, now: datetime) -> "SrsState":
        return cls(next_due=now)


@dataclass(frozen=True)
class SpacingEvidence(ValueObject):
    """Whether the card has been recalled after gaps of T/2 and T days."""

    spaced_short_ok: bool = False
    spaced_long_ok: bool = False
    consecutive_spaced_successes: int = 0
    last_gap_days: float | None = None

    @property
    def is_distributed(self) -> bool:
        return self.spaced_short_ok and self.spaced_long_ok


@dataclass(frozen=True)
class AccuracyTrack(ValueObject):
    """Ring buffer of the last ``k`` binary outcomes; ``ptr`` is the newest slot."""

    k: int = ACCURACY_WINDOW
    ptr: int = 0
    outcomes: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.k <= ACCURACY_WINDOW:
            raise ValidationError(
                f"Accuracy window must be between 1 and {ACCURACY_WINDOW}", field="k", value=self.k
            )

    def push(self, correct: bool) -> "AccuracyTrack":
        bit = 1 if correct else 0
        if len(self.outcomes) < self.k:
            outcomes = (*self.outcomes, bit)
            return AccuracyTrack(k=self.k, ptr=len(outcomes) - 1, outcomes=outcomes)
        ptr = (self.ptr + 1) % self.k
        slots = list(self.outcomes)
        slots[ptr] = bit
        return AccuracyTrack(k=self.k, ptr=ptr, outcomes=tuple(slots))

    def last_two(self) -> tuple[int, int] | None:
        """(previous, newest) outcome pair, when at least two are recorded."""
        n = len(self.outcomes)
        if n < 2:
            return None
        return self.outcomes[(self.ptr - 1 + n) % n], self.outcomes[self.ptr]


@dataclass(frozen=True)
class ConfidenceTrack(ValueObject):
    ewma: float = 0.0
    lam: float = CONF_LAMBDA


@dataclass(frozen=True)
class CardMastery(ValueObject):
    """
    Per-card mastery record.

    Signals are cached in [0, 1]: retention (R), accuracy (A),
    confidence (C) and the blended mastery (M).
    """

    card_id: CardId
    bloom: BloomLevel
    srs: SrsState = field(default_factory=SrsState)
    spacing: SpacingEvidence = field(default_factory=SpacingEvidence)
    accuracy: AccuracyTrack = field(default_factory=AccuracyTrack)
    confidence: ConfidenceTrack = field(default_factory=ConfidenceTrack)
    retention: float = 0.0
    accuracy_signal: float = 0.0
    confidence_signal: float = 0.0
    mastery: float = 0.0
    card_type: str | None = None
    updated_at: datetime | None = None

    @classmethod
    def new(
        cls, card_id: CardId, bloom: BloomLevel, now: datetime, card_type: str | None = None
    ) -> "CardMastery":
        """Fresh record for a card that has never been reviewed."""
        return cls(
            card_id=card_id,
            bloom=bloom,
            srs=SrsState.initial(now),
            card_type=card_type,
            updated_at=now,
        )


@dataclass(frozen=True)
class BloomLevelMastery(ValueObject):
    bloom: BloomLevel
    mean_mastery: float
    weak_share: float
    cards: int


@dataclass(frozen=True)
class GraduationCheck(ValueObject):
    ok: bool
    reasons: tuple[str, ...] = ()
