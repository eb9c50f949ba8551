"""
Quest mission composition.

A mission at a Bloom level mixes three pools:
- primary: the level's own cards, split into chunks of ``mission_cap``
- blasts: cards from lower levels, favouring the least recently seen
- review: weak lower-level cards (never at Remember)

Everything is deterministic for a given deck, level, mission index and seed.
"""

import math
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field

from bloomcrux.domain.common.numbers import round_half_up
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.entities.card_performance import CardPerformance
from bloomcrux.domain.learning.services.deterministic_shuffle import hash_seed, seeded_shuffle

PASS_EPSILON = 1e-6
REVIEW_WINDOW_SHARE = 0.2
COLLAPSE_SCORE = 50


@dataclass(frozen=True)
class QuestSettings:
    pass_threshold: float = 60.0
    mission_cap: int = 50
    blasts_percent: float = 30.0


@dataclass(frozen=True)
class QuestCard:
    """The slice of a card the composer needs."""

    card_id: int
    bloom_level: BloomLevel


@dataclass(frozen=True)
class MissionSet:
    primary: list[QuestCard]
    blasts: list[QuestCard]
    review: list[QuestCard]


@dataclass(frozen=True)
class MissionDebug:
    primary_count: int
    blasts_requested: int
    blasts_chosen: int
    review_requested: int
    review_chosen: int
    trimmed_from_blasts: int
    trimmed_from_review: int
    total: int


@dataclass(frozen=True)
class MissionComposition:
    primary_ids: list[int]
    blasts_ids: list[int]
    review_ids: list[int]
    mission_ids: list[int]
    seed_used: str
    debug: MissionDebug


@dataclass(frozen=True)
class PassResult:
    total: int
    correct: float
    percent: float
    passed: bool


@dataclass
class MissionRequest:
    """Inputs for composing one mission."""

    deck_id: int
    level: BloomLevel
    cards: Sequence[QuestCard]
    performance: Mapping[int, CardPerformance] | None = None
    settings: QuestSettings = field(default_factory=QuestSettings)
    active_card_ids: Collection[int] | None = None
    review_candidate_ids: Sequence[int] | None = None
    mission_index: int = 0
    seed: str | None = None


def _dedupe(ids: Sequence[int]) -> list[int]:
    return list(dict.fromkeys(ids))


def _last_seen_key(perf: CardPerformance | None) -> float:
    if perf is None or perf.last_seen_at is None:
        return 0.0
    return perf.last_seen_at.timestamp()


def compute_mission_set(request: MissionRequest) -> MissionSet:
    """Build the primary, blasts and review pools for a level."""
    active = set(request.active_card_ids) if request.active_card_ids is not None else None

    def is_active(card: QuestCard) -> bool:
        return active is None or card.card_id in active

    level = request.level
    lower_levels = set(level.lower_levels())
    primary = [c for c in request.cards if is_active(c) and c.bloom_level == level]
    lower_pool = [c for c in request.cards if is_active(c) and c.bloom_level in lower_levels]

    performance = request.performance or {}
    suffix = f"{request.mission_index}:{request.seed or ''}"

    blasts_count = math.floor(
        request.settings.blasts_percent / 100 * (len(primary) + len(lower_pool))
    )
    oldest_first = sorted(
        lower_pool, key=lambda c: (_last_seen_key(performance.get(c.card_id)), c.card_id)
    )
    blasts = seeded_shuffle(oldest_first, f"{request.deck_id}:{level.value}:blasts:{suffix}")
    blasts = blasts[:blasts_count]

    by_id = {c.card_id: c for c in request.cards}
    allowed = {c.card_id for c in request.cards if c.bloom_level in lower_levels}
    review: list[QuestCard] = []
    if request.review_candidate_ids:
        review = [
            by_id[cid]
            for cid in request.review_candidate_ids
            if cid in allowed and is_active(by_id[cid])
        ]
    elif performance:
        ranked = sorted(
            (perf for cid, perf in performance.items() if cid in allowed),
            key=lambda p: (-p.wrong, p.attempts),
        )
        ranked_ids = [p.card_id.value for p in ranked]
        window = math.ceil(len(primary) * REVIEW_WINDOW_SHARE)
        if window > 0 and ranked_ids:
            rotation = hash_seed(f"{request.deck_id}:{level.value}:review:{suffix}") % len(
                ranked_ids
            )
            rotated = ranked_ids[rotation:] + ranked_ids[:rotation]
            review = [by_id[cid] for cid in _dedupe(rotated[:window]) if is_active(by_id[cid])]

    if level == BloomLevel.REMEMBER:
        review = []

    return MissionSet(primary=primary, blasts=blasts, review=review)


def split_into_missions(cards: Sequence[QuestCard], cap: int) -> list[list[int]]:
    ids = [c.card_id for c in cards]
    return [ids[i : i + cap] for i in range(0, len(ids), cap)]


def compose_mission(request: MissionRequest) -> MissionComposition:
    """
    Pick the card ids for one mission and shuffle them.

    Primary cards come from chunk ``mission_index``. When the mix exceeds
    ``mission_cap``, blasts are trimmed first, then review.
    """
    sets = compute_mission_set(request)
    cap = request.settings.mission_cap
    chunks = split_into_missions(sets.primary, cap)
    chunk = chunks[request.mission_index] if 0 <= request.mission_index < len(chunks) else []

    primary_ids = _dedupe(chunk)
    taken = set(primary_ids)
    blasts_ids = _dedupe([c.card_id for c in sets.blasts if c.card_id not in taken])
    taken.update(blasts_ids)
    review_ids = _dedupe([c.card_id for c in sets.review if c.card_id not in taken])

    kept_blasts, kept_review = blasts_ids, review_ids
    overflow = len(primary_ids) + len(blasts_ids) + len(review_ids) - cap
    if overflow > 0:
        if len(blasts_ids) >= overflow:
            kept_blasts = blasts_ids[: len(blasts_ids) - overflow]
        else:
            kept_blasts = []
            remaining = overflow - len(blasts_ids)
            kept_review = review_ids[: max(0, len(review_ids) - remaining)]

    seed_used = request.seed or f"{request.deck_id}:{request.level.value}:{request.mission_index}"
    mission_ids = seeded_shuffle([*primary_ids, *kept_blasts, *kept_review], seed_used)

    return MissionComposition(
        primary_ids=primary_ids,
        blasts_ids=blasts_ids,
        review_ids=review_ids,
        mission_ids=mission_ids,
        seed_used=seed_used,
        debug=MissionDebug(
            primary_count=len(primary_ids),
            blasts_requested=len(sets.blasts),
            blasts_chosen=len(blasts_ids),
            review_requested=len(sets.review),
            review_chosen=len(review_ids),
            trimmed_from_blasts=len(blasts_ids) - len(kept_blasts),
            trimmed_from_review=len(review_ids) - len(kept_review),
            total=len(mission_ids),
        ),
    )


def compute_pass(total: int, correct: float, pass_threshold: float = 60.0) -> PassResult:
    """Score a mission; the pass decision uses the unrounded percent."""
    raw = correct / total * 100 if total > 0 else 0.0
    percent = round_half_up(raw * 10) / 10
    return PassResult(
        total=total, correct=correct, percent=percent, passed=raw + PASS_EPSILON >= pass_threshold
    )


def weighted_average(percents: Sequence[float]) -> int:
    """Linearly weighted mean, later attempts weighing more."""
    if not percents:
        return 0
    weights = range(1, len(percents) + 1)
    total = sum(p * w for p, w in zip(percents, weights, strict=True))
    return round_half_up(total / max(1, sum(weights)))


def has_collapse(percents: Sequence[float]) -> bool:
    """Two consecutive scores under 50 among the last three attempts."""
    last3 = list(percents[-3:])
    return any(
        last3[i - 1] < COLLAPSE_SCORE and last3[i] < COLLAPSE_SCORE for i in range(1, len(last3))
    )
