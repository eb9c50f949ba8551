"""Due and struggle review queues built from card mastery records."""

from collections.abc import Sequence
from datetime import datetime

from bloomcrux.domain.learning.value_objects.mastery import CardMastery

STRUGGLE_MASTERY = 0.60
STRUGGLE_RETENTION = 0.5
DEFAULT_TOPIC = "__default"


def _topic_key(card: CardMastery) -> str:
    return card.card_type or DEFAULT_TOPIC


def interleave_by_topic(cards: Sequence[CardMastery]) -> list[CardMastery]:
    """Round-robin across card types, keeping each type's internal order."""
    buckets: dict[str, list[CardMastery]] = {}
    for card in cards:
        buckets.setdefault(_topic_key(card), []).append(card)
    if len(buckets) <= 1:
        return list(cards)

    queues = list(buckets.values())
    out: list[CardMastery] = []
    depth = 0
    while len(out) < len(cards):
        for queue in queues:
            if depth < len(queue):
                out.append(queue[depth])
        depth += 1
    return out


def due_queue(cards: Sequence[CardMastery], now: datetime) -> list[CardMastery]:
    """Cards due at ``now``, most overdue first."""
    due = [c for c in cards if c.srs.next_due is not None and c.srs.next_due <= now]
    due.sort(key=lambda c: c.srs.next_due or now)
    return interleave_by_topic(due)


def struggle_queue(cards: Sequence[CardMastery]) -> list[CardMastery]:
    """Weak cards (low mastery or retention), weakest first."""
    weak = [
        c for c in cards if c.mastery < STRUGGLE_MASTERY or c.retention < STRUGGLE_RETENTION
    ]
    weak.sort(key=lambda c: (c.mastery, c.retention))
    return interleave_by_topic(weak)
