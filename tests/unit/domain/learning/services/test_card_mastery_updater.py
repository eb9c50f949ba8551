"""Tests for per-card mastery updates and review queues."""

import random
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from bloomcrux.domain.common.value_objects.ids import CardId
from bloomcrux.domain.learning.bloom import BloomLevel
from bloomcrux.domain.learning.services.card_mastery_updater import (
    accuracy_momentum,
    retention_strength,
    update_card_mastery,
)
from bloomcrux.domain.learning.services.review_queues import (
    due_queue,
    interleave_by_topic,
    struggle_queue,
)
from bloomcrux.domain.learning.value_objects.mastery import (
    AccuracyTrack,
    CardMastery,
    ReviewOutcome,
)

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def _record(card_id: int, card_type: str = "Standard MCQ", **fields: object) -> CardMastery:
    base = CardMastery.new(CardId(card_id), BloomLevel.REMEMBER, NOW, card_type=card_type)
    return replace(base, **fields)


def _due_at(card_id: int, due: datetime) -> CardMastery:
    record = _record(card_id)
    return replace(record, srs=replace(record.srs, next_due=due))


class TestSignals:
    def test_retention_reaches_one_at_target_interval(self) -> None:
        assert retention_strength(7, BloomLevel.REMEMBER) == pytest.approx(1.0)
        assert retention_strength(0, BloomLevel.REMEMBER) == 0.0

    def test_spaced_streak_boost_is_capped(self) -> None:
        base = retention_strength(1, BloomLevel.CREATE)
        assert retention_strength(1, BloomLevel.CREATE, spaced_streak=10) == pytest.approx(
            base + 0.15
        )

    def test_accuracy_momentum_rewards_recovery(self) -> None:
        assert accuracy_momentum(AccuracyTrack()) == 0.0
        recovered = AccuracyTrack().push(False).push(True)
        plain = (0.7**2 * 0 + 0.7 * 1) / (0.7**2 + 0.7)
        assert accuracy_momentum(recovered) == pytest.approx(plain + 0.05)

    def test_accuracy_track_wraps_around(self) -> None:
        track = AccuracyTrack(k=2).push(True).push(True).push(False)
        assert track.outcomes == (0, 1)
        assert track.last_two() == (1, 0)


class TestUpdateCardMastery:
    def test_correct_answer_builds_mastery(self) -> None:
        prev = CardMastery.new(CardId(1), BloomLevel.REMEMBER, NOW)

        hit = update_card_mastery(
            prev, ReviewOutcome(correctness=1.0), NOW, rng=random.Random(5)
        )
        miss = update_card_mastery(prev, ReviewOutcome(correctness=0.0), NOW)

        assert hit.srs.reps == 1
        assert hit.accuracy.outcomes == (1,)
        assert hit.mastery > miss.mastery
        assert miss.srs.reps == 0
        assert hit.updated_at == NOW


class TestReviewQueues:
    def test_due_queue_orders_most_overdue_first(self) -> None:
        late = _due_at(1, NOW - timedelta(days=3))
        soon = _due_at(2, NOW - timedelta(hours=1))
        future = _due_at(3, NOW + timedelta(days=1))

        assert [c.card_id.value for c in due_queue([soon, future, late], NOW)] == [1, 2]

    def test_struggle_queue_weakest_first(self) -> None:
        strong = _record(1, mastery=0.9, retention=0.9)
        weak = _record(2, mastery=0.2, retention=0.9)
        forgetting = _record(3, mastery=0.7, retention=0.3)

        queue = struggle_queue([strong, weak, forgetting])

        assert [c.card_id.value for c in queue] == [2, 3]

    def test_interleave_round_robins_card_types(self) -> None:
        cards = [
            _record(1, "Standard MCQ"),
            _record(2, "Standard MCQ"),
            _record(3, "Sorting"),
            _record(4, "Sorting"),
        ]
        assert [c.card_id.value for c in interleave_by_topic(cards)] == [1, 3, 2, 4]
