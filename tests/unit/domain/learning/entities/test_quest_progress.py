"""Tests for QuestProgress entity."""

from datetime import UTC, datetime

import pytest

from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BLOOM_LEVELS, BloomLevel
from bloomcrux.domain.learning.entities.quest_progress import QuestProgress

NOW = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)
COUNTS = {BloomLevel.REMEMBER: 4, BloomLevel.UNDERSTAND: 3}


def _fresh(mission_cap: int = 50) -> QuestProgress:
    return QuestProgress.fresh(UserId(1), DeckId(7), COUNTS, mission_cap)


class TestQuestProgress:
    def test_fresh_progress_has_every_level(self) -> None:
        progress = _fresh(mission_cap=3)

        assert set(progress.per_bloom) == set(BLOOM_LEVELS)
        assert progress.level(BloomLevel.REMEMBER).total_missions == 2
        assert progress.level(BloomLevel.CREATE).total_missions == 0
        assert progress.unlocked_levels() == [BloomLevel.REMEMBER]

    def test_clearing_a_level_unlocks_the_next(self) -> None:
        progress = _fresh()

        level = progress.record_completion(BloomLevel.REMEMBER, 70, 4, NOW, COUNTS, 50)

        assert level.cleared
        assert level.missions_completed == 1
        assert level.completed_cards == 4
        assert progress.unlocked_levels() == [BloomLevel.REMEMBER, BloomLevel.UNDERSTAND]

    def test_low_score_does_not_relock(self) -> None:
        progress = _fresh()
        progress.record_completion(BloomLevel.REMEMBER, 90, 4, NOW, COUNTS, 50)
        progress.record_completion(BloomLevel.REMEMBER, 10, 4, NOW, COUNTS, 50)

        level = progress.level(BloomLevel.REMEMBER)
        assert level.cleared
        assert level.completed_cards == 4
        assert [a.percent for a in level.recent_attempts] == [10, 90]
        # (10 * 1 + 90 * 0.8) / 1.8
        assert level.weighted_avg == 46

    def test_score_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            _fresh().record_completion(BloomLevel.REMEMBER, 101, 4, NOW, COUNTS, 50)

    def test_deck_mastered_when_levels_with_cards_are_cleared(self) -> None:
        progress = _fresh()
        progress.record_completion(BloomLevel.REMEMBER, 80, 4, NOW, COUNTS, 50)
        assert not progress.is_deck_mastered()

        progress.record_completion(BloomLevel.UNDERSTAND, 65, 3, NOW, COUNTS, 50)
        assert progress.is_deck_mastered()

    def test_totals_survive_removed_cards(self) -> None:
        progress = _fresh()
        progress.refresh_totals({BloomLevel.UNDERSTAND: 3}, 50)
        assert progress.level(BloomLevel.REMEMBER).total_cards == 4

    def test_stored_progress_reloads(self) -> None:
        progress = _fresh()
        progress.record_completion(BloomLevel.REMEMBER, 75, 4, NOW, COUNTS, 50)

        data = progress.to_dict()
        data["Bogus"] = {}
        reloaded = QuestProgress.from_dict(UserId(1), DeckId(7), data)

        level = reloaded.level(BloomLevel.REMEMBER)
        assert level.cleared
        assert level.recent_attempts[0].at == NOW
        assert level.last_completion is not None
        assert level.last_completion.percent == 75
