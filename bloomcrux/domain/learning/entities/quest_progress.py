"""Per-deck quest progress for one learner."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bloomcrux.domain.common.exceptions import ValidationError
from bloomcrux.domain.common.numbers import round_half_up
from bloomcrux.domain.common.value_objects.ids import DeckId, UserId
from bloomcrux.domain.learning.bloom import BLOOM_LEVELS, BloomLevel

RECENT_ATTEMPTS_LIMIT = 10
RECENT_DECAY = 0.8
DEFAULT_CLEAR_THRESHOLD = 65.0


@dataclass
class RecentAttempt:
    percent: int
    at: datetime


@dataclass
class LastCompletion:
    percent: float
    timestamp: datetime
    attempts: int


@dataclass
class BloomProgress:
    """Counters for one Bloom level of a deck."""

    total_cards: int = 0
    total_missions: int = 0
    completed_cards: int = 0
    missions_completed: int = 0
    mastery_percent: int = 0
    mastered: bool = False
    accuracy_sum: float = 0.0
    accuracy_count: int = 0
    recent_attempts: list[RecentAttempt] = field(default_factory=list)
    weighted_avg: int = 0
    cleared: bool = False
    last_completion: LastCompletion | None = None

    def set_totals(self, total_cards: int, mission_cap: int) -> None:
        self.total_cards = total_cards
        self.total_missions = math.ceil(total_cards / mission_cap) if total_cards else 0

    def record_completion(
        self, score_pct: float, cards_seen: int, at: datetime, clear_threshold: float
    ) -> None:
        self.missions_completed += 1
        self.completed_cards = min(self.total_cards, self.completed_cards + max(0, cards_seen))
        self.accuracy_sum += max(0.0, min(1.0, score_pct / 100))
        self.accuracy_count += 1

        percent = round_half_up(max(0.0, min(100.0, score_pct)))
        self.recent_attempts.insert(0, RecentAttempt(percent=percent, at=at))
        del self.recent_attempts[RECENT_ATTEMPTS_LIMIT:]

        weights = [RECENT_DECAY**i for i in range(len(self.recent_attempts))]
        weighted = sum(a.percent * w for a, w in zip(self.recent_attempts, weights, strict=True))
        self.weighted_avg = round_half_up(weighted / (sum(weights) or 1))

        if score_pct >= clear_threshold:
            self.cleared = True
        self.last_completion = LastCompletion(
            percent=score_pct, timestamp=at, attempts=self.accuracy_count
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCards": self.total_cards,
            "totalMissions": self.total_missions,
            "completedCards": self.completed_cards,
            "missionsCompleted": self.missions_completed,
            "masteryPercent": self.mastery_percent,
            "mastered": self.mastered,
            "accuracySum": self.accuracy_sum,
            "accuracyCount": self.accuracy_count,
            "recentAttempts": [
                {"percent": a.percent, "at": a.at.isoformat()} for a in self.recent_attempts
            ],
            "weightedAvg": self.weighted_avg,
            "cleared": self.cleared,
            "lastCompletion": (
                {
                    "percent": self.last_completion.percent,
                    "timestamp": self.last_completion.timestamp.isoformat(),
                    "attempts": self.last_completion.attempts,
                }
                if self.last_completion
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BloomProgress":
        last = data.get("lastCompletion")
        return cls(
            total_cards=int(data.get("totalCards", 0)),
            total_missions=int(data.get("totalMissions", 0)),
            completed_cards=int(data.get("completedCards", 0)),
            missions_completed=int(data.get("missionsCompleted", 0)),
            mastery_percent=int(data.get("masteryPercent", 0)),
            mastered=bool(data.get("mastered", False)),
            accuracy_sum=float(data.get("accuracySum", 0.0)),
            accuracy_count=int(data.get("accuracyCount", 0)),
            recent_attempts=[
                RecentAttempt(percent=int(a["percent"]), at=datetime.fromisoformat(a["at"]))
                for a in data.get("recentAttempts", [])
            ],
            weighted_avg=int(data.get("weightedAvg", 0)),
            cleared=bool(data.get("cleared", False)),
            last_completion=(
                LastCompletion(
                    percent=float(last["percent"]),
                    timestamp=datetime.fromisoformat(last["timestamp"]),
                    attempts=int(last["attempts"]),
                )
                if last
                else None
            ),
        )


@dataclass
class QuestProgress:
    """
    Quest progress of a learner on a deck, one ``BloomProgress`` per level.

    Business Rules:
    - Every level is always present, with totals matching the deck's cards
    - A single mission scoring at least the clear threshold clears a level
    - A cleared level never relocks
    """

    user_id: UserId
    deck_id: DeckId
    per_bloom: dict[BloomLevel, BloomProgress] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for level in BLOOM_LEVELS:
            self.per_bloom.setdefault(level, BloomProgress())

    def level(self, level: BloomLevel) -> BloomProgress:
        return self.per_bloom[level]

    def refresh_totals(self, card_counts: Mapping[BloomLevel, int], mission_cap: int) -> None:
        """Sync per-level totals with the deck's current cards."""
        if mission_cap <= 0:
            raise ValidationError("Mission cap must be positive", field="mission_cap")
        for level in BLOOM_LEVELS:
            progress = self.per_bloom[level]
            counted = card_counts.get(level, 0)
            # Keep a stored total when the level's cards are gone
            progress.set_totals(counted if counted > 0 else progress.total_cards, mission_cap)

    def record_completion(
        self,
        level: BloomLevel,
        score_pct: float,
        cards_seen: int,
        at: datetime,
        card_counts: Mapping[BloomLevel, int],
        mission_cap: int,
        clear_threshold: float = DEFAULT_CLEAR_THRESHOLD,
    ) -> BloomProgress:
        if not 0 <= score_pct <= 100:
            raise ValidationError(
                "Score must be between 0 and 100", field="score_pct", value=score_pct
            )
        self.refresh_totals(card_counts, mission_cap)
        progress = self.per_bloom[level]
        progress.record_completion(score_pct, cards_seen, at, clear_threshold)
        return progress

    def apply_mastery(self, level: BloomLevel, mastery_pct: int, mastered: bool) -> None:
        progress = self.per_bloom[level]
        progress.mastery_percent = mastery_pct
        progress.mastered = progress.mastered or mastered

    def levels_with_cards(self) -> list[BloomLevel]:
        return [lvl for lvl in BLOOM_LEVELS if self.per_bloom[lvl].total_cards > 0]

    def is_deck_mastered(self) -> bool:
        """Every level that has cards is cleared (and at least one level has cards)."""
        levels = self.levels_with_cards()
        return bool(levels) and all(self.per_bloom[lvl].cleared for lvl in levels)

    def unlocked_levels(self) -> list[BloomLevel]:
        """Remember is always open; each cleared level opens the next."""
        unlocked = [BLOOM_LEVELS[0]]
        for level in BLOOM_LEVELS[:-1]:
            if not self.per_bloom[level].cleared:
                break
            nxt = level.next_level()
            if nxt is not None:
                unlocked.append(nxt)
        return unlocked

    def to_dict(self) -> dict[str, Any]:
        return {level.value: self.per_bloom[level].to_dict() for level in BLOOM_LEVELS}

    @classmethod
    def fresh(
        cls,
        user_id: UserId,
        deck_id: DeckId,
        card_counts: Mapping[BloomLevel, int],
        mission_cap: int,
    ) -> "QuestProgress":
        progress = cls(user_id=user_id, deck_id=deck_id)
        progress.refresh_totals(card_counts, mission_cap)
        return progress

    @classmethod
    def from_dict(
        cls, user_id: UserId, deck_id: DeckId, data: Mapping[str, Any] | None
    ) -> "QuestProgress":
        per_bloom: dict[BloomLevel, BloomProgress] = {}
        for key, value in (data or {}).items():
            try:
                level = BloomLevel.from_string(key)
            except ValueError:
                continue
            per_bloom[level] = BloomProgress.from_dict(value or {})
        return cls(user_id=user_id, deck_id=deck_id, per_bloom=per_bloom)
