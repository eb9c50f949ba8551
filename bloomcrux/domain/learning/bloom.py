"""Bloom's taxonomy levels used to bucket cards by cognitive demand."""

from enum import Enum


class BloomLevel(str, Enum):
    """
    Bloom levels in ascending order of difficulty.

    Declaration order is the taxonomy order; comparisons use it, so
    ``BloomLevel.REMEMBER < BloomLevel.APPLY`` holds.
    """

    REMEMBER = "Remember"
    UNDERSTAND = "Understand"
    APPLY = "Apply"
    ANALYZE = "Analyze"
    EVALUATE = "Evaluate"
    CREATE = "Create"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BloomLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BloomLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BloomLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BloomLevel):
            return NotImplemented
        return self.rank >= other.rank

    @property
    def target_interval_days(self) -> int:
        """Review interval (days) at which a card counts as retained for this level."""
        return TARGET_INTERVAL_DAYS[self]

    @property
    def xp_multiplier(self) -> float:
        return XP_MULTIPLIERS[self]

    def lower_levels(self) -> list["BloomLevel"]:
        """Levels strictly below this one, lowest first."""
        return list(_ORDER[: self.rank])

    def next_level(self) -> "BloomLevel | None":
        if self.rank + 1 >= len(_ORDER):
            return None
        return _ORDER[self.rank + 1]

    @classmethod
    def from_string(cls, value: str) -> "BloomLevel":
        """Parse a level name case-insensitively."""
        normalized = value.strip().lower()
        for level in cls:
            if level.value.lower() == normalized:
                return level
        raise ValueError(f"Invalid bloom level: {value}. Valid levels are: {[lvl.value for lvl in cls]}")


_ORDER: tuple[BloomLevel, ...] = tuple(BloomLevel)

BLOOM_LEVELS: tuple[BloomLevel, ...] = _ORDER

TARGET_INTERVAL_DAYS: dict[BloomLevel, int] = {
    BloomLevel.REMEMBER: 7,
    BloomLevel.UNDERSTAND: 14,
    BloomLevel.APPLY: 21,
    BloomLevel.ANALYZE: 30,
    BloomLevel.EVALUATE: 45,
    BloomLevel.CREATE: 60,
}

XP_MULTIPLIERS: dict[BloomLevel, float] = {
    BloomLevel.REMEMBER: 1.0,
    BloomLevel.UNDERSTAND: 1.25,
    BloomLevel.APPLY: 1.5,
    BloomLevel.ANALYZE: 2.0,
    BloomLevel.EVALUATE: 2.5,
    BloomLevel.CREATE: 3.0,
}
