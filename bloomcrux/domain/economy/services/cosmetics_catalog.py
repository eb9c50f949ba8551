"""
Cosmetics for sale and the commander levels that unlock them.

Prices are tuned so an item is affordable two to four good missions after
it unlocks.
"""

from dataclasses import dataclass
from typing import Literal

CosmeticCategory = Literal["DeckCovers", "AvatarFrames", "PageBackgrounds"]

CATEGORY_UNLOCK_LEVELS: dict[CosmeticCategory, int] = {
    "DeckCovers": 2,
    "AvatarFrames": 4,
    "PageBackgrounds": 6,
}


@dataclass(frozen=True)
class Cosmetic:
    id: str
    name: str
    category: CosmeticCategory
    unlock_level: int
    price: int


@dataclass(frozen=True)
class Unlock:
    """A milestone on the commander level track: one item or a whole category."""

    id: str
    name: str
    level: int
    kind: Literal["item", "category"]
    category: CosmeticCategory | None = None


CATALOG: tuple[Cosmetic, ...] = (
    Cosmetic("Sunrise", "Sunrise Deck Cover", "DeckCovers", 2, 180),
    Cosmetic("DeepSpace", "Deep Space Deck Cover", "DeckCovers", 3, 240),
    Cosmetic("NeonGlow", "Neon Glow Avatar Frame", "AvatarFrames", 4, 240),
    Cosmetic("NightMission", "Night Mission Deck Cover", "DeckCovers", 5, 360),
    Cosmetic("AgentStealth", "Agent Stealth Deck Cover", "DeckCovers", 8, 520),
    Cosmetic("Rainforest", "Rainforest Deck Cover", "DeckCovers", 11, 700),
    Cosmetic("DesertStorm", "Desert Storm Deck Cover", "DeckCovers", 13, 850),
)

UNLOCKS: tuple[Unlock, ...] = (
    Unlock("Sunrise", "Sunrise Deck Cover", CATEGORY_UNLOCK_LEVELS["DeckCovers"], "item", "DeckCovers"),
    Unlock("DeepSpace", "Deep Space Deck Cover", 3, "item", "DeckCovers"),
    Unlock("AvatarFrames", "Avatar Frames", CATEGORY_UNLOCK_LEVELS["AvatarFrames"], "category"),
    Unlock("NightMission", "Night Mission Deck Cover", 5, "item", "DeckCovers"),
    Unlock("PageBackgrounds", "Page Backgrounds", CATEGORY_UNLOCK_LEVELS["PageBackgrounds"], "category"),
)

_BY_ID = {item.id: item for item in CATALOG}


def get_cosmetic(cosmetic_id: str) -> Cosmetic | None:
    return _BY_ID.get(cosmetic_id)


def unlocks_at_or_below(level: int) -> list[Unlock]:
    return [u for u in UNLOCKS if u.level <= level]


def next_unlock(level: int) -> Unlock | None:
    return next((u for u in UNLOCKS if level < u.level), None)


def unlocks_between(prev_level: int, new_level: int) -> list[Unlock]:
    """Milestones crossed when moving from ``prev_level`` up to ``new_level``."""
    if new_level <= prev_level:
        return []
    return [u for u in UNLOCKS if prev_level < u.level <= new_level]


def is_unlocked(cosmetic: Cosmetic, commander_level: int) -> bool:
    return commander_level >= cosmetic.unlock_level
