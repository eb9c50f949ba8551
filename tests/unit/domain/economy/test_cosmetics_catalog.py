"""Tests for the cosmetics catalog and unlock track."""

from bloomcrux.domain.economy.services.cosmetics_catalog import (
    CATALOG,
    get_cosmetic,
    is_unlocked,
    next_unlock,
    unlocks_at_or_below,
    unlocks_between,
)


class TestCatalog:
    def test_lookup(self) -> None:
        sunrise = get_cosmetic("Sunrise")
        assert sunrise is not None
        assert sunrise.price == 180
        assert get_cosmetic("sunrise") is None

    def test_catalog_sorted_by_unlock_level(self) -> None:
        levels = [item.unlock_level for item in CATALOG]
        assert levels == sorted(levels)

    def test_is_unlocked(self) -> None:
        neon = get_cosmetic("NeonGlow")
        assert neon is not None
        assert not is_unlocked(neon, 3)
        assert is_unlocked(neon, 4)


class TestUnlockTrack:
    def test_unlocks_between_levels(self) -> None:
        assert [u.id for u in unlocks_between(1, 3)] == ["Sunrise", "DeepSpace"]
        assert unlocks_between(3, 3) == []
        assert unlocks_between(5, 2) == []

    def test_category_unlock(self) -> None:
        frames = unlocks_at_or_below(4)[-1]
        assert frames.kind == "category"
        assert frames.category is None

    def test_next_unlock(self) -> None:
        upcoming = next_unlock(1)
        assert upcoming is not None
        assert upcoming.id == "Sunrise"
        assert next_unlock(6) is None
