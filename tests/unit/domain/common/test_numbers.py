"""Tests for numeric helpers."""

from bloomcrux.domain.common.numbers import format_fixed, round_half_up


class TestRoundHalfUp:
    def test_halves_round_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(12.5) == 13
        assert round_half_up(2.49) == 2


class TestFormatFixed:
    def test_whole_numbers(self) -> None:
        assert format_fixed(12.5) == "13"
        assert format_fixed(0.0) == "0"
        assert format_fixed(0.8 * 100) == "80"

    def test_two_decimals(self) -> None:
        assert format_fixed(0.625, 2) == "0.63"
        assert format_fixed(0.8, 2) == "0.80"
        assert format_fixed(0.6, 2) == "0.60"
