"""Tests for Wallet and Streak entities."""

from datetime import date

import pytest

from bloomcrux.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from bloomcrux.domain.common.value_objects.ids import UserId
from bloomcrux.domain.economy.entities.streak import Streak
from bloomcrux.domain.economy.entities.wallet import InsufficientFundsError, Wallet


class TestWallet:
    def test_credit_levels_up(self) -> None:
        wallet = Wallet.empty(UserId(1))

        previous = wallet.credit(600, 150)

        assert previous == 1
        assert wallet.commander_level == 3
        assert wallet.tokens == 150

    def test_debit(self) -> None:
        wallet = Wallet(user_id=UserId(1), tokens=200)
        wallet.debit_tokens(180)
        assert wallet.tokens == 20

    def test_debit_beyond_balance(self) -> None:
        wallet = Wallet(user_id=UserId(1), tokens=100)
        with pytest.raises(InsufficientFundsError) as exc_info:
            wallet.debit_tokens(180)
        assert exc_info.value.required == 180
        assert wallet.tokens == 100

    def test_negative_amounts_rejected(self) -> None:
        wallet = Wallet.empty(UserId(1))
        with pytest.raises(ValidationError):
            wallet.credit(-1, 0)
        with pytest.raises(ValidationError):
            wallet.add_tokens(-5)
        with pytest.raises(ValidationError):
            Wallet(user_id=UserId(1), tokens=-1)


class TestStreak:
    def test_consecutive_days_extend_streak(self) -> None:
        streak = Streak.empty(UserId(1))
        streak.record_activity(date(2026, 3, 1))
        streak.record_activity(date(2026, 3, 1))
        streak.record_activity(date(2026, 3, 2))
        assert streak.current_streak == 2

    def test_missed_day_resets(self) -> None:
        streak = Streak(user_id=UserId(1), current_streak=5, last_activity_date=date(2026, 3, 1))
        streak.record_activity(date(2026, 3, 4))
        assert streak.current_streak == 1

    def test_chests_claim_once_each(self) -> None:
        streak = Streak(user_id=UserId(1), current_streak=8)

        assert streak.claim_chest() == ("seven_day", 75)
        assert streak.claim_chest() == ("three_day", 30)
        with pytest.raises(BusinessRuleViolationError) as exc_info:
            streak.claim_chest()
        assert exc_info.value.rule == "no_available_chests"
