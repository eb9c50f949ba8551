"""Tests for economy API endpoints."""

from datetime import UTC, datetime, timedelta

from dependency_injector import providers
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bloomcrux import models
from bloomcrux.core import container


def _finalize(client: TestClient, deck_id: int, **overrides: object) -> dict:
    payload = {"deckId": deck_id, "mode": "quest", "correct": 10, "total": 10}
    payload.update(overrides)
    response = client.post("/api/v1/economy/finalize", json=payload)
    assert response.status_code == status.HTTP_200_OK, response.text
    return response.json()


class TestWallet:
    """Test suite for GET /economy/wallet endpoint."""

    def test_new_user_has_empty_wallet(self, client: TestClient) -> None:
        response = client.get("/api/v1/economy/wallet")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "tokens": 0,
            "commander_xp": 0,
            "commander_level": 1,
            "progress": {"level": 1, "current": 0, "next_level": 2, "to_next": 200},
        }

    def test_wallet_requires_token(self, unauth_client: TestClient) -> None:
        response = unauth_client.get("/api/v1/economy/wallet")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_database_failure_reports_500(self, client: TestClient) -> None:
        """Backend errors surface as 500 with the backend's message."""

        class FailingWalletUseCase:
            def get_wallet(self, user_id: int) -> None:
                raise SQLAlchemyError("connection to server was lost")

        with container.wallet_use_case.override(providers.Object(FailingWalletUseCase())):
            response = client.get("/api/v1/economy/wallet")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "connection to server was lost"}


class TestFinalize:
    """Test suite for POST /economy/finalize endpoint."""

    def test_finalize_credits_xp_and_tokens(
        self, client: TestClient, db_session: Session, test_deck: models.Deck
    ) -> None:
        data = _finalize(client, test_deck.id, bloomLevel="Apply")

        # Without a breakdown the answers count at Remember: 10 * 4 XP, a quarter in tokens
        assert data["xpDelta"] == 40
        assert data["tokensDelta"] == 10
        assert data["commander_xp"] == 40
        assert data["tokens"] == 10
        assert data["duplicate"] is False
        assert data["newUnlocks"] == []

        events = db_session.query(models.XpEvent).filter_by(deck_id=test_deck.id).all()
        assert sorted(e.event_type for e in events) == ["mission_completed", "xp_commander_added"]
        assert {e.bloom_level for e in events} == {"Apply"}

    def test_zero_score_logs_no_commander_event(
        self, client: TestClient, db_session: Session, test_deck: models.Deck
    ) -> None:
        data = _finalize(client, test_deck.id, correct=0)

        assert data["xpDelta"] == 0
        assert data["tokensDelta"] == 0
        events = db_session.query(models.XpEvent).filter_by(deck_id=test_deck.id).all()
        assert [e.event_type for e in events] == ["mission_completed"]

    def test_repeat_inside_window_is_ignored(
        self, client: TestClient, test_deck: models.Deck
    ) -> None:
        first = _finalize(client, test_deck.id)
        second = _finalize(client, test_deck.id)

        assert first["xpDelta"] == 40
        assert second["duplicate"] is True
        assert second["xpDelta"] == 0
        assert second["tokensDelta"] == 0
        assert second["tokens"] == first["tokens"]

    def test_different_result_is_not_a_duplicate(
        self, client: TestClient, test_deck: models.Deck
    ) -> None:
        _finalize(client, test_deck.id)
        second = _finalize(client, test_deck.id, correct=9)

        assert second["duplicate"] is False
        assert second["commander_xp"] == 40 + 36

    def test_repeat_after_window_is_credited(
        self, client: TestClient, db_session: Session, test_deck: models.Deck
    ) -> None:
        _finalize(client, test_deck.id)
        for event in db_session.query(models.XpEvent).all():
            event.created_at = datetime.now(UTC) - timedelta(hours=1)
        db_session.commit()

        second = _finalize(client, test_deck.id)

        assert second["duplicate"] is False
        assert second["commander_xp"] == 80

    def test_breakdown_sums_per_level_awards(
        self, client: TestClient, test_deck: models.Deck
    ) -> None:
        data = _finalize(
            client,
            test_deck.id,
            correct=15,
            total=15,
            breakdown={
                "Remember": {"correct": 5, "total": 5},
                "Create": {"correct": 10, "total": 10},
                "Analyze": {"correct": 0, "total": 0},
            },
        )

        # 5 * 4 * 1.0 + 10 * 4 * 3.0
        assert data["xpDelta"] == 140
        assert data["tokensDelta"] == 35

    def test_level_up_reports_new_unlocks(
        self, client: TestClient, test_deck: models.Deck
    ) -> None:
        data = _finalize(
            client,
            test_deck.id,
            correct=50,
            total=50,
            breakdown={"Create": {"correct": 50, "total": 50}},
        )

        assert data["xpDelta"] == 600
        assert data["commander_level"] == 3
        assert [u["id"] for u in data["newUnlocks"]] == ["Sunrise", "DeepSpace"]

    def test_finalize_records_streak_activity(
        self, client: TestClient, db_session: Session, test_deck: models.Deck,
        test_user: models.User,
    ) -> None:
        _finalize(client, test_deck.id)

        streak = db_session.get(models.UserStreak, test_user.id)
        assert streak is not None
        assert streak.current_streak == 1
        assert streak.last_activity_date == datetime.now(UTC).date()

    def test_correct_above_total_is_rejected(
        self, client: TestClient, test_deck: models.Deck
    ) -> None:
        response = client.post(
            "/api/v1/economy/finalize",
            json={"deckId": test_deck.id, "correct": 11, "total": 10},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_mode_is_rejected(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.post(
            "/api/v1/economy/finalize",
            json={"deckId": test_deck.id, "mode": "speedrun", "correct": 1, "total": 1},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_finalize_unknown_deck(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/economy/finalize", json={"deckId": 99999, "correct": 1, "total": 1}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_finalize_requires_positive_deck_id(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/economy/finalize", json={"deckId": 0, "correct": 1, "total": 1}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestStreakChest:
    """Test suite for POST /economy/streak-chest endpoint."""

    def _set_streak(self, db_session: Session, user_id: int, days: int) -> None:
        db_session.add(
            models.UserStreak(
                user_id=user_id,
                current_streak=days,
                last_activity_date=datetime.now(UTC).date(),
            )
        )
        db_session.commit()

    def test_no_chest_without_streak(self, client: TestClient) -> None:
        response = client.post("/api/v1/economy/streak-chest")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "no_available_chests"

    def test_three_day_chest_once(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        self._set_streak(db_session, test_user.id, 3)

        first = client.post("/api/v1/economy/streak-chest")
        second = client.post("/api/v1/economy/streak-chest")

        assert first.status_code == status.HTTP_200_OK
        assert first.json() == {
            "ok": True,
            "chest": "three_day",
            "tokens_awarded": 30,
            "current_streak": 3,
            "tokens": 30,
        }
        assert second.status_code == status.HTTP_400_BAD_REQUEST

    def test_seven_day_chest_is_offered_first(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        self._set_streak(db_session, test_user.id, 7)

        first = client.post("/api/v1/economy/streak-chest").json()
        second = client.post("/api/v1/economy/streak-chest").json()

        assert first["chest"] == "seven_day"
        assert first["tokens_awarded"] == 75
        assert second["chest"] == "three_day"
        assert second["tokens"] == 105


class TestUnlocks:
    def test_new_user_unlocks(self, client: TestClient) -> None:
        response = client.get("/api/v1/economy/unlocks")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["commander_level"] == 1
        assert data["unlocked"] == []
        assert data["next_unlock"]["id"] == "Sunrise"
        assert data["next_unlock"]["level"] == 2

    def test_unlocks_after_level_up(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        db_session.add(
            models.UserEconomy(user_id=test_user.id, tokens=0, commander_xp=1400,
                               commander_level=5)
        )
        db_session.commit()

        data = client.get("/api/v1/economy/unlocks").json()

        assert [u["id"] for u in data["unlocked"]] == [
            "Sunrise",
            "DeepSpace",
            "AvatarFrames",
            "NightMission",
        ]
        assert data["next_unlock"]["id"] == "PageBackgrounds"
