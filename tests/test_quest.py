"""Tests for quest API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bloomcrux import models


def _ids(cards: list[models.Card], level: str) -> list[int]:
    return [c.id for c in cards if c.bloom_level == level]


class TestGetMission:
    """Test suite for GET /quest/:deck_id/mission endpoint."""

    def test_remember_mission_contains_only_remember_cards(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(
            f"/api/v1/quest/{test_deck.id}/mission", params={"bloom_level": "Remember"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_missions"] == 1
        assert sorted(data["primary_ids"]) == sorted(_ids(test_cards, "Remember"))
        assert data["blasts_ids"] == []
        assert data["review_ids"] == []
        assert sorted(data["mission_ids"]) == sorted(data["primary_ids"])
        assert [c["id"] for c in data["cards"]] == data["mission_ids"]
        assert data["seed_used"] == f"{test_deck.id}:Remember:0"
        assert data["debug"]["total"] == 4

    def test_mission_order_is_reproducible_from_seed(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        params = {"bloom_level": "Apply", "seed": "fixed-seed"}

        first = client.get(f"/api/v1/quest/{test_deck.id}/mission", params=params).json()
        second = client.get(f"/api/v1/quest/{test_deck.id}/mission", params=params).json()

        assert first["mission_ids"] == second["mission_ids"]
        assert first["seed_used"] == "fixed-seed"

    def test_apply_mission_mixes_in_lower_level_blasts(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(
            f"/api/v1/quest/{test_deck.id}/mission", params={"bloom_level": "Apply"}
        )

        data = response.json()
        lower = set(_ids(test_cards, "Remember") + _ids(test_cards, "Understand"))
        assert sorted(data["primary_ids"]) == sorted(_ids(test_cards, "Apply"))
        # 30% of the 9 eligible cards, rounded down
        assert len(data["blasts_ids"]) == 2
        assert set(data["blasts_ids"]) <= lower
        assert data["debug"]["total"] == 4

    def test_mission_index_out_of_range(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(
            f"/api/v1/quest/{test_deck.id}/mission",
            params={"bloom_level": "Remember", "mission_index": 1},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_mission_for_empty_level(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(
            f"/api/v1/quest/{test_deck.id}/mission", params={"bloom_level": "Create"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_missions"] == 0
        assert data["primary_ids"] == []

    def test_mission_invalid_bloom_level(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.get(
            f"/api/v1/quest/{test_deck.id}/mission", params={"bloom_level": "Memorize"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_mission_deck_of_other_user(
        self, client: TestClient, other_user_deck: models.Deck
    ) -> None:
        response = client.get(
            f"/api/v1/quest/{other_user_deck.id}/mission", params={"bloom_level": "Remember"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCompleteMission:
    """Test suite for POST /quest/:deck_id/complete endpoint."""

    def test_passing_score_unlocks_next_level(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        test_cards: list[models.Card],
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={"bloom_level": "Remember", "score_pct": 75, "cards_seen": 4, "cards_correct": 3},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["ok"] is True
        assert data["unlocked"] is True
        assert db_session.get(models.MissionAttempt, data["attemptId"]) is not None

        progress = client.get(f"/api/v1/quest/{test_deck.id}/progress").json()
        remember = progress["per_bloom"]["Remember"]
        assert remember["cleared"] is True
        assert remember["missionsCompleted"] == 1
        assert remember["completedCards"] == 4
        assert remember["recentAttempts"][0]["percent"] == 75
        assert progress["unlocked_levels"] == ["Remember", "Understand"]

    def test_failing_score_keeps_level_locked(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={"bloom_level": "Remember", "score_pct": 40, "cards_seen": 4, "cards_correct": 2},
        )

        assert response.json()["unlocked"] is False
        progress = client.get(f"/api/v1/quest/{test_deck.id}/progress").json()
        assert progress["unlocked_levels"] == ["Remember"]

    def test_non_quest_mode_does_not_touch_progress(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={
                "bloom_level": "Remember",
                "score_pct": 100,
                "cards_seen": 4,
                "cards_correct": 4,
                "mode": "remix",
            },
        )

        progress = client.get(f"/api/v1/quest/{test_deck.id}/progress").json()
        assert progress["per_bloom"]["Remember"]["missionsCompleted"] == 0
        attempts = client.get(f"/api/v1/quest/{test_deck.id}/attempts").json()["attempts"]
        assert [a["mode"] for a in attempts] == ["remix"]

    def test_breakdown_rolls_up_each_level(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={
                "bloom_level": "Apply",
                "score_pct": 80,
                "cards_seen": 4,
                "cards_correct": 3,
                "breakdown": {
                    "Apply": {"scorePct": 50, "cardsSeen": 2, "cardsCorrect": 1},
                    "Remember": {"scorePct": 100, "cardsSeen": 2, "cardsCorrect": 2},
                },
            },
        )

        levels = client.get(f"/api/v1/decks/{test_deck.id}/mastery").json()["levels"]
        assert set(levels) == {"Apply", "Remember"}
        # Only the mission score contributes until cards have counters: 0.3 * 0.4 * score
        assert levels["Remember"] == 12
        assert levels["Apply"] == 6

    def test_correct_exceeding_seen_is_rejected(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={"bloom_level": "Remember", "score_pct": 50, "cards_seen": 1, "cards_correct": 2},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_score_out_of_range(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={"bloom_level": "Remember", "score_pct": 120},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestQuestProgress:
    def test_fresh_progress_counts_cards_per_level(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(f"/api/v1/quest/{test_deck.id}/progress")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["mastered"] is False
        assert data["unlocked_levels"] == ["Remember"]
        assert data["per_bloom"]["Remember"]["totalCards"] == 4
        assert data["per_bloom"]["Understand"]["totalCards"] == 3
        assert data["per_bloom"]["Apply"]["totalMissions"] == 1
        assert data["per_bloom"]["Create"]["totalCards"] == 0

    def test_deck_mastered_when_every_level_with_cards_is_cleared(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        for level, seen in (("Remember", 4), ("Understand", 3), ("Apply", 2)):
            client.post(
                f"/api/v1/quest/{test_deck.id}/complete",
                json={
                    "bloom_level": level,
                    "score_pct": 90,
                    "cards_seen": seen,
                    "cards_correct": seen,
                },
            )

        progress = client.get(f"/api/v1/quest/{test_deck.id}/progress").json()
        summary = client.get(f"/api/v1/decks/{test_deck.id}/summary").json()

        assert progress["mastered"] is True
        assert summary["mastered"] is True


class TestResetQuest:
    def test_reset_clears_attempts_and_progress(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={"bloom_level": "Remember", "score_pct": 90, "cards_seen": 4, "cards_correct": 4},
        )
        client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={"reviews": [{"card_id": test_cards[0].id, "correctness": 1}]},
        )

        response = client.post(f"/api/v1/quest/{test_deck.id}/reset")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["attempts_cleared"] == 1
        assert data["performance_cleared"] == 1
        assert data["card_mastery_cleared"] == 1
        assert data["level_mastery_cleared"] == 1
        assert data["xp_events_cleared"] == 0

        progress = client.get(f"/api/v1/quest/{test_deck.id}/progress").json()
        assert progress["per_bloom"]["Remember"]["cleared"] is False
        assert progress["per_bloom"]["Remember"]["totalCards"] == 4

    def test_reset_with_wipe_xp_deletes_deck_xp_events(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            "/api/v1/economy/finalize",
            json={"deckId": test_deck.id, "mode": "quest", "correct": 3, "total": 4},
        )

        response = client.post(f"/api/v1/quest/{test_deck.id}/reset", json={"wipe_xp": True})

        assert response.json()["xp_events_cleared"] == 2
        # The wallet keeps what was already earned
        assert client.get("/api/v1/economy/wallet").json()["commander_xp"] == 12


class TestAttempts:
    def test_attempts_newest_first_with_limit(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        for score in (10, 20, 30):
            client.post(
                f"/api/v1/quest/{test_deck.id}/complete",
                json={"bloom_level": "Remember", "score_pct": score},
            )

        response = client.get(f"/api/v1/quest/{test_deck.id}/attempts", params={"limit": 2})

        assert response.status_code == status.HTTP_200_OK
        assert [a["score_pct"] for a in response.json()["attempts"]] == [30, 20]

    def test_attempts_limit_is_capped(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.get(f"/api/v1/quest/{test_deck.id}/attempts", params={"limit": 50})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestCardPerformance:
    def test_merge_only_moves_counters_forward(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        card_id = test_cards[0].id
        first = client.post(
            f"/api/v1/quest/{test_deck.id}/performance",
            json={"performance": [{"card_id": card_id, "attempts": 5, "correct": 3}]},
        )
        assert first.status_code == status.HTTP_200_OK
        assert first.json()["performance"][0]["attempts"] == 5

        # A stale client reporting lower totals cannot roll the counters back
        client.post(
            f"/api/v1/quest/{test_deck.id}/performance",
            json={"performance": [{"card_id": card_id, "attempts": 2, "correct": 1}]},
        )

        rows = client.get(f"/api/v1/quest/{test_deck.id}/performance").json()["performance"]
        assert rows == [{"card_id": card_id, "attempts": 5, "correct": 3, "last_seen_at": None}]

    def test_merge_caps_attempt_increment(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/performance",
            json={"performance": [{"card_id": test_cards[0].id, "attempts": 999, "correct": 999}]},
        )

        row = response.json()["performance"][0]
        assert row["attempts"] == 200
        assert row["correct"] == 200

    def test_merge_rejects_foreign_card(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/performance",
            json={"performance": [{"card_id": 99999, "attempts": 1, "correct": 1}]},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestReviews:
    def test_record_reviews_updates_mastery(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={
                "reviews": [
                    {
                        "card_id": test_cards[0].id,
                        "correctness": 1,
                        "response_ms": 1500,
                        "confidence": 3,
                    },
                    {"card_id": test_cards[4].id, "correctness": 0},
                ]
            },
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["kind"] == "reviewed"
        by_card = {c["card_id"]: c for c in data["cards"]}
        hit, miss = by_card[test_cards[0].id], by_card[test_cards[4].id]
        assert hit["reps"] == 1
        assert 0.9 <= hit["interval_days"] <= 1.1
        assert hit["accuracy"] == 1.0
        assert miss["reps"] == 0
        assert miss["lapses"] == 0
        assert miss["bloom_level"] == "Understand"
        assert hit["mastery"] > miss["mastery"]

    def test_struggle_queue_lists_weak_cards_weakest_first(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={
                "reviews": [
                    {"card_id": test_cards[0].id, "correctness": 1, "confidence": 3},
                    {"card_id": test_cards[1].id, "correctness": 0, "confidence": 0},
                ]
            },
        )

        response = client.get(
            f"/api/v1/quest/{test_deck.id}/review-queue", params={"kind": "struggle"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["kind"] == "struggle"
        assert data["cards"][0]["card_id"] == test_cards[1].id

    def test_nothing_due_right_after_reviewing(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={"reviews": [{"card_id": test_cards[0].id, "correctness": 1}]},
        )

        response = client.get(f"/api/v1/quest/{test_deck.id}/review-queue")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"kind": "due", "cards": []}

    def test_review_of_card_outside_deck(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={"reviews": [{"card_id": 99999, "correctness": 1}]},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_review_confidence_out_of_range(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={"reviews": [{"card_id": test_cards[0].id, "correctness": 1, "confidence": 5}]},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
