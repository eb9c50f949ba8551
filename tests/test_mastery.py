"""Tests for deck mastery endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from bloomcrux import models


class TestDeckMastery:
    def test_unplayed_deck_has_no_levels(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(f"/api/v1/decks/{test_deck.id}/mastery")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"deck_id": test_deck.id, "levels": {}}

    def test_levels_follow_quest_missions(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/performance",
            json={
                "performance": [
                    {"card_id": c.id, "attempts": 2, "correct": 2}
                    for c in test_cards
                    if c.bloom_level == "Remember"
                ]
            },
        )
        client.post(
            f"/api/v1/quest/{test_deck.id}/complete",
            json={"bloom_level": "Remember", "score_pct": 100, "cards_seen": 4, "cards_correct": 4},
        )

        levels = client.get(f"/api/v1/decks/{test_deck.id}/mastery").json()["levels"]

        # 0.6 * 100 retention + 0.3 * 40 correctness EWMA + 0.1 * 100 coverage
        assert levels == {"Remember": 82}

    def test_mastery_of_other_users_deck(
        self, client: TestClient, other_user_deck: models.Deck
    ) -> None:
        response = client.get(f"/api/v1/decks/{other_user_deck.id}/mastery")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestLevelGraduation:
    def test_level_without_records_does_not_graduate(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(f"/api/v1/decks/{test_deck.id}/mastery/Remember")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["bloom_level"] == "Remember"
        assert data["cards"] == 0
        assert data["mean_mastery"] == 0.0
        assert data["graduated"] is False
        assert any("No mastery records" in reason for reason in data["reasons"])

    def test_fresh_reviews_are_not_enough_to_graduate(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        """One good answer lacks both the mastery and the spacing evidence."""
        client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={
                "reviews": [
                    {"card_id": c.id, "correctness": 1, "confidence": 3}
                    for c in test_cards
                    if c.bloom_level == "Remember"
                ]
            },
        )

        data = client.get(f"/api/v1/decks/{test_deck.id}/mastery/Remember").json()

        assert data["cards"] == 4
        assert 0 < data["mean_mastery"] < 0.8
        assert data["graduated"] is False
        assert any(reason.startswith("Distributed spacing") for reason in data["reasons"])

    def test_unknown_level(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.get(f"/api/v1/decks/{test_deck.id}/mastery/Memorize")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
