"""Tests for card API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bloomcrux import models


class TestCreateCard:
    """Test suite for POST /decks/:id/cards endpoint."""

    def test_create_card_defaults_bloom_level_from_type(
        self, client: TestClient, db_session: Session, test_deck: models.Deck
    ) -> None:
        response = client.post(
            f"/api/v1/decks/{test_deck.id}/cards",
            json={"card_type": "CER", "front": "Why do leaves change colour?", "back": "..."},
        )

        assert response.status_code == status.HTTP_201_CREATED
        card = response.json()["card"]
        assert card["card_type"] == "CER"
        assert card["bloom_level"] == "Evaluate"
        assert card["deck_id"] == test_deck.id
        assert card["starred"] is False

        db_card = db_session.query(models.Card).filter_by(id=card["id"]).first()
        assert db_card is not None
        assert db_card.bloom_level == "Evaluate"

    def test_create_card_explicit_level_and_meta(
        self, client: TestClient, test_deck: models.Deck
    ) -> None:
        response = client.post(
            f"/api/v1/decks/{test_deck.id}/cards",
            json={
                "card_type": "Standard MCQ",
                "front": "Powerhouse of the cell?",
                "bloom_level": "Understand",
                "meta": {"options": ["Nucleus", "Mitochondria"], "answer": 1},
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        card = response.json()["card"]
        assert card["bloom_level"] == "Understand"
        assert card["meta"]["answer"] == 1

    def test_create_card_appends_position(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.post(
            f"/api/v1/decks/{test_deck.id}/cards",
            json={"card_type": "Short Answer", "front": "Describe osmosis"},
        )

        assert response.json()["card"]["position"] == max(c.position for c in test_cards) + 1

    def test_create_card_unknown_type(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.post(
            f"/api/v1/decks/{test_deck.id}/cards",
            json={"card_type": "Crossword", "front": "Across"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_create_card_deck_not_found(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/decks/99999/cards", json={"card_type": "CER", "front": "Claim?"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdateCard:
    def test_update_front_and_position(
        self, client: TestClient, test_cards: list[models.Card]
    ) -> None:
        card = test_cards[0]
        response = client.patch(
            f"/api/v1/cards/{card.id}", json={"front": "Reworded question", "position": 42}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["card"]
        assert data["front"] == "Reworded question"
        assert data["position"] == 42

    def test_changing_type_resets_level(
        self, client: TestClient, test_cards: list[models.Card]
    ) -> None:
        """A new card type brings its own default level unless one is given."""
        card = test_cards[0]
        response = client.patch(f"/api/v1/cards/{card.id}", json={"card_type": "Compare/Contrast"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["card"]["bloom_level"] == "Analyze"

    def test_update_card_of_other_user(
        self, client: TestClient, db_session: Session, other_user_deck: models.Deck
    ) -> None:
        card = models.Card(
            deck_id=other_user_deck.id, card_type="CER", bloom_level="Evaluate", front="Hidden"
        )
        db_session.add(card)
        db_session.commit()

        response = client.patch(f"/api/v1/cards/{card.id}", json={"front": "Mine now"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestStarredCards:
    def test_star_and_list_starred(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        starred = client.put(f"/api/v1/cards/{test_cards[2].id}/star", json={"starred": True})
        assert starred.status_code == status.HTTP_200_OK
        assert starred.json()["card"]["starred"] is True

        response = client.get(f"/api/v1/decks/{test_deck.id}/starred")

        assert response.status_code == status.HTTP_200_OK
        assert [c["id"] for c in response.json()["cards"]] == [test_cards[2].id]

    def test_unstar(self, client: TestClient, test_cards: list[models.Card]) -> None:
        client.put(f"/api/v1/cards/{test_cards[0].id}/star", json={"starred": True})
        response = client.put(f"/api/v1/cards/{test_cards[0].id}/star", json={"starred": False})

        assert response.json()["card"]["starred"] is False


class TestListAndDeleteCards:
    def test_list_cards(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(f"/api/v1/decks/{test_deck.id}/cards")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["cards"]) == len(test_cards)

    def test_delete_card(
        self, client: TestClient, db_session: Session, test_cards: list[models.Card]
    ) -> None:
        card_id = test_cards[0].id

        response = client.delete(f"/api/v1/cards/{card_id}")

        assert response.status_code == status.HTTP_200_OK
        db_session.expire_all()
        assert db_session.get(models.Card, card_id) is None

    def test_delete_card_not_found(self, client: TestClient) -> None:
        response = client.delete("/api/v1/cards/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
