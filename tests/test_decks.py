"""Tests for deck API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bloomcrux import models


class TestCreateDeck:
    """Test suite for POST /decks endpoint."""

    def test_create_deck_success(self, client: TestClient, db_session: Session) -> None:
        response = client.post(
            "/api/v1/decks", json={"title": "Photosynthesis", "description": "Light reactions"}
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["success"] is True
        assert data["deck"]["title"] == "Photosynthesis"
        assert data["deck"]["description"] == "Light reactions"
        assert data["deck"]["folder_id"] is None

        db_deck = db_session.query(models.Deck).filter_by(id=data["deck"]["id"]).first()
        assert db_deck is not None

    def test_create_deck_in_folder(self, client: TestClient, test_folder: models.Folder) -> None:
        response = client.post(
            "/api/v1/decks", json={"title": "Mitosis", "folder_id": test_folder.id}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["deck"]["folder_id"] == test_folder.id

    def test_create_deck_unknown_folder(self, client: TestClient) -> None:
        response = client.post("/api/v1/decks", json={"title": "Mitosis", "folder_id": 99999})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_deck_empty_title(self, client: TestClient) -> None:
        response = client.post("/api/v1/decks", json={"title": ""})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT


class TestListDecks:
    def test_list_decks_with_card_counts(
        self,
        client: TestClient,
        test_deck: models.Deck,
        test_cards: list[models.Card],
    ) -> None:
        response = client.get("/api/v1/decks")

        assert response.status_code == status.HTTP_200_OK
        decks = response.json()["decks"]
        assert len(decks) == 1
        assert decks[0]["id"] == test_deck.id
        assert decks[0]["card_count"] == len(test_cards)

    def test_list_decks_filters_by_folder(
        self,
        client: TestClient,
        db_session: Session,
        test_user: models.User,
        test_folder: models.Folder,
        test_deck: models.Deck,
    ) -> None:
        filed = models.Deck(user_id=test_user.id, title="Filed", folder_id=test_folder.id)
        db_session.add(filed)
        db_session.commit()

        in_folder = client.get("/api/v1/decks", params={"folder_id": test_folder.id}).json()
        unfiled = client.get("/api/v1/decks", params={"unfiled": True}).json()

        assert [d["id"] for d in in_folder["decks"]] == [filed.id]
        assert [d["id"] for d in unfiled["decks"]] == [test_deck.id]

    def test_list_decks_hides_other_users_decks(
        self, client: TestClient, other_user_deck: models.Deck
    ) -> None:
        response = client.get("/api/v1/decks")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["decks"] == []


class TestGetDeck:
    def test_get_deck_with_cards_in_order(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(f"/api/v1/decks/{test_deck.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Cell Biology"
        assert [c["id"] for c in data["cards"]] == [c.id for c in test_cards]

    def test_get_deck_of_other_user(self, client: TestClient, other_user_deck: models.Deck) -> None:
        """Decks of other users look like missing decks."""
        response = client.get(f"/api/v1/decks/{other_user_deck.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdateDeck:
    def test_update_title(self, client: TestClient, test_deck: models.Deck) -> None:
        response = client.patch(f"/api/v1/decks/{test_deck.id}", json={"title": "Cells 101"})

        assert response.status_code == status.HTTP_200_OK
        deck = response.json()["deck"]
        assert deck["title"] == "Cells 101"
        assert deck["description"] == "Organelles"

    def test_move_into_and_out_of_folder(
        self, client: TestClient, test_deck: models.Deck, test_folder: models.Folder
    ) -> None:
        moved = client.patch(f"/api/v1/decks/{test_deck.id}", json={"folder_id": test_folder.id})
        assert moved.json()["deck"]["folder_id"] == test_folder.id

        unfiled = client.patch(f"/api/v1/decks/{test_deck.id}", json={"unfile": True})
        assert unfiled.status_code == status.HTTP_200_OK
        assert unfiled.json()["deck"]["folder_id"] is None

    def test_update_deck_not_found(self, client: TestClient) -> None:
        response = client.patch("/api/v1/decks/99999", json={"title": "Nope"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteDeck:
    def test_delete_deck_removes_cards(
        self,
        client: TestClient,
        db_session: Session,
        test_deck: models.Deck,
        test_cards: list[models.Card],
    ) -> None:
        deck_id = test_deck.id

        response = client.delete(f"/api/v1/decks/{deck_id}")

        assert response.status_code == status.HTTP_200_OK
        db_session.expire_all()
        assert db_session.get(models.Deck, deck_id) is None
        assert db_session.query(models.Card).filter_by(deck_id=deck_id).count() == 0

    def test_delete_deck_not_found(self, client: TestClient) -> None:
        response = client.delete("/api/v1/decks/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeckSummary:
    def test_summary_of_unplayed_deck(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        response = client.get(f"/api/v1/decks/{test_deck.id}/summary")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"deck_id": test_deck.id, "mastered": False, "reviewed_cards": 0}

    def test_summary_counts_reviewed_cards(
        self, client: TestClient, test_deck: models.Deck, test_cards: list[models.Card]
    ) -> None:
        client.post(
            f"/api/v1/quest/{test_deck.id}/reviews",
            json={
                "reviews": [
                    {"card_id": test_cards[0].id, "correctness": 1},
                    {"card_id": test_cards[1].id, "correctness": 0},
                ]
            },
        )

        response = client.get(f"/api/v1/decks/{test_deck.id}/summary")

        assert response.json()["reviewed_cards"] == 2
