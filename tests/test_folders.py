"""Tests for folder API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bloomcrux import models


class TestCreateFolder:
    """Test suite for POST /folders endpoint."""

    def test_create_folder_success(self, client: TestClient, db_session: Session) -> None:
        response = client.post("/api/v1/folders", json={"name": "  Chemistry  "})

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["success"] is True
        assert data["folder"]["name"] == "Chemistry"

        db_folder = db_session.query(models.Folder).filter_by(id=data["folder"]["id"]).first()
        assert db_folder is not None
        assert db_folder.name == "Chemistry"

    def test_create_folder_duplicate_name(
        self, client: TestClient, test_folder: models.Folder
    ) -> None:
        """A user cannot have two folders with the same name."""
        response = client.post("/api/v1/folders", json={"name": test_folder.name})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "already exists" in response.json()["detail"]

    def test_create_folder_empty_name(self, client: TestClient) -> None:
        response = client.post("/api/v1/folders", json={"name": ""})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_create_folder_blank_name(self, client: TestClient) -> None:
        """Whitespace passes schema validation but not the domain rule."""
        response = client.post("/api/v1/folders", json={"name": "   "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestListFolders:
    def test_list_folders_alphabetical(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        db_session.add_all(
            [
                models.Folder(user_id=test_user.id, name="Zoology"),
                models.Folder(user_id=test_user.id, name="Anatomy"),
            ]
        )
        db_session.commit()

        response = client.get("/api/v1/folders")

        assert response.status_code == status.HTTP_200_OK
        names = [f["name"] for f in response.json()["folders"]]
        assert names == ["Anatomy", "Zoology"]

    def test_list_folders_excludes_other_users(
        self, client: TestClient, db_session: Session
    ) -> None:
        other = models.User(external_id="provider|other")
        db_session.add(other)
        db_session.commit()
        db_session.add(models.Folder(user_id=other.id, name="Secret"))
        db_session.commit()

        response = client.get("/api/v1/folders")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["folders"] == []


class TestRenameFolder:
    def test_rename_folder_success(self, client: TestClient, test_folder: models.Folder) -> None:
        response = client.patch(f"/api/v1/folders/{test_folder.id}", json={"name": "Genetics"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["folder"]["name"] == "Genetics"

    def test_rename_folder_to_same_name(
        self, client: TestClient, test_folder: models.Folder
    ) -> None:
        """Renaming a folder to its own name is not a conflict."""
        response = client.patch(
            f"/api/v1/folders/{test_folder.id}", json={"name": test_folder.name}
        )

        assert response.status_code == status.HTTP_200_OK

    def test_rename_folder_not_found(self, client: TestClient) -> None:
        response = client.patch("/api/v1/folders/99999", json={"name": "Anything"})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteFolder:
    def test_delete_folder_unfiles_decks(
        self,
        client: TestClient,
        db_session: Session,
        test_folder: models.Folder,
        test_user: models.User,
    ) -> None:
        """Deleting a folder keeps its decks, which become unfiled."""
        deck = models.Deck(user_id=test_user.id, title="Filed deck", folder_id=test_folder.id)
        db_session.add(deck)
        db_session.commit()
        deck_id = deck.id

        response = client.delete(f"/api/v1/folders/{test_folder.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

        db_session.expire_all()
        assert db_session.get(models.Folder, test_folder.id) is None
        db_deck = db_session.get(models.Deck, deck_id)
        assert db_deck is not None
        assert db_deck.folder_id is None

    def test_delete_folder_not_found(self, client: TestClient) -> None:
        response = client.delete("/api/v1/folders/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
