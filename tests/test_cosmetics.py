"""Tests for cosmetics API endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bloomcrux import models


def _fund(db_session: Session, user: models.User, tokens: int, level: int, xp: int) -> None:
    db_session.add(
        models.UserEconomy(
            user_id=user.id, tokens=tokens, commander_xp=xp, commander_level=level
        )
    )
    db_session.commit()


class TestListCosmetics:
    """Test suite for GET /cosmetics endpoint."""

    def test_catalog_for_new_user(self, client: TestClient) -> None:
        response = client.get("/api/v1/cosmetics")

        assert response.status_code == status.HTTP_200_OK
        items = response.json()["cosmetics"]
        assert len(items) == 7
        assert items[0]["id"] == "Sunrise"
        assert items[0]["price"] == 180
        assert not any(item["unlocked"] for item in items)
        assert not any(item["owned"] for item in items)

    def test_catalog_flags_unlocked_items(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        _fund(db_session, test_user, tokens=0, level=3, xp=500)

        items = client.get("/api/v1/cosmetics").json()["cosmetics"]

        unlocked = [item["id"] for item in items if item["unlocked"]]
        assert unlocked == ["Sunrise", "DeepSpace"]


class TestPurchase:
    """Test suite for POST /cosmetics/purchase endpoint."""

    def test_purchase_deducts_price(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        _fund(db_session, test_user, tokens=200, level=2, xp=200)

        response = client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "Sunrise"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "ok": True,
            "cosmetic_id": "Sunrise",
            "already_owned": False,
            "tokens": 20,
        }
        owned = client.get("/api/v1/cosmetics/Sunrise/purchased").json()
        assert owned == {"cosmetic_id": "Sunrise", "purchased": True}

    def test_repeat_purchase_is_free(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        _fund(db_session, test_user, tokens=400, level=2, xp=200)

        client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "Sunrise"})
        response = client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "Sunrise"})

        data = response.json()
        assert data["already_owned"] is True
        assert data["tokens"] == 220

    def test_locked_cosmetic_is_forbidden(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        _fund(db_session, test_user, tokens=1000, level=2, xp=200)

        response = client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "DeepSpace"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert "level 3" in response.json()["detail"]

    def test_insufficient_tokens(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        _fund(db_session, test_user, tokens=100, level=2, xp=200)

        response = client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "Sunrise"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"].startswith("insufficient_tokens")
        wallet = client.get("/api/v1/economy/wallet").json()
        assert wallet["tokens"] == 100

    def test_unknown_cosmetic(self, client: TestClient) -> None:
        response = client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "Rainbow"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_purchased_flag_for_unowned(self, client: TestClient) -> None:
        response = client.get("/api/v1/cosmetics/NeonGlow/purchased")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["purchased"] is False


class TestDefaultCover:
    """Test suite for /cosmetics/default-cover endpoints."""

    def test_no_default_cover(self, client: TestClient) -> None:
        response = client.get("/api/v1/cosmetics/default-cover")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"cosmetic_id": None}

    def test_unowned_cover_is_rejected(self, client: TestClient) -> None:
        response = client.put("/api/v1/cosmetics/default-cover", json={"cosmetic_id": "Sunrise"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_set_and_reset_cover(
        self, client: TestClient, db_session: Session, test_user: models.User
    ) -> None:
        _fund(db_session, test_user, tokens=500, level=4, xp=900)
        client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "Sunrise"})
        client.post("/api/v1/cosmetics/purchase", json={"cosmeticId": "NeonGlow"})

        frame = client.put("/api/v1/cosmetics/default-cover", json={"cosmetic_id": "NeonGlow"})
        assert frame.status_code == status.HTTP_400_BAD_REQUEST

        response = client.put("/api/v1/cosmetics/default-cover", json={"cosmetic_id": "Sunrise"})
        assert response.status_code == status.HTTP_200_OK
        assert client.get("/api/v1/cosmetics/default-cover").json() == {"cosmetic_id": "Sunrise"}

        client.put("/api/v1/cosmetics/default-cover", json={"cosmetic_id": None})
        assert client.get("/api/v1/cosmetics/default-cover").json() == {"cosmetic_id": None}
