from datetime import datetime, timedelta, timezone

from jose import jwt

from newsportal.config import get_settings
from newsportal.services.seed import ensure_admin_account

from .helpers import ADMIN_EMAIL, ADMIN_PASSWORD


async def test_login_returns_token_and_admin(async_client, admin_account):
    response = await async_client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["admin"] == {
        "id": admin_account.id,
        "name": admin_account.name,
        "email": ADMIN_EMAIL,
        "role": "admin",
    }
    settings = get_settings()
    payload = jwt.decode(data["token"], settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert payload["sub"] == admin_account.id


async def test_login_wrong_password(async_client, admin_account):
    response = await async_client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "AUTHENTICATION_ERROR"


async def test_login_inactive_account(async_client, admin_account, test_db):
    admin_account.is_active = False
    test_db.commit()

    response = await async_client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

    assert response.status_code == 401


async def test_login_validation_error(async_client):
    response = await async_client.post("/api/auth/login", json={"email": "not-an-email"})

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password"} <= fields


async def test_profile_requires_token(async_client):
    response = await async_client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json()["success"] is False


async def test_profile_with_invalid_token(async_client):
    response = await async_client.get("/api/auth/profile", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 403


async def test_profile_with_expired_token(async_client, admin_account):
    settings = get_settings()
    token = jwt.encode(
        {"sub": admin_account.id, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    response = await async_client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403


async def test_profile_for_deactivated_admin(async_client, admin_account, auth_headers, test_db):
    admin_account.is_active = False
    test_db.commit()

    response = await async_client.get("/api/auth/profile", headers=auth_headers)

    assert response.status_code == 401


async def test_profile(async_client, admin_account, auth_headers):
    response = await async_client.get("/api/auth/profile", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["data"]["email"] == ADMIN_EMAIL


def test_admin_seed_is_idempotent(test_db):
    from newsportal.config import Settings
    from newsportal.models.admin import AdminAccount

    settings = Settings(admin_email="Seed@Example.com", admin_password="pw123456", admin_name="Seed")

    assert ensure_admin_account(test_db, settings) is True
    assert ensure_admin_account(test_db, settings) is False
    admins = test_db.query(AdminAccount).all()
    assert len(admins) == 1
    assert admins[0].email == "seed@example.com"
    assert admins[0].password_hash != "pw123456"
