"""Tests for Authentication."""
import jwt
import pytest
from httpx import AsyncClient

from personal_crm.core.deps import COOKIE_NAME
from personal_crm.services import user_service


@pytest.mark.asyncio
async def test_calls_requires_session(client: AsyncClient):
    """Calls endpoint requires authentication."""
    response = await client.get("/calls")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_gifts_requires_session(client: AsyncClient):
    response = await client.post("/gifts", json={"body": "x", "contact_id": 1})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client: AsyncClient, test_user):
    response = await client.get("/calls", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid session"


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_is_rejected(client: AsyncClient, test_user, test_account):
    token = jwt.encode(
        {"sub": str(test_user.id), "account_id": test_account.id, "token_version": 1},
        "some-other-secret",
        algorithm="HS256",
    )
    response = await client.get("/calls", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_bearer_token_is_accepted(authed_client: AsyncClient):
    response = await authed_client.get("/calls")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_session_cookie_is_accepted(client: AsyncClient, test_auth):
    client.cookies.set(COOKIE_NAME, test_auth.token)
    response = await client.get("/calls")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_revoked_session_is_rejected(authed_client: AsyncClient, db, test_user):
    user_service.revoke_all_sessions(db, test_user)

    response = await authed_client.get("/calls")
    assert response.status_code == 401
    assert response.json()["detail"] == "Session revoked"


@pytest.mark.asyncio
async def test_disabled_user_is_rejected(authed_client: AsyncClient, db, test_user):
    test_user.is_active = False
    db.commit()

    response = await authed_client.get("/calls")
    assert response.status_code == 401
    assert response.json()["detail"] == "Account disabled"
