"""
Integration tests for POST /auth/forgot-password
"""
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import PasswordResetToken
from src.domain.exceptions import EmailDeliveryError


@pytest.mark.asyncio
async def test_known_and_unknown_email_get_same_response(
    client: AsyncClient, db_session: AsyncSession, email_gateway
):
    await client.post("/auth/register", json={"email": "known@example.com", "password": "secret1"})

    known = await client.post("/auth/forgot-password", json={"email": "known@example.com"})
    unknown = await client.post("/auth/forgot-password", json={"email": "unknown@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"success": True}

    tokens = (await db_session.exec(select(PasswordResetToken))).all()
    assert sorted(t.email for t in tokens) == ["known@example.com", "unknown@example.com"]
    assert all(not t.used for t in tokens)
    assert len(email_gateway.sent) == 2


@pytest.mark.asyncio
async def test_reset_link_uses_base_url(client: AsyncClient, db_session: AsyncSession, email_gateway):
    await client.post("/auth/forgot-password", json={
        "email": "Known@Example.com",
        "baseUrl": "https://fish.example.org",
    })

    token = (await db_session.exec(select(PasswordResetToken))).one()
    message = email_gateway.sent[0]
    assert message.to == "known@example.com"
    assert f"https://fish.example.org/reset-password?token={token.token}" in message.html


@pytest.mark.asyncio
async def test_email_failure_is_not_surfaced(client: AsyncClient, email_gateway, monkeypatch):
    async def failing_send(message):
        raise EmailDeliveryError("provider down")

    monkeypatch.setattr(email_gateway, "send", failing_send)

    response = await client.post("/auth/forgot-password", json={"email": "known@example.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.asyncio
async def test_missing_email_is_bad_request(client: AsyncClient):
    response = await client.post("/auth/forgot-password", json={})

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("base_url", ["https://attacker.example", "javascript:alert(1)//"])
async def test_foreign_base_url_is_not_used(
    client: AsyncClient, db_session: AsyncSession, email_gateway, base_url
):
    response = await client.post("/auth/forgot-password", json={
        "email": "victim@example.com",
        "baseUrl": base_url,
    })

    assert response.status_code == 200
    token = (await db_session.exec(select(PasswordResetToken))).one()
    html = email_gateway.sent[0].html
    assert base_url not in html
    assert f"https://app.example.com/reset-password?token={token.token}" in html


@pytest.mark.asyncio
async def test_malformed_email_still_succeeds(client: AsyncClient):
    response = await client.post("/auth/forgot-password", json={"email": "not-an-email"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
