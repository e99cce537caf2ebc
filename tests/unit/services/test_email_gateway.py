"""
Unit tests for the email gateway adapters and deliver_email
"""
import json
import logging
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.adapter.services.email_gateway import HttpEmailGateway, LoggingEmailGateway
from src.app.services.email_gateway import EmailMessage, deliver_email
from src.domain.exceptions import EmailDeliveryError

MESSAGE = EmailMessage(to="alice@example.com", subject="Reset your password", html="<p>hi</p>")


def _gateway(handler) -> HttpEmailGateway:
    return HttpEmailGateway(
        api_url="https://mail.example.com/emails",
        api_key="key-123",
        sender="no-reply@example.com",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_http_gateway_posts_message():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg-1"})

    await _gateway(handler).send(MESSAGE)

    assert captured["url"] == "https://mail.example.com/emails"
    assert captured["auth"] == "Bearer key-123"
    assert captured["body"] == {
        "from": "no-reply@example.com",
        "to": ["alice@example.com"],
        "subject": "Reset your password",
        "html": "<p>hi</p>",
    }


@pytest.mark.asyncio
async def test_http_gateway_raises_delivery_error_on_rejection():
    gateway = _gateway(lambda request: httpx.Response(422, json={"error": "bad"}))

    with pytest.raises(EmailDeliveryError):
        await gateway.send(MESSAGE)


@pytest.mark.asyncio
async def test_http_gateway_raises_delivery_error_on_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmailDeliveryError):
        await _gateway(handler).send(MESSAGE)


@pytest.mark.asyncio
async def test_deliver_email_logs_failure_instead_of_raising(caplog):
    gateway = MagicMock()
    gateway.send = AsyncMock(side_effect=EmailDeliveryError("provider down"))

    with caplog.at_level(logging.WARNING):
        delivered = await deliver_email(gateway, MESSAGE)

    assert delivered is False
    assert "Email delivery failed" in caplog.text


@pytest.mark.asyncio
async def test_deliver_email_success():
    gateway = MagicMock()
    gateway.send = AsyncMock()

    assert await deliver_email(gateway, MESSAGE) is True
    gateway.send.assert_called_once_with(MESSAGE)


@pytest.mark.asyncio
async def test_logging_gateway_does_not_raise():
    await LoggingEmailGateway().send(MESSAGE)
