import logging
from typing import Optional

import httpx

from src.app.services.email_gateway import EmailMessage, IEmailGateway
from src.domain.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class HttpEmailGateway(IEmailGateway):
    """Sends email through an HTTP JSON API (Resend-compatible payload)"""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        sender: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.transport = transport

    async def send(self, message: EmailMessage) -> None:
        payload = {
            "from": self.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(self.api_url, json=payload, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(str(exc)) from exc


class LoggingEmailGateway(IEmailGateway):
    """Development gateway used when no email API key is configured"""

    async def send(self, message: EmailMessage) -> None:
        logger.info(f"Email not sent (no EMAIL_API_KEY configured): subject={message.subject!r}")
