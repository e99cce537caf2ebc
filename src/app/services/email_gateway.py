"""
Email Gateway

Outbound email port. Delivery failures are reported as EmailDeliveryError
and are never surfaced to the HTTP caller.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.domain.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html: str


class IEmailGateway(ABC):
    """Email gateway interface - application layer"""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """
        Hand a message to the email provider.

        Raises:
            EmailDeliveryError: the provider did not accept the message
        """
        pass


async def deliver_email(gateway: IEmailGateway, message: EmailMessage) -> bool:
    """Send a message, logging failures instead of raising them."""
    try:
        await gateway.send(message)
    except EmailDeliveryError as exc:
        logger.warning(f"Email delivery failed: subject={message.subject!r} reason={exc}")
        return False
    return True
