"""
Domain exceptions raised by adapters and services.

Business outcomes are reported through Result; these cover the cases where
a lower layer has to signal a condition it cannot express as a return value.
"""


class EmailAlreadyExistsError(Exception):
    """The storage layer rejected a user insert on the unique email constraint."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class SigningKeyMissingError(Exception):
    """No secret is configured for signing session tokens."""


class EmailDeliveryError(Exception):
    """The outbound email gateway failed to accept a message."""
