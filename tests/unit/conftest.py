import pytest
from unittest.mock import AsyncMock, MagicMock

from src.api.utils.jwt import TokenIssuer
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import PasswordHasher


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token = AsyncMock(return_value=None)
    uow.password_reset_tokens.mark_used_if_valid = AsyncMock(return_value=False)

    uow.content_items = MagicMock()
    uow.content_items.reassign_owner = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def settings():
    return AuthSettings(jwt_secret="unit-test-secret", allowed_origins=("https://app.example.com",))


@pytest.fixture
def hasher():
    return PasswordHasher()


@pytest.fixture
def token_issuer(settings):
    return TokenIssuer(settings.jwt_secret)
