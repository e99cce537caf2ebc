from datetime import timedelta
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_gateway import HttpEmailGateway, LoggingEmailGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import TokenIssuer
from src.app.services.auth_settings import AuthSettings
from src.app.services.email_gateway import IEmailGateway
from src.app.services.password_hasher import PasswordHasher
from src.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_config(ApplicationConfig)


def get_password_hasher(settings: AuthSettings = Depends(get_auth_settings)) -> PasswordHasher:
    return PasswordHasher(iterations=settings.password_hash_iterations)


def get_token_issuer(settings: AuthSettings = Depends(get_auth_settings)) -> TokenIssuer:
    """Raises SigningKeyMissingError (500) when JWT_SECRET is not configured"""
    return TokenIssuer(settings.jwt_secret, expires_in=timedelta(days=settings.jwt_expiry_days))


def get_email_gateway() -> IEmailGateway:
    if not ApplicationConfig.EMAIL_API_KEY:
        return LoggingEmailGateway()
    return HttpEmailGateway(
        api_url=ApplicationConfig.EMAIL_API_URL,
        api_key=ApplicationConfig.EMAIL_API_KEY,
        sender=ApplicationConfig.EMAIL_FROM,
        timeout=ApplicationConfig.EMAIL_TIMEOUT_SECONDS,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> dict:
    """
    Dependency to extract and verify the session token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header
        token_issuer: Issuer holding the signing secret

    Returns:
        Decoded token claims (sub, id, email, isAdmin, iat, exp)

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    payload = token_issuer.verify(credentials.credentials) if credentials else None

    if payload is None:
        raise ClientError(
            Error("INVALID_SESSION", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload
