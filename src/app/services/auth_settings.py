"""
Auth Settings

Explicit configuration handed to the auth use cases and the token issuer.
Built once from ApplicationConfig so tests can substitute their own values.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: Optional[str]
    jwt_expiry_days: int = 7
    min_password_length: int = 6
    password_hash_iterations: int = 100_000
    reset_token_ttl_minutes: int = 30
    app_base_url: str = "http://localhost:8000"
    # Origins a client may name as the reset link base, besides app_base_url
    allowed_origins: Tuple[str, ...] = ()

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            jwt_secret=config.JWT_SECRET,
            jwt_expiry_days=config.JWT_EXPIRY_DAYS,
            min_password_length=config.PASSWORD_MIN_LENGTH,
            password_hash_iterations=config.PASSWORD_HASH_ITERATIONS,
            reset_token_ttl_minutes=config.RESET_TOKEN_TTL_MINUTES,
            app_base_url=config.APP_BASE_URL,
            allowed_origins=tuple(config.CORS_ORIGINS or ()),
        )
