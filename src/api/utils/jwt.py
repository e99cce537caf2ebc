from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from src.domain.entities import User
from src.domain.exceptions import SigningKeyMissingError

ALGORITHM = "HS256"


class TokenIssuer:
    """
    Signs and verifies HS256 session tokens.

    Tokens are header.payload.signature, each segment base64url-encoded.
    Claims are readable by anyone holding the token; only integrity is
    guaranteed.
    """

    def __init__(self, secret: Optional[str], expires_in: timedelta = timedelta(days=7)):
        if not secret:
            raise SigningKeyMissingError("JWT_SECRET is not configured")
        self._secret = secret
        self.expires_in = expires_in

    def issue(self, claims: dict) -> str:
        """
        Sign claims into a session token

        Args:
            claims: Identity claims (sub, id, email, isAdmin)

        Returns:
            JWT string with iat and exp (iat + expires_in) added
        """
        now = datetime.now(UTC)
        payload = dict(claims)
        payload["iat"] = int(now.timestamp())
        payload["exp"] = int((now + self.expires_in).timestamp())
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[dict]:
        """
        Verify and decode a session token

        Args:
            token: JWT token string

        Returns:
            Decoded claims or None if malformed, tampered with or expired
        """
        try:
            return jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError:
            return None


def session_claims(user: User) -> dict:
    """Identity claims carried by a session token"""
    user_id = str(user.id)
    return {
        "sub": user_id,
        "id": user_id,
        "email": user.email,
        "isAdmin": user.is_admin,
    }
