"""
Password Hasher

PBKDF2-HMAC-SHA256 password hashing through passlib. Records use passlib's
self-describing modular crypt format:

    $pbkdf2-sha256$<iterations>$<salt>$<derived key>

Old records keep verifying after the iteration count is raised, because
verification always uses the parameters stored in the record.
"""

import secrets

from passlib.context import CryptContext

SCHEME = "pbkdf2_sha256"
MIN_ITERATIONS = 100_000
SALT_BYTES = 16


def _secret(password: str) -> bytes:
    # Lone surrogates are valid JSON string content; keep them hashable
    return password.encode("utf-8", "surrogatepass")


class PasswordHasher:
    """
    Derives and verifies salted password hashes.

    Business Rules:
    - Fresh 128-bit random salt per hash
    - Wrong passwords and malformed records return False, never raise
    - Derived keys are compared in constant time (passlib)
    """

    def __init__(self, iterations: int = MIN_ITERATIONS):
        if iterations < MIN_ITERATIONS:
            raise ValueError(f"PBKDF2 iterations must be at least {MIN_ITERATIONS}")
        self.iterations = iterations
        self.pwd_context = CryptContext(
            schemes=[SCHEME],
            pbkdf2_sha256__default_rounds=iterations,
            pbkdf2_sha256__salt_size=SALT_BYTES,
        )
        # Reference record for dummy_verify
        self._dummy_hash = self.pwd_context.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(_secret(password))

    def verify(self, password: str, encoded_hash: str) -> bool:
        if not isinstance(encoded_hash, str) or not encoded_hash:
            return self.dummy_verify(password)
        try:
            return self.pwd_context.verify(_secret(password), encoded_hash)
        except (ValueError, TypeError):
            # Unidentifiable or malformed record
            return self.dummy_verify(password)

    def dummy_verify(self, password: str) -> bool:
        """Spend the same work as a real verification, then fail."""
        try:
            self.pwd_context.verify(_secret(password), self._dummy_hash)
        except (ValueError, TypeError):
            # Oversized secret; the outcome is False either way
            pass
        return False
