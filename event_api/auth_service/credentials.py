"""
Credential store: password hashing and bearer token signing.

Passwords are hashed with Argon2 and tokens are HS256 JWTs whose ``sub``
claim holds the user id.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

DEFAULT_TOKEN_TTL = timedelta(hours=72)
ALGORITHM = "HS256"


class InvalidToken(Exception):
    """Token is malformed, signed with another key, or missing claims."""


class TokenExpired(InvalidToken):
    """Token signature is fine but its expiry has passed."""


class CredentialStore:
    """
    Hashes passwords and issues/verifies signed tokens.

    Args:
        secret (str): HMAC key used to sign tokens.
        token_ttl (timedelta): Default token lifetime.
        hasher (PasswordHasher, optional): Argon2 hasher, mainly for tests
            that want cheaper parameters.
    """

    def __init__(
        self,
        secret: str,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        hasher: Optional[PasswordHasher] = None,
    ) -> None:
        if not secret:
            raise RuntimeError("JWT secret must not be empty")
        self.secret = secret
        self.token_ttl = token_ttl
        self.ph = hasher or PasswordHasher()
        self._dummy_hash: Optional[str] = None

    # --- PASSWORDS ---
    def hash(self, password: str) -> str:
        return self.ph.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self.ph.verify(password_hash, password)
        except (VerificationError, InvalidHashError):
            return False

    def verify_missing(self, password: str) -> bool:
        """
        Run Argon2 verification against a placeholder hash for a login whose
        email matched no user. Always returns False.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self.ph.hash("missing-user-placeholder")
        self.verify(password, self._dummy_hash)
        return False

    # --- TOKENS ---
    def issue_token(self, user_id: int, ttl: Optional[timedelta] = None) -> str:
        """
        Sign a token for ``user_id``.

        Args:
            user_id (int): The unique ID of the user.
            ttl (timedelta, optional): Lifetime override.

        Returns:
            str: Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "exp": now + (ttl if ttl is not None else self.token_ttl),
            "iat": now,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify_token(self, token: str) -> int:
        """
        Validate a token and return the user id it was issued for.

        Raises:
            TokenExpired: If the ``exp`` claim is in the past.
            InvalidToken: For any other decoding or signature failure.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired("token expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken("invalid token") from e

        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidToken("invalid token") from e
