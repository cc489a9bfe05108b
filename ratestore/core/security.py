"""Password hashing and session token issuance/verification."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from ratestore.core.config import Settings
from ratestore.models.user import Role

# Bcrypt cost (rounds).
BCRYPT_ROUNDS = 10


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; the password policy keeps us well below it.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenVerificationError(Exception):
    """Raised when a session token is malformed, tampered with, or expired."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class SessionClaims:
    """Identity proven by a verified session token."""

    account_id: str
    role: Role


class TokenService:
    """
    Issues and verifies signed, time-bound session tokens.

    The signing secret is injected at construction; verification is a pure
    function of the token and that secret.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 10080) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, account_id: str, role: Role, now: datetime | None = None) -> str:
        """Create a token with sub (account id), role, iat, and exp."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(account_id),
            "role": Role(role).value,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaims:
        """
        Decode and validate a token; return its claims.
        Raises TokenVerificationError on bad signature, expiry, or invalid claims.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenVerificationError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise TokenVerificationError("Invalid token") from e

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub:
            raise TokenVerificationError("Invalid token payload")
        try:
            role = Role(payload.get("role"))
        except ValueError as e:
            raise TokenVerificationError("Invalid token payload") from e
        return SessionClaims(account_id=sub, role=role)
