"""Password hashing and JWT-backed session helpers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import HTTPException, Request, status
from jwt import ExpiredSignatureError, InvalidTokenError

from workhours.core.config import AuthSettings

_password_hasher = PasswordHasher()


class AuthenticationError(Exception):
    """Raised when token validation fails."""


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated user every timesheet operation is scoped to."""

    username: str
    user_id: int


def hash_password(password: str) -> str:
    """Return a salted Argon2 hash of ``password``."""

    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored hash without raising."""

    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


class SecurityProvider:
    """Issue and verify the signed session tokens bound to a principal."""

    def __init__(self, settings: AuthSettings) -> None:
        self._settings = settings

    @property
    def cookie_name(self) -> str:
        """Return the cookie name used for the access token."""

        return self._settings.cookie_name

    @property
    def token_ttl_seconds(self) -> int:
        """Return the access token lifetime in seconds."""

        return int(self._settings.access_token_expire_minutes * 60)

    def create_access_token(self, principal: Principal) -> str:
        """Create a signed JWT for the authenticated principal."""

        now = datetime.now(tz=timezone.utc)
        expires = now + timedelta(minutes=self._settings.access_token_expire_minutes)
        payload: dict[str, object] = {
            "sub": principal.username,
            "uid": principal.user_id,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        return jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> Principal:
        """Decode a JWT and return the corresponding ``Principal``."""

        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        username = payload.get("sub")
        if not isinstance(username, str) or not username:
            raise AuthenticationError("Token payload missing required claims")
        try:
            user_id = int(payload.get("uid"))
        except (TypeError, ValueError) as exc:
            raise AuthenticationError("Token uid claim invalid") from exc
        return Principal(username=username, user_id=user_id)


def get_principal(request: Request) -> Principal:
    """Retrieve the authenticated principal from the request context."""

    principal = getattr(request.state, "user", None)
    if principal is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required")
    return principal


__all__ = [
    "AuthenticationError",
    "Principal",
    "SecurityProvider",
    "get_principal",
    "hash_password",
    "verify_password",
]
