"""
Auth security helpers: bcrypt password hashing and JWT bearer tokens.

Token verification is pure computation (no DB access). The signing secret and
TTL come from the immutable `Settings` built at startup.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from core.config import Settings

# bcrypt only looks at the first 72 bytes; longer input is rejected.
BCRYPT_MAX_PASSWORD_BYTES = 72

SECONDS_PER_DAY = 24 * 60 * 60


class AuthSecurityError(RuntimeError):
    pass


class InvalidTokenError(AuthSecurityError):
    pass


class TokenExpiredError(AuthSecurityError):
    pass


@dataclass(frozen=True)
class Claims:
    user_id: int
    expires_at: int


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str, *, rounds: int = 12) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
        raise AuthSecurityError("Password is too long.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed or len(password) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


@lru_cache(maxsize=4)
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds=rounds)


def verify_password_or_dummy(plain_password: str, password_hash: str | None, *, rounds: int = 12) -> bool:
    """
    Like verify_password, but still spends a full bcrypt check when the user
    does not exist, so response timing does not reveal registered names.
    """
    if password_hash:
        return verify_password(plain_password, password_hash)
    verify_password(plain_password, _dummy_hash(rounds))
    return False


def build_access_token(*, user_id: int, settings: Settings, issued_at: int | None = None) -> str:
    issued_at = now_epoch_s() if issued_at is None else issued_at
    expires_at = issued_at + (settings.token_ttl_days * SECONDS_PER_DAY)

    payload = {
        "sub": str(user_id),
        "user_id": user_id,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Settings) -> Claims:
    raw = (token or "").strip()
    if not raw:
        raise InvalidTokenError("Access token is empty.")

    try:
        payload: dict[str, Any] = jwt.decode(
            raw,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Invalid access token.") from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise InvalidTokenError("Token is not an access token.")

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise InvalidTokenError("Invalid access token subject.")

    return Claims(user_id=int(subject), expires_at=int(payload["exp"]))
