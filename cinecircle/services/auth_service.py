"""Bearer token verification for identities issued by the external provider.

Verification is active only when ``IDENTITY_JWT_SECRET`` is configured. The
token's ``sub`` claim must then match the acting user id named in the
request; without a secret the id in the request is trusted as-is.
"""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..config import get_settings
from ..security.secrets import MissingSecretError, optional_secret

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)


def _get_identity_secret() -> str | None:
    settings = get_settings()
    try:
        return optional_secret("IDENTITY_JWT_SECRET", settings.identity_jwt_secret)
    except MissingSecretError as exc:
        raise RuntimeError(str(exc)) from exc


def identity_enabled() -> bool:
    return _get_identity_secret() is not None


def decode_identity_token(token: str) -> UUID:
    """Decode and validate a provider JWT, returning the subject UUID."""

    settings = get_settings()
    secret = _get_identity_secret()
    if secret is None:
        raise RuntimeError("Identity verification is not configured")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience,
        )
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = payload.get("sub")
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    try:
        return UUID(subject)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload") from exc


async def get_token_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> UUID | None:
    """Resolve the caller from the bearer token, or ``None`` when verification is off."""

    if not identity_enabled():
        return None

    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    return decode_identity_token(credentials.credentials)


async def get_optional_token_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> UUID | None:
    """Resolve the caller when a token is presented; anonymous callers resolve to ``None``."""

    if not identity_enabled() or credentials is None:
        return None
    return await get_token_subject(credentials)


def ensure_actor(subject: UUID | None, actor_id: UUID | None) -> None:
    """Reject requests that act on behalf of someone other than the token holder."""

    if subject is None:
        return
    if actor_id != subject:
        logger.warning("Token subject %s attempted to act as %s", subject, actor_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Token does not match the acting user")


def ensure_claimed_actor(subject: UUID | None, actor_id: UUID) -> None:
    """Like ``ensure_actor``, for routes that are public until the caller names themselves."""

    if subject is None and identity_enabled():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
    ensure_actor(subject, actor_id)


__all__ = [
    "identity_enabled",
    "decode_identity_token",
    "get_token_subject",
    "get_optional_token_subject",
    "ensure_actor",
    "ensure_claimed_actor",
]
