"""Login and bearer-token verification.

Tokens are HS256 JWTs carrying the user id, role and email. They are never
refreshed server-side: once ``exp`` passes the client has to log in again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from canhotos.core.config import get_settings
from canhotos.core.exceptions import InvalidCredentials, InvalidOrExpiredToken, MissingToken
from canhotos.core.security import create_access_token, decode_access_token, dummy_verify_password, verify_password
from canhotos.models.user import User, UserRole
from canhotos.services.credentials import MAX_PASSWORD_BYTES, find_by_email

if TYPE_CHECKING:
    from canhotos.services.access import AccessPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionClaim:
    user_id: int
    role: UserRole
    email: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class LoginResult:
    token: str
    claim: SessionClaim
    user: User
    is_master_admin: bool


def issue_token(user: User) -> tuple[str, SessionClaim]:
    settings = get_settings()
    # JWT timestamps have one-second resolution.
    issued_at = datetime.now(timezone.utc).replace(microsecond=0)
    expires_at = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        str(user.id),
        claims={"id": user.id, "role": user.role.value, "email": user.email},
        expires_delta=expires_at - issued_at,
        issued_at=issued_at,
    )
    claim = SessionClaim(user_id=user.id, role=user.role, email=user.email, issued_at=issued_at, expires_at=expires_at)
    return token, claim


def login(db: Session, email: str, password: str, policy: AccessPolicy) -> LoginResult:
    user = find_by_email(db, email)
    if user is None or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        dummy_verify_password()
        logger.info("login_failed")
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        logger.info("login_failed")
        raise InvalidCredentials()

    token, claim = issue_token(user)
    logger.info("login_succeeded", extra={"user_id": user.id})
    return LoginResult(
        token=token,
        claim=claim,
        user=user,
        is_master_admin=policy.is_master_admin(user.role, user.email),
    )


def token_from_authorization(header: str | None) -> str:
    if not header:
        raise MissingToken()
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise MissingToken()
    return token.strip()


def verify(token: str | None) -> SessionClaim:
    if not token:
        raise MissingToken()
    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise InvalidOrExpiredToken() from exc

    try:
        return SessionClaim(
            user_id=int(payload["id"]),
            role=UserRole(payload["role"]),
            email=str(payload["email"]),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidOrExpiredToken() from exc
