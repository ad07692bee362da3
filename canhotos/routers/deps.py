from fastapi import Header

from canhotos.core.config import get_settings
from canhotos.services.access import AccessPolicy
from canhotos.services.sessions import SessionClaim, token_from_authorization, verify


def get_current_claim(authorization: str | None = Header(default=None)) -> SessionClaim:
    return verify(token_from_authorization(authorization))


def get_access_policy() -> AccessPolicy:
    return AccessPolicy(master_admin_email=get_settings().master_admin_email)
