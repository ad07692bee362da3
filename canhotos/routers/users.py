from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from canhotos.db.session import get_db
from canhotos.routers.deps import get_access_policy, get_current_claim
from canhotos.schemas.auth import UserSummary
from canhotos.services import credentials
from canhotos.services.access import AccessPolicy
from canhotos.services.sessions import SessionClaim

router = APIRouter(tags=["users"])


@router.get("/usuarios", response_model=list[UserSummary])
def list_users(
    db: Session = Depends(get_db),
    claim: SessionClaim = Depends(get_current_claim),
    policy: AccessPolicy = Depends(get_access_policy),
) -> list[UserSummary]:
    policy.ensure_can_list_users(claim)
    return [
        UserSummary(id=user.id, name=user.name, email=user.email, role=user.role)
        for user in credentials.list_all(db)
    ]
