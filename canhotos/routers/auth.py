from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from canhotos.db.session import get_db
from canhotos.routers.deps import get_access_policy, get_current_claim
from canhotos.schemas.auth import LoginRequest, LoginResponse, UserCreate, UserCreated
from canhotos.services import credentials, sessions
from canhotos.services.access import AccessPolicy
from canhotos.services.sessions import SessionClaim

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_access_policy),
) -> LoginResponse:
    result = sessions.login(db, payload.email, payload.password, policy)
    return LoginResponse(
        token=result.token,
        role=result.user.role,
        user_id=result.user.id,
        user_name=result.user.name,
        user_email=result.user.email,
        is_master_admin=result.is_master_admin,
        expires_at=result.claim.expires_at,
    )


@router.post("/cadastrar", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCreate,
    db: Session = Depends(get_db),
    claim: SessionClaim = Depends(get_current_claim),
    policy: AccessPolicy = Depends(get_access_policy),
) -> UserCreated:
    policy.ensure_can_register(claim)
    user = credentials.create_user(db, payload.name, payload.email, payload.password, payload.role)
    return UserCreated(id=user.id, role=user.role)
