from canhotos.schemas.auth import LoginRequest, LoginResponse, UserCreate, UserCreated, UserSummary
from canhotos.schemas.upload import UploadCreateResponse, UploadPageRead, UploadQuery, UploadRead

__all__ = [
    "UserCreate",
    "UserCreated",
    "UserSummary",
    "LoginRequest",
    "LoginResponse",
    "UploadQuery",
    "UploadCreateResponse",
    "UploadRead",
    "UploadPageRead",
]
