from datetime import datetime

from pydantic import AliasChoices, BaseModel, EmailStr, Field

from canhotos.models.user import UserRole


class UserCreate(BaseModel):
    name: str = Field(validation_alias=AliasChoices("name", "nome"), max_length=255)
    email: EmailStr
    password: str = Field(validation_alias=AliasChoices("password", "senha"), min_length=8, max_length=72)
    role: str


class UserCreated(BaseModel):
    msg: str = "User created"
    id: int
    role: UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(validation_alias=AliasChoices("password", "senha"), min_length=1)


class LoginResponse(BaseModel):
    model_config = {"populate_by_name": True}

    msg: str = "Login successful"
    token: str
    token_type: str = "bearer"
    role: UserRole
    user_id: int = Field(alias="userId")
    user_name: str = Field(alias="userName")
    user_email: str = Field(alias="userEmail")
    is_master_admin: bool = Field(alias="isMasterAdmin")
    expires_at: datetime = Field(alias="expiresAt")


class UserSummary(BaseModel):
    model_config = {"from_attributes": True, "populate_by_name": True}

    id: int
    name: str = Field(alias="nome")
    email: str
    role: UserRole
