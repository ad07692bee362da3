import enum

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from canhotos.db.base import Base
from canhotos.models.common import CreatedAtMixin, IntegerPrimaryKeyMixin


class UserRole(str, enum.Enum):
    admin = "admin"
    collaborator = "collaborator"
    carrier = "carrier"


class User(IntegerPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", native_enum=False, validate_strings=True, length=32),
        nullable=False,
    )

    uploads = relationship("Upload", back_populates="owner")
