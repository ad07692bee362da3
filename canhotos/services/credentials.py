"""User records: creation, login lookup and listing.

This module and ``canhotos.services.uploads`` are the only writers of the
database. Email uniqueness is left to the unique index on ``users.email``.
"""

import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from canhotos.core.exceptions import DuplicateEmail, InvalidRole, ValidationError
from canhotos.core.security import hash_password
from canhotos.models.user import User, UserRole

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
# bcrypt only hashes the first 72 bytes.
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_role(role: str | UserRole) -> UserRole:
    try:
        return UserRole(role.strip().lower() if isinstance(role, str) else role)
    except ValueError as exc:
        allowed = ", ".join(item.value for item in UserRole)
        raise InvalidRole([{"field": "role", "msg": f"Role must be one of: {allowed}"}]) from exc


def _validate_new_user(name: str, email: str, password: str) -> list[dict[str, str]]:
    errors = []
    if not name or not name.strip():
        errors.append({"field": "name", "msg": "Name is required"})
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        errors.append({"field": "email", "msg": "A valid email is required"})
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"field": "password", "msg": f"Password must be at least {MIN_PASSWORD_LENGTH} characters"})
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append({"field": "password", "msg": f"Password must be at most {MAX_PASSWORD_BYTES} bytes"})
    return errors


def create_user(db: Session, name: str, email: str, password: str, role: str | UserRole) -> User:
    errors = _validate_new_user(name, email, password)
    if errors:
        raise ValidationError(errors)
    parsed_role = parse_role(role)

    user = User(
        name=name.strip(),
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=parsed_role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("user_create_conflict", extra={"email": user.email})
        raise DuplicateEmail() from exc
    db.refresh(user)
    logger.info("user_created", extra={"user_id": user.id, "role": user.role.value})
    return user


def find_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == normalize_email(email)))


def list_all(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.name.asc(), User.id.asc())).all())


def count_users(db: Session) -> int:
    return db.scalar(select(func.count(User.id))) or 0
