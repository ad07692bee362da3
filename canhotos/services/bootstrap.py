import logging

from sqlalchemy.orm import Session

from canhotos.core.config import Settings
from canhotos.core.exceptions import DuplicateEmail, ValidationError
from canhotos.models.user import User, UserRole
from canhotos.services.credentials import count_users, create_user

logger = logging.getLogger(__name__)


def seed_master_admin(db: Session, settings: Settings) -> User | None:
    """Create the master admin on an empty database so someone can register users."""
    if count_users(db) > 0:
        return None
    try:
        user = create_user(
            db,
            name=settings.master_admin_name,
            email=settings.master_admin_email,
            password=settings.master_admin_initial_password,
            role=UserRole.admin,
        )
    except DuplicateEmail:
        # Another worker seeded it first.
        return None
    except ValidationError as exc:
        logger.error("master_admin_seed_skipped", extra={"errors": exc.errors})
        return None
    logger.info("master_admin_seeded", extra={"user_id": user.id})
    return user
