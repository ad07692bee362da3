"""Who may do what.

``AccessPolicy`` holds no state besides the configured master admin email
and never touches the database. Every decision is made against the
``SessionClaim`` of the current request.
"""

from canhotos.core.exceptions import Forbidden
from canhotos.models.user import UserRole
from canhotos.services.sessions import SessionClaim

CROSS_USER_ROLES = frozenset({UserRole.admin, UserRole.collaborator})


class AccessPolicy:
    def __init__(self, master_admin_email: str) -> None:
        self.master_admin_email = master_admin_email.strip().lower()

    def is_master_admin(self, role: UserRole, email: str) -> bool:
        return role == UserRole.admin and email.strip().lower() == self.master_admin_email

    def ensure_can_register(self, claim: SessionClaim) -> None:
        if claim.role != UserRole.admin:
            raise Forbidden("Only administrators can create users")
        if not self.is_master_admin(claim.role, claim.email):
            raise Forbidden("Only the master administrator can create users")

    def ensure_can_list_users(self, claim: SessionClaim) -> None:
        if claim.role not in CROSS_USER_ROLES:
            raise Forbidden("Only collaborators or administrators can list users")

    def visible_owner(self, claim: SessionClaim, requested_owner_id: int | None) -> int | None:
        """Owner id every upload query must be restricted to; ``None`` means any owner.

        Carriers are pinned to themselves and their requested owner is ignored.
        """
        if claim.role in CROSS_USER_ROLES:
            return requested_owner_id
        return claim.user_id

    def owner_for_new_upload(self, claim: SessionClaim) -> int:
        return claim.user_id
