from canhotos.models.upload import Upload
from canhotos.models.user import User, UserRole

__all__ = ["User", "UserRole", "Upload"]
