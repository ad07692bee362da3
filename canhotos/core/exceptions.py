"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``canhotos.core.handlers`` turns them into JSON
responses. Each class carries the status code it maps to.
"""


class CanhotoError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CanhotoError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]] | None = None, message: str | None = None) -> None:
        self.errors = errors or []
        if message is None and len(self.errors) == 1:
            message = self.errors[0]["msg"]
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, msg: str) -> "ValidationError":
        return cls([{"field": field, "msg": msg}])


class InvalidRole(ValidationError):
    pass


class DuplicateEmail(CanhotoError):
    status_code = 400
    default_message = "Email is already registered"


class InvalidCredentials(CanhotoError):
    status_code = 401
    default_message = "Invalid credentials"


class MissingToken(CanhotoError):
    status_code = 401
    default_message = "Access denied. No token provided"


class InvalidOrExpiredToken(CanhotoError):
    status_code = 401
    default_message = "Invalid or expired token"


class Forbidden(CanhotoError):
    status_code = 403
    default_message = "Access denied"


class NotFound(CanhotoError):
    status_code = 404
    default_message = "Not found"


class InternalError(CanhotoError):
    status_code = 500
