"""Client-facing failures raised by the storefront core.

Each error carries a stable ``kind`` and the HTTP status it maps to. Field
shape problems are raised as Protean ``ValidationError`` and reported with the
``Validation`` kind.
"""


class StorefrontError(Exception):
    kind = "Error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class NotFound(StorefrontError):
    kind = "NotFound"
    status_code = 404


class Conflict(StorefrontError):
    kind = "Conflict"
    status_code = 409


class PreconditionFailed(StorefrontError):
    kind = "Precondition"
    status_code = 422


class CodeExpired(StorefrontError):
    kind = "Expired"
    status_code = 400


class InvalidCode(StorefrontError):
    kind = "InvalidCode"
    status_code = 400


class Unauthenticated(StorefrontError):
    kind = "Unauthenticated"
    status_code = 401


class Forbidden(StorefrontError):
    kind = "Forbidden"
    status_code = 403


class InvalidTransition(StorefrontError):
    kind = "InvalidTransition"
    status_code = 409
