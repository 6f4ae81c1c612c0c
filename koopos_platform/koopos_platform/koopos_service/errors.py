"""
Application error taxonomy.

Every failure a workflow can report is one of a closed set of kinds. Each kind
carries a stable application code and the HTTP status it is surfaced with; the
FastAPI exception handler in ``main.py`` turns a ``ServiceError`` into an error
envelope.
"""
from enum import Enum
from typing import List, Optional

from .schemas import ErrorDetail


class ApplicationCode(str, Enum):
    SUCCESS = "KPS-000"
    VALIDATION_ERROR = "KPS-400"
    AUTHENTICATION_FAILED = "KPS-401"
    NOT_FOUND = "KPS-404"
    CONFLICT = "KPS-409"
    INTERNAL_ERROR = "KPS-500"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ApplicationCode.SUCCESS: "Success",
    ApplicationCode.VALIDATION_ERROR: "Invalid request",
    ApplicationCode.AUTHENTICATION_FAILED: "Authentication failed",
    ApplicationCode.NOT_FOUND: "Resource not found",
    ApplicationCode.CONFLICT: "Resource already exists",
    ApplicationCode.INTERNAL_ERROR: "Internal server error",
}


class ErrorKind(Enum):
    VALIDATION = (ApplicationCode.VALIDATION_ERROR, 400)
    AUTHENTICATION = (ApplicationCode.AUTHENTICATION_FAILED, 401)
    NOT_FOUND = (ApplicationCode.NOT_FOUND, 404)
    CONFLICT = (ApplicationCode.CONFLICT, 409)

    def __init__(self, code: ApplicationCode, status_code: int):
        self.code = code
        self.status_code = status_code


class ServiceError(Exception):
    """Terminal per-request failure of one of the ``ErrorKind`` kinds."""

    def __init__(self, kind: ErrorKind, details: Optional[List[ErrorDetail]] = None):
        self.kind = kind
        self.details = list(details or [])
        message = "; ".join(detail.message for detail in self.details) or kind.code.message
        super().__init__(message)

    @property
    def code(self) -> ApplicationCode:
        return self.kind.code

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @classmethod
    def conflict(cls, *details: ErrorDetail) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, list(details))

    @classmethod
    def not_found(cls, *details: ErrorDetail) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, list(details))

    @classmethod
    def authentication(cls, *details: ErrorDetail) -> "ServiceError":
        return cls(ErrorKind.AUTHENTICATION, list(details))

    @classmethod
    def validation(cls, *details: ErrorDetail) -> "ServiceError":
        return cls(ErrorKind.VALIDATION, list(details))


# ---------------- Error details ----------------

def user_already_exists(field: Optional[str] = None) -> ErrorDetail:
    if field is None:
        return ErrorDetail(field="username", message="User with the given username or email already exists")
    return ErrorDetail(field=field, message=f"User with the given {field} already exists")


def user_invalid_role() -> ErrorDetail:
    return ErrorDetail(field="role", message="Role does not exist")


def user_not_found() -> ErrorDetail:
    return ErrorDetail(field="username", message="User not found")


def invalid_credentials() -> ErrorDetail:
    return ErrorDetail(field="password", message="Invalid credentials")


def invalid_token(message: str = "Invalid or expired token") -> ErrorDetail:
    return ErrorDetail(field="Authorization", message=message)


def item_already_exists(barcode: str) -> ErrorDetail:
    return ErrorDetail(field="barcode", message=f"Item with barcode {barcode} already exists")


def item_not_found(barcode: str) -> ErrorDetail:
    return ErrorDetail(field="barcode", message=f"Item with barcode {barcode} not found")


def category_already_exists(name: str) -> ErrorDetail:
    return ErrorDetail(field="name", message=f"Category {name} already exists")


def category_not_found(name: str) -> ErrorDetail:
    return ErrorDetail(field="categories", message=f"Category {name} not found")
