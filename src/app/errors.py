"""
Error taxonomy for authentication use cases.

Every ``Error.code`` returned by a use case belongs to exactly one
``ErrorKind``; the API layer turns the kind into a status code.
"""

from enum import Enum

from libs.result import Error


class ErrorKind(str, Enum):
    validation = "validation"
    authentication = "authentication"
    conflict = "conflict"
    not_found = "not_found"
    internal = "internal"


VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
INVALID_TOKEN = "INVALID_TOKEN"
UNAUTHORIZED = "UNAUTHORIZED"
USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
EMAIL_ALREADY_VERIFIED = "EMAIL_ALREADY_VERIFIED"
USER_NOT_FOUND = "USER_NOT_FOUND"
INTERNAL_ERROR = "INTERNAL_ERROR"

ERROR_KINDS = {
    VALIDATION_ERROR: ErrorKind.validation,
    INVALID_CREDENTIALS: ErrorKind.authentication,
    INVALID_TOKEN: ErrorKind.authentication,
    UNAUTHORIZED: ErrorKind.authentication,
    USER_ALREADY_EXISTS: ErrorKind.conflict,
    EMAIL_ALREADY_VERIFIED: ErrorKind.conflict,
    USER_NOT_FOUND: ErrorKind.not_found,
    INTERNAL_ERROR: ErrorKind.internal,
}


def kind_of(error: Error) -> ErrorKind:
    """Unknown codes are treated as internal so they never leak detail."""
    return ERROR_KINDS.get(error.code, ErrorKind.internal)


def invalid_credentials() -> Error:
    return Error(INVALID_CREDENTIALS, "Invalid credentials")


def invalid_token() -> Error:
    return Error(INVALID_TOKEN, "Invalid or expired token")


def internal_error(message: str = "Something went wrong") -> Error:
    return Error(INTERNAL_ERROR, message)
