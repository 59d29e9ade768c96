"""
Authentication error kinds.

Every failure a session operation can report, as libs.result.Error values.
The API layer maps each code to an HTTP status.
"""

from typing import List

from libs.result import Error

INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
UNAUTHORIZED = "UNAUTHORIZED"
INVALID_SESSION = "INVALID_SESSION"
SESSION_LIMIT_EXCEEDED = "SESSION_LIMIT_EXCEEDED"
VALIDATION_ERROR = "VALIDATION_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"
EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"


def invalid_credentials() -> Error:
    # Same message for unknown email and wrong password
    return Error(INVALID_CREDENTIALS, "Invalid email or password")


def unauthorized(message: str = "Invalid or expired token") -> Error:
    return Error(UNAUTHORIZED, message)


def invalid_session() -> Error:
    return Error(INVALID_SESSION, "Invalid session")


def session_limit_exceeded(limit: int) -> Error:
    return Error(
        SESSION_LIMIT_EXCEEDED,
        f"Session limit of {limit} active sessions reached",
    )


def validation_error(details: List[dict]) -> Error:
    return Error(VALIDATION_ERROR, "Invalid session data", details)


def internal_error(message: str) -> Error:
    return Error(INTERNAL_ERROR, message)
