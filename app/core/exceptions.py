"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent JSON error bodies across every endpoint
- Machine-readable error codes for client handling
- A fixed HTTP status per error class

Exception Hierarchy:
    BaseApplicationError (base, 500)
    ├── ValidationError - Input validation failures (400)
    │   └── MissingParameterError - Required id/parameter absent (400)
    ├── AuthenticationFailedError - Not authenticated (401)
    │   ├── InvalidCredentialsError - Email/password mismatch (401)
    │   └── InvalidTokenError - Expired, malformed or tampered token (401)
    ├── PermissionDeniedError - Authorization failures (403)
    ├── NotFoundError - Resource not found (404)
    ├── ConflictError - State conflicts such as duplicates (409)
    └── ServerError - Unexpected or storage failures (500)

Usage:
    from core.exceptions import MissingParameterError, NotFoundError

    # Raise with message only
    raise NotFoundError("Conversation not found")

    # Raise with error code for client handling
    raise ConflictError("Email already registered", error_code="EMAIL_EXISTS")

    # Convert a failed ServiceResult at the view boundary
    result = ConversationService.delete_for_user(conversation_id, user_id)
    raise_for_result(result)

Note:
    Every exception in this module is rendered by
    core.exception_handler.api_exception_handler as
    {"error": ..., "error_code": ..., "details": ...}.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any

    from core.services import ServiceResult


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        status_code: HTTP status used when rendered at the request boundary
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "Conversation not found",
                "error_code": "NOT_FOUND",
                "details": {"conversation_id": 12}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Example:
        raise ValidationError(
            "Validation failed",
            details={"password": ["This password is too short."]}
        )
    """

    default_error_code: str = "VALIDATION_ERROR"
    status_code: int = 400


class MissingParameterError(ValidationError):
    """
    Raised when a required identifier is absent from a request.

    Example:
        if not conversation_id:
            raise MissingParameterError(
                "conversation_id is required",
                details={"conversation_id": ["This field is required."]}
            )
    """

    default_error_code: str = "MISSING_PARAMETER"


class AuthenticationFailedError(BaseApplicationError):
    """Raised when the caller is not authenticated."""

    default_error_code: str = "UNAUTHORIZED"
    status_code: int = 401


class InvalidCredentialsError(AuthenticationFailedError):
    """
    Raised on an email/password mismatch.

    The same message is used for unknown emails and wrong passwords so the
    response never reveals whether an account exists.
    """

    default_error_code: str = "INVALID_CREDENTIALS"


class InvalidTokenError(AuthenticationFailedError):
    """Raised when a session token is expired, malformed or tampered."""

    default_error_code: str = "INVALID_TOKEN"


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when user lacks permission for an operation.

    Note:
        For authentication failures (missing/invalid token), use
        AuthenticationFailedError. Use this for authorization failures.
    """

    default_error_code: str = "PERMISSION_DENIED"
    status_code: int = 403


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Example:
        raise NotFoundError(
            "User not found",
            error_code="USER_NOT_FOUND",
            details={"user_id": user_id}
        )
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404


class ConflictError(BaseApplicationError):
    """
    Raised when operation conflicts with current resource state.

    Example:
        if User.objects.filter(email=email).exists():
            raise ConflictError(
                "Email already registered",
                error_code="EMAIL_EXISTS",
            )
    """

    default_error_code: str = "CONFLICT"
    status_code: int = 409


class ServerError(BaseApplicationError):
    """Raised for unexpected or storage failures."""

    default_error_code: str = "SERVER_ERROR"
    status_code: int = 500


# Error codes returned by services mapped to the exception rendered for them.
# Codes not listed here fall back to ValidationError (400).
ERROR_CODE_EXCEPTIONS: dict[str, type[BaseApplicationError]] = {
    "VALIDATION_ERROR": ValidationError,
    "EMPTY_CONTENT": ValidationError,
    "MISSING_PARAMETER": MissingParameterError,
    "UNAUTHORIZED": AuthenticationFailedError,
    "INVALID_CREDENTIALS": InvalidCredentialsError,
    "INVALID_TOKEN": InvalidTokenError,
    "PERMISSION_DENIED": PermissionDeniedError,
    "NOT_FOUND": NotFoundError,
    "USER_NOT_FOUND": NotFoundError,
    "CONVERSATION_NOT_FOUND": NotFoundError,
    "NOT_PARTICIPANT": NotFoundError,
    "CONFLICT": ConflictError,
    "EMAIL_EXISTS": ConflictError,
    "SERVER_ERROR": ServerError,
}


def exception_for_result(result: ServiceResult) -> BaseApplicationError:
    """Build the exception matching a failed ServiceResult's error code."""
    exc_class = ERROR_CODE_EXCEPTIONS.get(result.error_code or "", ValidationError)
    return exc_class(
        result.error or "Request failed",
        error_code=result.error_code,
        details=result.errors,
    )


def raise_for_result(result: ServiceResult) -> None:
    """
    Raise the matching application error if the result failed.

    Example:
        result = MessageService.mark_as_read(conversation_id, request.user.id)
        raise_for_result(result)
        return Response({"updated": result.data})
    """
    if not result.success:
        raise exception_for_result(result)
