"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps (authentication, chat):

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and HTTP status
    - ValidationError / MissingParameterError
    - AuthenticationFailedError / InvalidCredentialsError / InvalidTokenError
    - PermissionDeniedError, NotFoundError, ConflictError, ServerError
    - raise_for_result: Raise the matching error for a failed ServiceResult

Exception handler (configured in REST_FRAMEWORK settings):
    - core.exception_handler.api_exception_handler

Note:
    Models are NOT imported here to avoid AppRegistryNotReady errors.
    Import them directly from core.models.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    AuthenticationFailedError,
    BaseApplicationError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingParameterError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    ValidationError,
    raise_for_result,
)

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "MissingParameterError",
    "AuthenticationFailedError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PermissionDeniedError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    "raise_for_result",
]
