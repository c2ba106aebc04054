"""Authentication services package."""

from authentication.services.auth_service import AuthService
from authentication.services.user_service import UserService

__all__ = ["AuthService", "UserService"]
