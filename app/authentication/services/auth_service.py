"""
Authentication service.

Issues and verifies the signed session token carried in the auth cookie,
and validates email/password credentials.

Token format:
    HS256 JWT built with rest_framework_simplejwt.AccessToken.
    Claims: user_id, email, exp (24 hours, SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]).

Related files:
    - backends.py: DRF authentication reading the auth cookie
    - cookies.py: Setting and clearing the auth cookie on responses
    - views.py: Login, register, logout, current-user endpoints
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model, password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from authentication.models import User

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService(BaseService):
    """
    Stateless authentication operations.

    The token is the only session state; nothing is stored server-side.

    Usage:
        result = AuthService.login(email, password)
        if result.success:
            user, token = result.data
            set_auth_cookie(response, token)
    """

    @classmethod
    def issue_token(cls, user: User) -> str:
        """Return a signed session token embedding the user's id and email."""
        token = AccessToken.for_user(user)
        token["email"] = user.email
        return str(token)

    @classmethod
    def verify_token(cls, raw_token: str | None) -> ServiceResult[dict]:
        """
        Decode a session token and check its signature and expiry.

        Returns:
            ServiceResult with the token payload (user_id, email, exp)

        Error codes:
            INVALID_TOKEN: Missing, expired, malformed or wrongly signed
        """
        if not raw_token:
            return ServiceResult.failure(
                "Authentication token missing", error_code="INVALID_TOKEN"
            )

        try:
            token = AccessToken(raw_token)
        except TokenError as e:
            cls.get_logger().info(f"Rejected session token: {e}")
            return ServiceResult.failure(
                "Invalid or expired token", error_code="INVALID_TOKEN"
            )

        return ServiceResult.success(dict(token.payload))

    @classmethod
    def login(cls, email: str | None, password: str | None) -> ServiceResult[tuple]:
        """
        Validate credentials and issue a session token.

        Unknown emails, wrong passwords and inactive accounts all fail with
        the same message, so callers cannot discover which emails exist.

        Returns:
            ServiceResult with (user, token)

        Error codes:
            INVALID_CREDENTIALS: Email/password mismatch
        """
        UserModel = get_user_model()
        email = UserModel.objects.normalize_email(email or "")

        user = UserModel.objects.filter(email__iexact=email).first()
        if user is None:
            # Hash anyway so unknown emails take as long as wrong passwords
            UserModel().set_password(password or "")
            cls.get_logger().info("Login failed for unknown email")
            return ServiceResult.failure(
                INVALID_CREDENTIALS_MESSAGE, error_code="INVALID_CREDENTIALS"
            )

        if not user.check_password(password or "") or not user.is_active:
            cls.get_logger().info(f"Login failed for user {user.id}")
            return ServiceResult.failure(
                INVALID_CREDENTIALS_MESSAGE, error_code="INVALID_CREDENTIALS"
            )

        cls.get_logger().info(f"User {user.id} logged in")
        return ServiceResult.success((user, cls.issue_token(user)))

    @classmethod
    def register(
        cls,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> ServiceResult[tuple]:
        """
        Create an account and issue a session token.

        Returns:
            ServiceResult with (user, token)

        Error codes:
            MISSING_PARAMETER: Email or password absent
            EMAIL_EXISTS: An account with this email already exists
            VALIDATION_ERROR: Password rejected by AUTH_PASSWORD_VALIDATORS
        """
        missing = cls.validate_required(email=email, password=password)
        if missing is not None:
            return missing

        UserModel = get_user_model()
        email = UserModel.objects.normalize_email(email)

        if UserModel.objects.filter(email__iexact=email).exists():
            return ServiceResult.failure(
                "Email already registered", error_code="EMAIL_EXISTS"
            )

        candidate = UserModel(email=email)
        try:
            password_validation.validate_password(password, user=candidate)
        except DjangoValidationError as e:
            return ServiceResult.failure(
                "Validation failed",
                error_code="VALIDATION_ERROR",
                errors={"password": list(e.messages)},
            )

        with cls.atomic():
            user = UserModel.objects.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )

        cls.get_logger().info(f"Registered user {user.id}")
        return ServiceResult.success((user, cls.issue_token(user)))

    @classmethod
    def get_current_user(cls, raw_token: str | None) -> ServiceResult[User]:
        """
        Resolve the user behind a session token.

        Error codes:
            INVALID_TOKEN: Token missing or failed verification
            USER_NOT_FOUND: Token valid but its user no longer exists or was
                deactivated
        """
        verified = cls.verify_token(raw_token)
        if not verified:
            return verified

        UserModel = get_user_model()
        user_id = verified.data.get("user_id")
        user = (
            UserModel.objects.select_related("profile")
            .filter(id=user_id)
            .first()
        )
        if user is None or not user.is_active:
            cls.get_logger().warning(f"Valid token for missing or inactive user {user_id}")
            return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")

        return ServiceResult.success(user)
