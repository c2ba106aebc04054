"""
Authentication views.

This module provides API views for:
- Login / registration / logout (auth cookie lifecycle)
- Current user lookup
- User search
- Profile updates

Related files:
    - serializers.py: Request/response serialization
    - services/: Business logic (AuthService, UserService)
    - cookies.py: Auth cookie helpers
    - urls.py: URL routing

Endpoints:
    POST    /api/v1/auth/register/     Create account, set cookie
    POST    /api/v1/auth/login/        Email/password login, set cookie
    POST    /api/v1/auth/logout/       Clear cookie
    GET     /api/v1/auth/me/           Current user from cookie
    GET     /api/v1/users/search/?q=   Search active users
    PUT     /api/v1/users/profile/     Update status / picture
"""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.cookies import clear_auth_cookie, get_auth_cookie, set_auth_cookie
from authentication.models import Profile
from authentication.serializers import (
    LoginSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
    UserSummarySerializer,
)
from authentication.services import AuthService, UserService
from core.exceptions import raise_for_result


# =============================================================================
# Session Views
# =============================================================================


class LoginView(APIView):
    """
    Authenticate with email and password.

    On success the session token is set in the auth cookie and the user's
    account is returned. Unknown emails and wrong passwords both return
    401 INVALID_CREDENTIALS.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log in",
        request=LoginSerializer,
        responses={
            200: UserSerializer,
            401: OpenApiResponse(description="Invalid credentials"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.login(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        raise_for_result(result)

        user, token = result.data
        response = Response(UserSerializer(user).data)
        set_auth_cookie(response, token)
        return response


class RegisterView(APIView):
    """Create an account and start a session."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register new account",
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Validation error"),
            409: OpenApiResponse(description="Email already registered"),
        },
        tags=["Auth"],
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(**serializer.validated_data)
        raise_for_result(result)

        user, token = result.data
        response = Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)
        set_auth_cookie(response, token)
        return response


class LogoutView(APIView):
    """Clear the auth cookie. Always succeeds."""

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Log out",
        request=None,
        responses={200: OpenApiTypes.OBJECT},
        tags=["Auth"],
    )
    def post(self, request):
        response = Response({"success": True})
        clear_auth_cookie(response)
        return response


class CurrentUserView(APIView):
    """
    Return the user behind the auth cookie.

    Resolves the token itself rather than through DRF authentication so that
    a valid token for a deleted user yields 404 instead of 401.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Get current user",
        responses={
            200: UserSerializer,
            401: OpenApiResponse(description="Missing, expired or invalid token"),
            404: OpenApiResponse(description="User no longer exists"),
        },
        tags=["Auth"],
    )
    def get(self, request):
        result = AuthService.get_current_user(get_auth_cookie(request))
        raise_for_result(result)
        return Response(UserSerializer(result.data).data)


# =============================================================================
# User Views
# =============================================================================


class UserSearchView(APIView):
    """Search active users by name or email, excluding the caller."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Search users",
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=True,
                description="Case-insensitive substring of first name, last name or email",
            ),
        ],
        responses={200: UserSummarySerializer(many=True)},
        tags=["Users"],
    )
    def get(self, request):
        result = UserService.search(request.query_params.get("q"), request.user)
        raise_for_result(result)
        return Response(UserSummarySerializer(result.data, many=True).data)


class ProfileView(APIView):
    """
    Read or update the caller's profile.

    GET: Current profile
    PUT/PATCH: Update any of status, profile_picture, first_name, last_name.
        last_seen is stamped on every update.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get profile", responses={200: ProfileSerializer}, tags=["Users"])
    def get(self, request):
        profile, _ = Profile.objects.get_or_create(user=request.user)
        return Response(ProfileSerializer(profile).data)

    @extend_schema(
        summary="Update profile",
        request=ProfileUpdateSerializer,
        responses={200: ProfileSerializer},
        tags=["Users"],
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = UserService.update_profile(request.user, **serializer.validated_data)
        raise_for_result(result)
        return Response(ProfileSerializer(result.data).data)

    @extend_schema(
        summary="Partially update profile",
        request=ProfileUpdateSerializer,
        responses={200: ProfileSerializer},
        tags=["Users"],
    )
    def patch(self, request):
        return self.put(request)
