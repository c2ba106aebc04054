"""
Tests for authentication API views.

This module tests the authentication endpoints:
- LoginView / RegisterView: Credentials in, auth cookie out
- LogoutView: Cookie cleared
- CurrentUserView: Cookie in, user out (401 vs 404 distinction)
- UserSearchView: Directory search
- ProfileView: Profile read/update

Testing Philosophy:
    Tests focus on observable HTTP behavior, not implementation details:
    - Response status codes
    - Response body structure and content
    - Cookie attributes
    - Database state changes

Dependencies:
    - pytest and pytest-django for test framework
    - rest_framework.test.APIClient for HTTP requests
    - Factory Boy fixtures from conftest.py
"""

import pytest
from django.conf import settings
from rest_framework import status

from authentication.models import Profile


# =============================================================================
# URL Constants
# =============================================================================


LOGIN_URL = "/api/v1/auth/login/"
REGISTER_URL = "/api/v1/auth/register/"
LOGOUT_URL = "/api/v1/auth/logout/"
ME_URL = "/api/v1/auth/me/"
SEARCH_URL = "/api/v1/users/search/"
PROFILE_URL = "/api/v1/users/profile/"


# =============================================================================
# TestLoginView
# =============================================================================


@pytest.mark.django_db
class TestLoginView:
    """
    Tests for LoginView.

    POST /api/v1/auth/login/
    """

    def test_login_sets_auth_cookie(self, api_client, user):
        """
        Successful login sets an HttpOnly, SameSite=Strict auth cookie.

        Why it matters: The cookie is the only session credential; script
        access or cross-site sending would expose it.
        """
        response = api_client.post(
            LOGIN_URL,
            {"email": "alice@example.com", "password": "TestPass123!"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        cookie = response.cookies[settings.AUTH_COOKIE_NAME]
        assert cookie.value
        assert cookie["httponly"] is True
        assert cookie["samesite"] == "Strict"
        assert cookie["max-age"] == 86400
        assert cookie["path"] == "/"

    def test_login_returns_user(self, api_client, user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "alice@example.com", "password": "TestPass123!"},
            format="json",
        )

        assert response.data["id"] == user.id
        assert response.data["email"] == "alice@example.com"
        assert response.data["first_name"] == "Alice"
        assert response.data["active"] is True

    def test_cookie_is_secure_when_configured(self, api_client, user, settings):
        settings.AUTH_COOKIE_SECURE = True

        response = api_client.post(
            LOGIN_URL,
            {"email": "alice@example.com", "password": "TestPass123!"},
            format="json",
        )

        assert response.cookies[settings.AUTH_COOKIE_NAME]["secure"] is True

    def test_wrong_password_returns_401(self, api_client, user):
        response = api_client.post(
            LOGIN_URL,
            {"email": "alice@example.com", "password": "nope"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["error_code"] == "INVALID_CREDENTIALS"
        assert settings.AUTH_COOKIE_NAME not in response.cookies

    def test_unknown_email_returns_identical_body(self, api_client, user):
        """
        Unknown email and wrong password produce the same response.

        Why it matters: Login must not reveal whether an email is registered.
        """
        wrong_password = api_client.post(
            LOGIN_URL,
            {"email": "alice@example.com", "password": "nope"},
            format="json",
        )
        unknown_email = api_client.post(
            LOGIN_URL,
            {"email": "ghost@example.com", "password": "nope"},
            format="json",
        )

        assert unknown_email.status_code == wrong_password.status_code
        assert unknown_email.data == wrong_password.data

    def test_missing_fields_return_400(self, api_client):
        response = api_client.post(LOGIN_URL, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "email" in response.data["details"]


# =============================================================================
# TestRegisterView
# =============================================================================


@pytest.mark.django_db
class TestRegisterView:
    """
    Tests for RegisterView.

    POST /api/v1/auth/register/
    """

    def test_register_creates_account_and_sets_cookie(self, api_client):
        response = api_client.post(
            REGISTER_URL,
            {
                "email": "carol@example.com",
                "password": "Str0ng-Passw0rd!",
                "first_name": "Carol",
                "last_name": "White",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["first_name"] == "Carol"
        assert settings.AUTH_COOKIE_NAME in response.cookies

    def test_duplicate_email_returns_409(self, api_client, user):
        response = api_client.post(
            REGISTER_URL,
            {"email": "alice@example.com", "password": "Str0ng-Passw0rd!"},
            format="json",
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "EMAIL_EXISTS"

    def test_weak_password_returns_400(self, api_client):
        response = api_client.post(
            REGISTER_URL,
            {"email": "carol@example.com", "password": "123"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "password" in response.data["details"]


# =============================================================================
# TestLogoutView
# =============================================================================


@pytest.mark.django_db
class TestLogoutView:
    """
    Tests for LogoutView.

    POST /api/v1/auth/logout/
    """

    def test_logout_expires_cookie(self, authenticated_client):
        response = authenticated_client.post(LOGOUT_URL)

        assert response.status_code == status.HTTP_200_OK
        cookie = response.cookies[settings.AUTH_COOKIE_NAME]
        assert cookie.value == ""
        assert cookie["max-age"] == 0

    def test_logout_succeeds_without_cookie(self, api_client):
        response = api_client.post(LOGOUT_URL)

        assert response.status_code == status.HTTP_200_OK


# =============================================================================
# TestCurrentUserView
# =============================================================================


@pytest.mark.django_db
class TestCurrentUserView:
    """
    Tests for CurrentUserView.

    GET /api/v1/auth/me/
    """

    def test_returns_user_from_cookie(self, authenticated_client, user):
        response = authenticated_client.get(ME_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.id
        assert response.data["email"] == user.email
        assert response.data["status"] == "offline"

    def test_missing_cookie_returns_401(self, api_client):
        response = api_client.get(ME_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["error_code"] == "INVALID_TOKEN"

    def test_expired_token_returns_401(self, api_client, expired_token):
        """
        An expired token yields 401, never 200.

        Why it matters: Tokens must stop working after 24 hours.
        """
        api_client.cookies[settings.AUTH_COOKIE_NAME] = expired_token

        response = api_client.get(ME_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_tampered_token_returns_401(self, api_client, tampered_token):
        api_client.cookies[settings.AUTH_COOKIE_NAME] = tampered_token

        response = api_client.get(ME_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_deleted_user_returns_404(self, authenticated_client, user):
        user.delete()

        response = authenticated_client.get(ME_URL)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"

    def test_deactivated_user_returns_404(self, authenticated_client, user):
        user.is_active = False
        user.save(update_fields=["is_active"])

        response = authenticated_client.get(ME_URL)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"


# =============================================================================
# TestUserSearchView
# =============================================================================


@pytest.mark.django_db
class TestUserSearchView:
    """
    Tests for UserSearchView.

    GET /api/v1/users/search/?q=
    """

    def test_returns_matching_users(self, authenticated_client, other_user):
        response = authenticated_client.get(SEARCH_URL, {"q": "bob"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == [
            {
                "id": other_user.id,
                "first_name": "Bob",
                "last_name": "Jones",
                "email": "bob@example.com",
            }
        ]

    def test_missing_query_returns_400(self, authenticated_client):
        response = authenticated_client.get(SEARCH_URL)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "MISSING_PARAMETER"

    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get(SEARCH_URL, {"q": "bob"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_bearer_header_is_accepted(self, api_client, auth_token, other_user):
        """API clients may send the same token as a Bearer header."""
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {auth_token}")

        response = api_client.get(SEARCH_URL, {"q": "bob"})

        assert response.status_code == status.HTTP_200_OK


# =============================================================================
# TestProfileView
# =============================================================================


@pytest.mark.django_db
class TestProfileView:
    """
    Tests for ProfileView.

    GET/PUT/PATCH /api/v1/users/profile/
    """

    def test_get_returns_profile(self, authenticated_client, user):
        response = authenticated_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.id
        assert response.data["first_name"] == "Alice"
        assert response.data["is_online"] is False

    def test_get_creates_profile_if_missing(self, authenticated_client, user):
        Profile.objects.filter(user=user).delete()

        response = authenticated_client.get(PROFILE_URL)

        assert response.status_code == status.HTTP_200_OK
        assert Profile.objects.filter(user=user).exists()

    def test_put_updates_status_and_picture(self, authenticated_client, user):
        response = authenticated_client.put(
            PROFILE_URL,
            {"status": "In a meeting", "profile_picture": "https://example.com/me.png"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["status"] == "In a meeting"
        assert response.data["last_seen"] is not None
        profile = Profile.objects.get(user=user)
        assert profile.profile_picture == "https://example.com/me.png"

    def test_patch_updates_single_field(self, authenticated_client, user):
        response = authenticated_client.patch(
            PROFILE_URL, {"first_name": "Alicia"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["first_name"] == "Alicia"
        assert response.data["last_name"] == "Smith"

    def test_invalid_picture_url_returns_400(self, authenticated_client):
        response = authenticated_client.put(
            PROFILE_URL, {"profile_picture": "not a url"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.put(PROFILE_URL, {"status": "x"}, format="json")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
