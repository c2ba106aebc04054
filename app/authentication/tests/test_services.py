"""
Tests for authentication services.

This module tests:
- AuthService: token issue/verify, login, register, current user lookup
- UserService: search, profile update, presence flag

Test Organization:
    - One test class per service method
    - Each test validates ONE specific behavior
    - Tests use descriptive names: test_<scenario>_<expected_outcome>
"""

import pytest
from django.utils import timezone

from authentication.models import Profile, User
from authentication.services import AuthService, UserService
from authentication.services.auth_service import INVALID_CREDENTIALS_MESSAGE
from authentication.tests.factories import UserFactory


# =============================================================================
# AuthService.issue_token / verify_token
# =============================================================================


@pytest.mark.django_db
class TestAuthServiceVerifyToken:
    """Tests for AuthService.verify_token()."""

    def test_valid_token_returns_user_id_and_email(self, user, auth_token):
        """
        A freshly issued token decodes to the user's id and email.

        Why it matters: Every authenticated request relies on these claims.
        """
        result = AuthService.verify_token(auth_token)

        assert result.success
        assert str(result.data["user_id"]) == str(user.id)
        assert result.data["email"] == user.email

    def test_token_expires_after_24_hours(self, auth_token):
        """
        Token lifetime is 24 hours.

        Why it matters: The cookie max-age matches this lifetime, so the
        two must agree.
        """
        result = AuthService.verify_token(auth_token)

        remaining = result.data["exp"] - int(timezone.now().timestamp())
        assert 24 * 3600 - 60 <= remaining <= 24 * 3600

    def test_expired_token_fails(self, expired_token):
        """Expired tokens fail with INVALID_TOKEN."""
        result = AuthService.verify_token(expired_token)

        assert not result.success
        assert result.error_code == "INVALID_TOKEN"

    def test_tampered_token_fails(self, tampered_token):
        """
        A token with a modified signature fails with INVALID_TOKEN.

        Why it matters: Accepting forged tokens would let anyone act as
        any user.
        """
        result = AuthService.verify_token(tampered_token)

        assert not result.success
        assert result.error_code == "INVALID_TOKEN"

    @pytest.mark.parametrize("raw_token", [None, "", "not-a-jwt"])
    def test_missing_or_malformed_token_fails(self, raw_token):
        """Missing and malformed tokens fail without raising."""
        result = AuthService.verify_token(raw_token)

        assert not result.success
        assert result.error_code == "INVALID_TOKEN"


# =============================================================================
# AuthService.login
# =============================================================================


@pytest.mark.django_db
class TestAuthServiceLogin:
    """Tests for AuthService.login()."""

    def test_valid_credentials_return_token_for_user(self, user):
        """
        Correct email and password return the user and a token for them.

        Why it matters: The token's embedded user id must match the
        account that logged in.
        """
        result = AuthService.login("alice@example.com", "TestPass123!")

        assert result.success
        logged_in, token = result.data
        assert logged_in == user
        payload = AuthService.verify_token(token).data
        assert str(payload["user_id"]) == str(user.id)

    def test_email_match_is_case_insensitive(self, user):
        """Email lookup ignores case."""
        result = AuthService.login("ALICE@Example.com", "TestPass123!")

        assert result.success
        assert result.data[0] == user

    def test_wrong_password_fails_with_invalid_credentials(self, user):
        """Wrong password fails with INVALID_CREDENTIALS."""
        result = AuthService.login("alice@example.com", "wrong-password")

        assert not result.success
        assert result.error_code == "INVALID_CREDENTIALS"

    def test_unknown_email_fails_with_same_message(self, user):
        """
        Unknown email fails exactly like a wrong password.

        Why it matters: Different messages would reveal which emails have
        accounts.
        """
        wrong_password = AuthService.login("alice@example.com", "wrong-password")
        unknown_email = AuthService.login("nobody@example.com", "TestPass123!")

        assert unknown_email.error_code == wrong_password.error_code
        assert unknown_email.error == wrong_password.error == INVALID_CREDENTIALS_MESSAGE

    def test_inactive_user_cannot_log_in(self, deactivated_user):
        """Deactivated accounts fail with INVALID_CREDENTIALS."""
        result = AuthService.login(deactivated_user.email, "TestPass123!")

        assert not result.success
        assert result.error_code == "INVALID_CREDENTIALS"

    def test_missing_password_fails(self, user):
        """A missing password is a credential mismatch, not an error."""
        result = AuthService.login("alice@example.com", None)

        assert not result.success
        assert result.error_code == "INVALID_CREDENTIALS"


# =============================================================================
# AuthService.register
# =============================================================================


@pytest.mark.django_db
class TestAuthServiceRegister:
    """Tests for AuthService.register()."""

    def test_creates_user_with_profile_names(self):
        """Registration creates the user and fills the profile names."""
        result = AuthService.register(
            email="new@example.com",
            password="Str0ng-Passw0rd!",
            first_name="New",
            last_name="Person",
        )

        assert result.success
        user, token = result.data
        assert User.objects.filter(email="new@example.com").exists()
        assert user.profile.first_name == "New"
        assert user.profile.last_name == "Person"
        assert user.check_password("Str0ng-Passw0rd!")
        assert AuthService.verify_token(token).success

    def test_duplicate_email_fails(self, user):
        """An existing email (any case) fails with EMAIL_EXISTS."""
        result = AuthService.register(email="ALICE@example.com", password="Str0ng-Passw0rd!")

        assert not result.success
        assert result.error_code == "EMAIL_EXISTS"

    def test_weak_password_fails_with_field_errors(self):
        """Passwords rejected by the validators return field errors."""
        result = AuthService.register(email="new@example.com", password="123")

        assert not result.success
        assert result.error_code == "VALIDATION_ERROR"
        assert "password" in result.errors
        assert not User.objects.filter(email="new@example.com").exists()

    @pytest.mark.parametrize("email", [None, "", "   "])
    def test_missing_email_fails_with_missing_parameter(self, email):
        """A missing or blank email fails with MISSING_PARAMETER, never raises."""
        result = AuthService.register(email=email, password="Str0ng-Passw0rd!")

        assert not result.success
        assert result.error_code == "MISSING_PARAMETER"
        assert "email" in result.errors


# =============================================================================
# AuthService.get_current_user
# =============================================================================


@pytest.mark.django_db
class TestAuthServiceGetCurrentUser:
    """Tests for AuthService.get_current_user()."""

    def test_returns_user_for_valid_token(self, user, auth_token):
        result = AuthService.get_current_user(auth_token)

        assert result.success
        assert result.data == user

    def test_deleted_user_fails_with_user_not_found(self, user, auth_token):
        """
        A valid token for a deleted user fails with USER_NOT_FOUND.

        Why it matters: This maps to 404, distinct from a bad token (401).
        """
        user.delete()

        result = AuthService.get_current_user(auth_token)

        assert not result.success
        assert result.error_code == "USER_NOT_FOUND"

    def test_deactivated_user_fails_with_user_not_found(self, user, auth_token):
        """
        A valid token for a deactivated user is treated like a deleted user.

        Why it matters: login refuses inactive accounts, so a token issued
        before deactivation must not keep the session alive.
        """
        user.is_active = False
        user.save(update_fields=["is_active"])

        result = AuthService.get_current_user(auth_token)

        assert not result.success
        assert result.error_code == "USER_NOT_FOUND"

    def test_invalid_token_fails_with_invalid_token(self, tampered_token):
        result = AuthService.get_current_user(tampered_token)

        assert not result.success
        assert result.error_code == "INVALID_TOKEN"


# =============================================================================
# UserService.search
# =============================================================================


@pytest.mark.django_db
class TestUserServiceSearch:
    """Tests for UserService.search()."""

    def test_matches_first_name_case_insensitively(self, user, other_user):
        result = UserService.search("bOb", user)

        assert result.success
        assert list(result.data) == [other_user]

    def test_matches_last_name_and_email(self, user, other_user):
        by_last_name = UserService.search("jones", user)
        by_email = UserService.search("bob@exa", user)

        assert list(by_last_name.data) == [other_user]
        assert list(by_email.data) == [other_user]

    def test_excludes_the_caller(self, user, other_user):
        """
        The searching user never appears in their own results.

        Why it matters: Users search for someone to start a conversation
        with; themselves is never a valid choice.
        """
        result = UserService.search("example.com", user)

        assert user not in result.data
        assert other_user in result.data

    def test_excludes_inactive_users(self, user, deactivated_user):
        result = UserService.search("Dora", user)

        assert list(result.data) == []

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_blank_query_fails_with_missing_parameter(self, user, query):
        result = UserService.search(query, user)

        assert not result.success
        assert result.error_code == "MISSING_PARAMETER"

    def test_results_are_limited(self, user):
        UserFactory.create_batch(25, first_name="Many")

        result = UserService.search("Many", user)

        assert len(result.data) == 20


# =============================================================================
# UserService.update_profile / set_online
# =============================================================================


@pytest.mark.django_db
class TestUserServiceUpdateProfile:
    """Tests for UserService.update_profile()."""

    def test_updates_given_fields_and_stamps_last_seen(self, user):
        before = timezone.now()

        result = UserService.update_profile(
            user,
            status="Busy",
            profile_picture="https://example.com/a.png",
        )

        assert result.success
        profile = Profile.objects.get(user=user)
        assert profile.status == "Busy"
        assert profile.profile_picture == "https://example.com/a.png"
        assert profile.last_seen >= before

    def test_fields_passed_as_none_are_unchanged(self, user):
        UserService.update_profile(user, status="Away")

        profile = Profile.objects.get(user=user)
        assert profile.first_name == "Alice"
        assert profile.last_name == "Smith"
        assert profile.status == "Away"

    def test_creates_missing_profile(self, user):
        Profile.objects.filter(user=user).delete()

        result = UserService.update_profile(user, status="Back")

        assert result.success
        assert Profile.objects.get(user=user).status == "Back"


@pytest.mark.django_db
class TestUserServiceSetOnline:
    """Tests for UserService.set_online()."""

    def test_sets_online_and_offline(self, user):
        UserService.set_online(user.id, True)
        assert Profile.objects.get(user=user).is_online is True

        UserService.set_online(user.id, False)
        profile = Profile.objects.get(user=user)
        assert profile.is_online is False
        assert profile.last_seen is not None

    def test_returns_zero_for_user_without_profile(self, user):
        Profile.objects.filter(user=user).delete()

        assert UserService.set_online(user.id, True) == 0
