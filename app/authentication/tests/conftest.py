"""
Test configuration and fixtures for authentication tests.

This module provides:
- Reusable fixtures for common test scenarios
- API client helpers for cookie and bearer authenticated requests
- Token fixtures (valid, expired, tampered)

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get('/api/v1/auth/me/')
        assert response.status_code == 200
"""

from datetime import timedelta

import pytest
from django.conf import settings
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User
from authentication.services import AuthService
from authentication.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create an active user named Alice Smith."""
    return UserFactory(
        email="alice@example.com",
        first_name="Alice",
        last_name="Smith",
    )


@pytest.fixture
def other_user(db):
    """Create a second active user named Bob Jones."""
    return UserFactory(
        email="bob@example.com",
        first_name="Bob",
        last_name="Jones",
    )


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False, first_name="Dora", last_name="Gone")


# =============================================================================
# Token Fixtures
# =============================================================================


@pytest.fixture
def auth_token(user):
    """Valid session token for the default user."""
    return AuthService.issue_token(user)


@pytest.fixture
def expired_token(user):
    """Correctly signed token whose expiry is in the past."""
    token = AccessToken.for_user(user)
    token["email"] = user.email
    token.set_exp(lifetime=-timedelta(seconds=1))
    return str(token)


@pytest.fixture
def tampered_token(auth_token):
    """Valid token with its signature altered."""
    header, payload, signature = auth_token.split(".")
    flipped = "A" if signature[0] != "A" else "B"
    return f"{header}.{payload}.{flipped}{signature[1:]}"


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client(auth_token):
    """
    API client carrying the auth cookie for the default user fixture.

    Use this for tests that need a logged-in user.
    """
    client = APIClient()
    client.cookies[settings.AUTH_COOKIE_NAME] = auth_token
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create cookie-authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, other_user):
            client = authenticated_client_factory(other_user)
            response = client.get('/api/v1/users/profile/')
    """

    def _make_client(user):
        client = APIClient()
        client.cookies[settings.AUTH_COOKIE_NAME] = AuthService.issue_token(user)
        return client

    return _make_client
