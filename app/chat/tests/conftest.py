"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures for the two sides of a conversation and an outsider
- Conversation and message fixtures
- Cookie-authenticated API clients
- A clean in-memory channel layer per test

Usage:
    def test_example(conversation, alice_client):
        response = alice_client.get(f'/api/v1/chat/conversations/{conversation.id}/')
        assert response.status_code == 200
"""

import pytest
from channels.layers import channel_layers, get_channel_layer
from django.conf import settings
from rest_framework.test import APIClient

from authentication.services import AuthService
from authentication.tests.factories import UserFactory
from chat.tests.factories import ConversationFactory, MessageFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def alice(db):
    """First participant."""
    return UserFactory(email="alice@example.com", first_name="Alice", last_name="Smith")


@pytest.fixture
def bob(db):
    """Second participant."""
    return UserFactory(email="bob@example.com", first_name="Bob", last_name="Jones")


@pytest.fixture
def outsider(db):
    """A user who is not a participant in any test conversation."""
    return UserFactory(email="eve@example.com", first_name="Eve", last_name="Adams")


# =============================================================================
# Conversation Fixtures
# =============================================================================


@pytest.fixture
def conversation(db, alice, bob):
    """A conversation between alice and bob with no messages."""
    return ConversationFactory(participants=[alice, bob])


@pytest.fixture
def message_from_bob(conversation, bob):
    """An unread message from bob to alice."""
    return MessageFactory(conversation=conversation, sender=bob, content="hi")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


def _cookie_client(user):
    client = APIClient()
    client.cookies[settings.AUTH_COOKIE_NAME] = AuthService.issue_token(user)
    return client


@pytest.fixture
def alice_client(alice):
    """API client authenticated as alice via the auth cookie."""
    return _cookie_client(alice)


@pytest.fixture
def bob_client(bob):
    """API client authenticated as bob via the auth cookie."""
    return _cookie_client(bob)


@pytest.fixture
def outsider_client(outsider):
    """API client authenticated as a non-participant."""
    return _cookie_client(outsider)


# =============================================================================
# Channel Layer
# =============================================================================


@pytest.fixture
def channel_layer():
    """
    The default channel layer, emptied before and after the test.

    Settings force InMemoryChannelLayer in tests, so groups and queued
    events would otherwise leak between tests.
    """
    channel_layers.backends.clear()
    yield get_channel_layer()
    channel_layers.backends.clear()
