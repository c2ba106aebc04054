"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Conversation, Participant, Message model tests
- test_services.py: ConversationService and MessageService tests
- test_broadcast.py: Channel layer fan-out tests
- test_consumers.py: NDJSON stream, WebSocket and ASGI auth middleware tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_consumers.py
"""
