"""
ASGI URL routing for the chat application.

This module defines the URL patterns for live connections, mapping paths
to their corresponding consumers.

URL Patterns:
    api/v1/chat/conversations/<conversation_id>/stream/ - NDJSON stream (HTTP)
    ws/chat/<conversation_id>/ - WebSocket for a specific conversation

Authentication:
    Both go through chat.middleware.JWTAuthMiddleware (the stream here, the
    WebSocket router in config/asgi.py).
    It reads the auth cookie, a Bearer header, ?token= or the jwt subprotocol
    and attaches the user to the consumer's scope.
"""

from django.urls import path

from chat import consumers
from chat.middleware import JWTAuthMiddleware

http_urlpatterns = [
    path(
        "api/v1/chat/conversations/<int:conversation_id>/stream/",
        JWTAuthMiddleware(consumers.MessageStreamConsumer.as_asgi()),
    ),
]

websocket_urlpatterns = [
    path(
        "ws/chat/<int:conversation_id>/",
        consumers.ChatConsumer.as_asgi(),
    ),
]
