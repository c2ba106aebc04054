"""
ASGI authentication middleware.

Provides JWT authentication for the NDJSON stream and WebSocket connections.
Both run outside Django's request/response cycle, so DRF authentication
never sees them.

Related files:
    - routing.py: Stream and WebSocket URL patterns
    - consumers.py: Stream and WebSocket handlers
    - config/asgi.py: ASGI configuration

Token Passing Methods (in order of precedence):
    1. Auth cookie: Cookie: auth_token=<jwt_token>
    2. Header: Authorization: Bearer <jwt_token>
    3. Query string: ws://host/ws/chat/1/?token=<jwt_token>
    4. Subprotocol: Sec-WebSocket-Protocol: jwt, <jwt_token>

Usage in config/asgi.py:
    from chat.middleware import JWTAuthMiddleware

    application = ProtocolTypeRouter({
        "websocket": JWTAuthMiddleware(
            URLRouter(websocket_urlpatterns)
        ),
    })
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.http.cookie import parse_cookie

from authentication.services import AuthService

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseMiddleware):
    """
    JWT authentication middleware for stream and WebSocket connections.

    Extracts the JWT from the cookie, Authorization header, query string
    or subprotocol, validates it, and attaches the user to the scope. Any
    failure leaves an AnonymousUser; consumers decide how to reject.

    Usage:
        # Client connection with query string
        ws = new WebSocket("ws://host/ws/chat/1/?token=eyJ...")

        # Client connection with subprotocol
        ws = new WebSocket("ws://host/ws/chat/1/", ["jwt", "eyJ..."])
    """

    async def __call__(self, scope, receive, send):
        """
        Authenticate the connection and add the user to scope before
        passing to the inner application.
        """
        scope = dict(scope)
        token = (
            self._get_token_from_cookie(scope)
            or self._get_token_from_header(scope)
            or self._get_token_from_query(scope)
            or self._get_token_from_subprotocol(scope)
        )

        if token:
            scope["user"] = await self._get_user_from_token(token)
        else:
            scope["user"] = AnonymousUser()

        return await super().__call__(scope, receive, send)

    def _get_token_from_cookie(self, scope) -> str | None:
        for name, value in scope.get("headers", []):
            if name == b"cookie":
                cookies = parse_cookie(value.decode("latin1"))
                return cookies.get(settings.AUTH_COOKIE_NAME) or None
        return None

    def _get_token_from_header(self, scope) -> str | None:
        for name, value in scope.get("headers", []):
            if name == b"authorization":
                scheme, _, token = value.decode("latin1").partition(" ")
                if scheme.lower() == "bearer" and token.strip():
                    return token.strip()
        return None

    def _get_token_from_query(self, scope) -> str | None:
        """Extract token from query string."""
        query_string = scope.get("query_string", b"").decode()
        params = parse_qs(query_string)
        token_list = params.get("token", [])

        return token_list[0] if token_list else None

    def _get_token_from_subprotocol(self, scope) -> str | None:
        """
        Extract token from WebSocket subprotocol.

        Expects: Sec-WebSocket-Protocol: jwt, <token>
        """
        subprotocols = scope.get("subprotocols", [])

        if len(subprotocols) >= 2 and subprotocols[0] == "jwt":
            return subprotocols[1]

        return None

    @database_sync_to_async
    def _get_user_from_token(self, token: str):
        """
        Validate JWT token and get user.

        Returns:
            Active User instance if valid, AnonymousUser otherwise
        """
        result = AuthService.get_current_user(token)
        if not result.success:
            logger.warning(f"Rejected connection token: {result.error_code}")
            return AnonymousUser()

        user = result.data
        if not user.is_active:
            logger.warning(f"Inactive user attempted connection: {user.id}")
            return AnonymousUser()

        return user
