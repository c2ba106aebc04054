"""
Live consumers for the chat application.

This module implements the two subscribers of a conversation's channel
group. Both are fed by chat.broadcast after message writes commit.

Consumers:
    MessageStreamConsumer: Long-lived HTTP response streaming NDJSON frames
    ChatConsumer: WebSocket connection that can also send messages

Authentication:
    chat.middleware.JWTAuthMiddleware attaches the user to scope["user"]
    from the auth cookie, a Bearer Authorization header, the ?token= query
    parameter or the "jwt, <token>" subprotocol.

Channel Groups:
    Each conversation has a channel group named "chat_{conversation_id}".
    Connected subscribers join the group and receive broadcast events.

Stream frames (one JSON document per line):
    {"type": "initial", "messages": [...]}   every message, oldest first
    {"type": "update", "messages": [message]} a newly sent message
    {"type": "read", "reader_id": 1, "message_ids": [...]}

Message Types (from WebSocket client):
    - message: Send a new message, optionally with client_id
    - read: Mark the conversation read
    - typing: Broadcast typing indicator

Message Types (to WebSocket client):
    - message: New message in conversation
    - ack: The caller's own message was stored (echoes client_id)
    - read: Messages were read
    - typing: User is typing
    - error: Error response (echoes client_id when there was one)
"""

from __future__ import annotations

import json
import logging

from channels.consumer import AsyncConsumer
from channels.db import database_sync_to_async
from channels.exceptions import StopConsumer
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.core.serializers.json import DjangoJSONEncoder

from authentication.services import UserService
from chat.broadcast import serialize_message
from chat.constants import MESSAGE_CONFIG, STREAM_CONFIG, group_name_for
from chat.models import Conversation, Message, Participant
from chat.services import MessageService
from core.exceptions import AuthenticationFailedError, NotFoundError

logger = logging.getLogger(__name__)


def _is_authenticated(user) -> bool:
    return bool(user is not None and getattr(user, "is_authenticated", False))


class MessageStreamConsumer(AsyncConsumer):
    """
    NDJSON message stream for one conversation.

    The response starts when the request body is complete and stays open
    until the client disconnects. Frames are written from channel layer
    events, so there is no polling and no timer to cancel.

    The group is joined before the initial batch is queried. A message
    committed in between can therefore arrive both in the batch and as an
    event; delivered_ids drops the second copy.

    Attributes:
        conversation_id: Conversation being streamed
        group_name: Channel layer group (set once the stream is open)
        delivered_ids: Ids of messages already written to this stream
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.conversation_id: int | None = None
        self.group_name: str | None = None
        self.delivered_ids: set[int] = set()

    async def http_request(self, message):
        """Validate the caller, then open the stream with the initial frame."""
        if message.get("more_body"):
            return

        self.conversation_id = self.scope["url_route"]["kwargs"]["conversation_id"]
        user = self.scope.get("user")

        if not _is_authenticated(user):
            logger.warning(
                f"Rejected unauthenticated stream for conversation {self.conversation_id}"
            )
            await self._send_error(
                AuthenticationFailedError("Authentication credentials were not provided.")
            )
            raise StopConsumer()

        if not await self._is_user_participant(user):
            logger.warning(
                f"User {user.id} is not a participant in "
                f"conversation {self.conversation_id}"
            )
            await self._send_error(
                NotFoundError("Conversation not found", error_code="CONVERSATION_NOT_FOUND")
            )
            raise StopConsumer()

        self.group_name = group_name_for(self.conversation_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)

        await self.send(
            {
                "type": "http.response.start",
                "status": 200,
                "headers": [
                    (b"Content-Type", STREAM_CONFIG.CONTENT_TYPE),
                    (b"Cache-Control", b"no-cache"),
                    (b"X-Accel-Buffering", b"no"),
                ],
            }
        )

        messages = await self._get_messages()
        self.delivered_ids.update(m["id"] for m in messages)
        await self._send_frame({"type": STREAM_CONFIG.FRAME_INITIAL, "messages": messages})

        await self._set_online(user, True)
        logger.info(f"User {user.id} opened stream for conversation {self.conversation_id}")

    async def http_disconnect(self, message):
        """Leave the group and mark the user offline."""
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)
            user = self.scope.get("user")
            await self._set_online(user, False)
            logger.info(
                f"User {user.id} closed stream for conversation {self.conversation_id}"
            )
        raise StopConsumer()

    async def message_created(self, event):
        """Write a message.created event as an update frame, once per message."""
        if not self.group_name:
            return

        message = event["message"]
        if message["id"] in self.delivered_ids:
            return
        self.delivered_ids.add(message["id"])

        await self._send_frame({"type": STREAM_CONFIG.FRAME_UPDATE, "messages": [message]})

    async def messages_read(self, event):
        if not self.group_name:
            return

        await self._send_frame(
            {
                "type": STREAM_CONFIG.FRAME_READ,
                "reader_id": event["reader_id"],
                "message_ids": event["message_ids"],
            }
        )

    async def chat_typing(self, event):
        """Typing indicators are WebSocket-only."""

    async def _send_frame(self, frame: dict):
        body = json.dumps(frame, cls=DjangoJSONEncoder).encode("utf-8") + b"\n"
        await self.send({"type": "http.response.body", "body": body, "more_body": True})

    async def _send_error(self, exc):
        await self.send(
            {
                "type": "http.response.start",
                "status": exc.status_code,
                "headers": [(b"Content-Type", b"application/json")],
            }
        )
        await self.send(
            {
                "type": "http.response.body",
                "body": json.dumps(exc.to_dict()).encode("utf-8"),
            }
        )

    @database_sync_to_async
    def _is_user_participant(self, user) -> bool:
        return Participant.objects.filter(
            conversation_id=self.conversation_id,
            user_id=user.id,
        ).exists()

    @database_sync_to_async
    def _get_messages(self) -> list[dict]:
        """Every message in the conversation, oldest first."""
        messages = (
            Message.objects.filter(conversation_id=self.conversation_id)
            .select_related("sender__profile")
            .order_by("created_at", "id")
        )
        return [serialize_message(m) for m in messages]

    @database_sync_to_async
    def _set_online(self, user, is_online: bool) -> None:
        UserService.set_online(user.id, is_online)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer for real-time chat functionality.

    Handles:
        - Connection authentication and authorization
        - Joining/leaving conversation channel groups
        - Sending messages with client_id acknowledgement
        - Typing indicators
        - Read receipts

    Attributes:
        conversation_id: ID of the connected conversation
        room_group_name: Channel layer group name for the conversation
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.conversation_id: int | None = None
        self.room_group_name: str | None = None

    async def connect(self):
        """
        Handle WebSocket connection.

        Validates:
            1. User is authenticated
            2. Conversation exists
            3. User is a participant in the conversation

        On success, joins the channel group and accepts the connection.
        """
        self.conversation_id = self.scope["url_route"]["kwargs"]["conversation_id"]
        user = self.scope.get("user")

        if not _is_authenticated(user):
            logger.warning(
                f"Rejected unauthenticated connection to conversation {self.conversation_id}"
            )
            await self.close(code=STREAM_CONFIG.CLOSE_UNAUTHENTICATED)
            return

        if not await self._conversation_exists():
            logger.warning(
                f"User {user.id} tried to connect to non-existent "
                f"conversation {self.conversation_id}"
            )
            await self.close(code=STREAM_CONFIG.CLOSE_NOT_FOUND)
            return

        if not await self._is_user_participant(user):
            logger.warning(
                f"User {user.id} is not a participant in "
                f"conversation {self.conversation_id}"
            )
            await self.close(code=STREAM_CONFIG.CLOSE_FORBIDDEN)
            return

        self.room_group_name = group_name_for(self.conversation_id)
        await self.channel_layer.group_add(self.room_group_name, self.channel_name)

        # Echo the jwt subprotocol back or browsers drop the connection
        subprotocols = self.scope.get("subprotocols") or []
        await self.accept(subprotocol="jwt" if subprotocols[:1] == ["jwt"] else None)

        await self._set_online(user, True)
        logger.info(f"User {user.id} connected to conversation {self.conversation_id}")

    async def disconnect(self, close_code):
        """
        Handle WebSocket disconnection.

        Leaves the channel group if one was joined.
        """
        if self.room_group_name:
            await self.channel_layer.group_discard(
                self.room_group_name,
                self.channel_name,
            )
            user = self.scope["user"]
            await self._set_online(user, False)
            logger.info(
                f"User {user.id} disconnected from conversation {self.conversation_id}"
            )

    async def receive_json(self, content):
        """
        Handle incoming WebSocket messages.

        Expected message format:
            {"type": "message", "content": "Hello!", "client_id": "tmp-1"}
            {"type": "read"}
            {"type": "typing", "is_typing": true}

        Args:
            content: Parsed JSON message from client
        """
        if not isinstance(content, dict):
            await self.send_json({"type": "error", "message": "Expected a JSON object"})
            return

        message_type = content.get("type")
        user = self.scope["user"]

        if message_type == "message":
            await self._handle_message(user, content)
        elif message_type == "read":
            await self._handle_read(user)
        elif message_type == "typing":
            await self._handle_typing(user, content)
        else:
            await self.send_json(
                {
                    "type": "error",
                    "message": f"Unknown message type: {message_type}",
                }
            )

    async def _handle_message(self, user, content):
        """
        Store a message and acknowledge it to this socket.

        The group broadcast happens in MessageService once the write commits.
        """
        client_id = str(content.get("client_id") or "")[: MESSAGE_CONFIG.MAX_CLIENT_ID_LENGTH]
        result = await self._send_message(
            user=user,
            content=str(content.get("content") or ""),
            client_id=client_id,
        )

        if not result["success"]:
            await self.send_json(
                {
                    "type": "error",
                    "client_id": client_id,
                    "message": result["error"],
                }
            )
            return

        await self.send_json(
            {
                "type": "ack",
                "client_id": client_id,
                "message": result["data"],
            }
        )

    async def _handle_read(self, user):
        result = await self._mark_read(user)
        if not result["success"]:
            await self.send_json({"type": "error", "message": result["error"]})

    async def _handle_typing(self, user, content):
        """
        Handle typing indicator.

        Broadcasts typing status to all other participants.
        """
        is_typing = bool(content.get("is_typing", False))

        await self.channel_layer.group_send(
            self.room_group_name,
            {
                "type": STREAM_CONFIG.EVENT_TYPING,
                "user_id": user.id,
                "is_typing": is_typing,
            },
        )

    async def message_created(self, event):
        """
        Handle message.created events from channel layer.

        Sends the message to the WebSocket client.
        """
        await self.send_json(
            {
                "type": "message",
                "message": event["message"],
            }
        )

    async def messages_read(self, event):
        await self.send_json(
            {
                "type": "read",
                "reader_id": event["reader_id"],
                "message_ids": event["message_ids"],
            }
        )

    async def chat_typing(self, event):
        """
        Handle chat.typing events from channel layer.

        Sends typing indicator to the WebSocket client (except sender).
        """
        user = self.scope.get("user")
        if user and user.id == event["user_id"]:
            return

        await self.send_json(
            {
                "type": "typing",
                "user_id": event["user_id"],
                "is_typing": event["is_typing"],
            }
        )

    @database_sync_to_async
    def _conversation_exists(self) -> bool:
        return Conversation.objects.filter(id=self.conversation_id).exists()

    @database_sync_to_async
    def _is_user_participant(self, user) -> bool:
        """Check if user is a participant in the conversation."""
        return Participant.objects.filter(
            conversation_id=self.conversation_id,
            user_id=user.id,
        ).exists()

    @database_sync_to_async
    def _set_online(self, user, is_online: bool) -> None:
        UserService.set_online(user.id, is_online)

    @database_sync_to_async
    def _send_message(self, user, content: str, client_id: str) -> dict:
        """
        Send a message using MessageService.

        Returns dict with success status and either data or error.
        """
        result = MessageService.send_message(
            conversation_id=self.conversation_id,
            sender=user,
            content=content,
            client_id=client_id,
        )

        if result.success:
            return {"success": True, "data": serialize_message(result.data)}
        return {"success": False, "error": result.error}

    @database_sync_to_async
    def _mark_read(self, user) -> dict:
        result = MessageService.mark_as_read(self.conversation_id, user)
        if result.success:
            return {"success": True, "data": result.data}
        return {"success": False, "error": result.error}
