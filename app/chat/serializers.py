"""
Serializers for chat API.

This module provides DRF serializers for:
- Messages (read, send)
- Conversations (list item with last message and unread count, create)

Related files:
    - models.py: Conversation, Participant, Message
    - views.py: ViewSets that use these serializers
    - broadcast.py: Reuses MessageSerializer for stream frames
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.constants import MESSAGE_CONFIG
from chat.models import Conversation, Message


class MessageSenderSerializer(UserSummarySerializer):
    """Sender fields embedded in each message."""

    class Meta(UserSummarySerializer.Meta):
        fields = ["id", "first_name", "last_name"]
        read_only_fields = fields


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message representation.

    Used for API responses and for NDJSON/WebSocket stream frames.
    """

    conversation_id = serializers.IntegerField(read_only=True)
    sender_id = serializers.IntegerField(read_only=True)
    sender = MessageSenderSerializer(read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "conversation_id",
            "sender_id",
            "sender",
            "content",
            "read",
            "client_id",
            "created_at",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending a message.

    client_id is an opaque correlation id chosen by the client; it is stored
    on the message and echoed back so a pending entry can be confirmed.
    """

    content = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        help_text="Message text",
    )
    client_id = serializers.CharField(
        max_length=MESSAGE_CONFIG.MAX_CLIENT_ID_LENGTH,
        required=False,
        allow_blank=True,
        default="",
        help_text="Client correlation id echoed back in the response and stream",
    )


class ConversationSerializer(serializers.ModelSerializer):
    """
    Conversation as shown in the caller's list.

    unread_count is read from the queryset annotation added by
    ConversationService.list_for_user(); it counts unread messages sent by
    other participants.
    """

    participants = serializers.SerializerMethodField()
    last_message = serializers.SerializerMethodField()
    unread_count = serializers.SerializerMethodField()

    class Meta:
        model = Conversation
        fields = [
            "id",
            "participants",
            "last_message",
            "unread_count",
            "last_message_at",
            "created_at",
        ]
        read_only_fields = fields

    def get_participants(self, obj: Conversation) -> list[dict]:
        users = [p.user for p in obj.participants.all()]
        return UserSummarySerializer(users, many=True).data

    def get_last_message(self, obj: Conversation) -> dict | None:
        """Most recent message, newest first, limited to one."""
        last_message = (
            obj.messages.select_related("sender__profile")
            .order_by("-created_at", "-id")
            .first()
        )
        if last_message:
            return MessageSerializer(last_message).data
        return None

    def get_unread_count(self, obj: Conversation) -> int:
        return getattr(obj, "unread_count", 0)


class ConversationCreateSerializer(serializers.Serializer):
    """
    Serializer for creating conversations.

    The requesting user is always added to participant_ids by the view.
    """

    participant_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        min_length=1,
        help_text="IDs of users to include in the conversation",
    )
