"""
Chat system models.

Models:
    Conversation: Container for messages between participants
    Participant: One user's membership in a conversation
    Message: Individual message within a conversation

Design Decisions:
    - A conversation lives only as long as it has participants; removing the
      last Participant deletes the Conversation and cascades to its Messages
    - Leaving deletes the Participant row for that user only
    - Message.read flips from False to True once and never back
    - Message.client_id carries the sender's correlation id so a pending
      client-side entry can be confirmed from the API response or stream
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from chat.constants import group_name_for
from core.models import BaseModel


class Conversation(BaseModel):
    """
    A conversation between two or more users.

    Fields:
        last_message_at: Timestamp of most recent message (for sorting)

    Relationships:
        participants: Participant records for this conversation
        messages: Message records for this conversation
    """

    last_message_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Timestamp of most recent message (for sorting conversation lists)",
    )

    class Meta:
        db_table = "chat_conversation"
        ordering = ["-last_message_at", "-created_at"]

    def __str__(self) -> str:
        return f"Conversation {self.pk}"

    @property
    def group_name(self) -> str:
        """Channel layer group that receives this conversation's events."""
        return group_name_for(self.pk)

    def has_participant(self, user_id: int) -> bool:
        return self.participants.filter(user_id=user_id).exists()


class Participant(BaseModel):
    """
    Links one user to one conversation.

    Fields:
        conversation: The conversation
        user: The participating user
        joined_at: When the user was added
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="participants",
        help_text="Conversation this participation belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_participations",
        help_text="Participating user",
    )

    joined_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user joined the conversation",
    )

    class Meta:
        db_table = "chat_participant"
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["conversation", "user"],
                name="chat_participant_unique_user",
            ),
        ]
        indexes = [
            models.Index(
                fields=["user", "conversation"],
                name="chat_part_user_conv_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"User {self.user_id} in conversation {self.conversation_id}"


class Message(BaseModel):
    """
    A message within a conversation.

    Fields:
        conversation: Parent conversation
        sender: User who sent the message
        content: Message text
        read: Whether a recipient has read the message
        client_id: Sender-supplied correlation id (empty if none)

    Ordering:
        Oldest first by (created_at, id), the order clients render.
    """

    conversation = models.ForeignKey(
        Conversation,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Conversation this message belongs to",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    content = models.TextField(
        help_text="Message text",
    )

    read = models.BooleanField(
        default=False,
        help_text="Whether the message has been read by its recipient",
    )

    client_id = models.CharField(
        max_length=64,
        blank=True,
        default="",
        help_text="Client correlation id echoed back on send and in stream frames",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["conversation", "created_at"],
                name="chat_msg_conv_created_idx",
            ),
            models.Index(
                fields=["conversation", "read"],
                name="chat_msg_conv_read_idx",
            ),
        ]

    def __str__(self) -> str:
        return f"Message {self.pk} from {self.sender_id}"

    @property
    def content_preview(self) -> str:
        """First 50 characters of the content."""
        if len(self.content) > 50:
            return self.content[:50] + "..."
        return self.content
