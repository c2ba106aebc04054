"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on conversations and messages.

Services:
    ConversationService: Conversation lifecycle (create, list, delete-for-me)
    MessageService: Message operations (send, mark as read, list)

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Writes that span rows run in one transaction
    - Live events are published only after the transaction commits

Usage:
    from chat.services import ConversationService, MessageService

    # Create a conversation between two users
    result = ConversationService.create([alice.id, bob.id])
    if result.success:
        conversation = result.data

    # Send a message
    result = MessageService.send_message(
        conversation_id=conversation.id,
        sender=bob,
        content="hi",
        client_id="tmp-1",
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q

from chat import broadcast
from chat.constants import MESSAGE_CONFIG
from chat.models import Conversation, Message, Participant
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User


class ConversationService(BaseService):
    """
    Service for conversation lifecycle operations.

    Methods:
        create: Create a conversation with its participants
        list_for_user: Conversations of a user with unread counts
        get_for_user: One conversation, participants only
        delete_for_user: Leave a conversation, deleting it when empty
    """

    @classmethod
    def _annotated_queryset(cls, user_id: int) -> QuerySet:
        """Conversations annotated with unread_count for user_id."""
        return Conversation.objects.annotate(
            unread_count=Count(
                "messages",
                filter=Q(messages__read=False) & ~Q(messages__sender_id=user_id),
                distinct=True,
            )
        ).prefetch_related("participants__user__profile")

    @classmethod
    def create(cls, participant_ids) -> ServiceResult[Conversation]:
        """
        Create a conversation with one participant per distinct user id.

        Args:
            participant_ids: Iterable of user ids (duplicates are collapsed)

        Returns:
            ServiceResult with the new Conversation

        Error codes:
            MISSING_PARAMETER: Fewer than two distinct user ids
            USER_NOT_FOUND: One or more ids do not match an active user
        """
        user_ids = sorted({int(pk) for pk in participant_ids or [] if pk is not None})
        if len(user_ids) < 2:
            return ServiceResult.failure(
                "At least two participants are required",
                error_code="MISSING_PARAMETER",
                errors={"participant_ids": ["At least two distinct user ids are required."]},
            )

        UserModel = get_user_model()
        found_ids = set(
            UserModel.objects.filter(id__in=user_ids, is_active=True).values_list(
                "id", flat=True
            )
        )
        unknown_ids = [pk for pk in user_ids if pk not in found_ids]
        if unknown_ids:
            return ServiceResult.failure(
                "User not found",
                error_code="USER_NOT_FOUND",
                errors={"participant_ids": [f"Unknown user id: {pk}" for pk in unknown_ids]},
            )

        with cls.atomic():
            conversation = Conversation.objects.create()
            Participant.objects.bulk_create(
                [Participant(conversation=conversation, user_id=pk) for pk in user_ids]
            )

        cls.get_logger().info(
            f"Created conversation {conversation.id} for users {user_ids}"
        )
        return ServiceResult.success(conversation)

    @classmethod
    def list_for_user(cls, user_id: int) -> QuerySet:
        """
        Every conversation the user participates in.

        Each row carries an unread_count annotation recomputed on every call.
        Newest activity first: last message time, then creation time.
        """
        return (
            cls._annotated_queryset(user_id)
            .filter(participants__user_id=user_id)
            .order_by("-last_message_at", "-created_at", "-id")
        )

    @classmethod
    def get_for_user(cls, conversation_id, user_id: int) -> ServiceResult[Conversation]:
        """
        Fetch one conversation the user participates in.

        Error codes:
            MISSING_PARAMETER: conversation_id absent
            CONVERSATION_NOT_FOUND: Unknown id, or the user is not a participant
        """
        missing = cls.validate_required(conversation_id=conversation_id)
        if missing is not None:
            return missing

        conversation = (
            cls._annotated_queryset(user_id)
            .filter(id=conversation_id, participants__user_id=user_id)
            .first()
        )
        if conversation is None:
            return ServiceResult.failure(
                "Conversation not found",
                error_code="CONVERSATION_NOT_FOUND",
            )
        return ServiceResult.success(conversation)

    @classmethod
    def delete_for_user(cls, conversation_id, user_id) -> ServiceResult[bool]:
        """
        Remove the user from a conversation.

        Only the caller's Participant row is deleted. When no participants
        remain the conversation itself is deleted, taking its messages with it.

        Returns:
            ServiceResult with True if the conversation was deleted,
            False if other participants remain

        Error codes:
            MISSING_PARAMETER: Either id absent
            CONVERSATION_NOT_FOUND: The user is not a participant
        """
        missing = cls.validate_required(
            conversation_id=conversation_id, user_id=user_id
        )
        if missing is not None:
            return missing

        with cls.atomic():
            deleted, _ = Participant.objects.filter(
                conversation_id=conversation_id, user_id=user_id
            ).delete()
            if not deleted:
                return ServiceResult.failure(
                    "Conversation not found",
                    error_code="CONVERSATION_NOT_FOUND",
                )

            conversation_deleted = False
            if not Participant.objects.filter(conversation_id=conversation_id).exists():
                Conversation.objects.filter(id=conversation_id).delete()
                conversation_deleted = True

        cls.get_logger().info(
            f"User {user_id} left conversation {conversation_id}"
            + (" (conversation deleted)" if conversation_deleted else "")
        )
        return ServiceResult.success(conversation_deleted)


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        send_message: Append a message and publish it after commit
        mark_as_read: Flip read on messages from other participants
        list_messages: All messages in ascending order
    """

    @classmethod
    def _require_participant(cls, conversation_id, user_id) -> ServiceResult | None:
        if not Participant.objects.filter(
            conversation_id=conversation_id, user_id=user_id
        ).exists():
            cls.get_logger().warning(
                f"User {user_id} denied access to conversation {conversation_id}"
            )
            return ServiceResult.failure(
                "Conversation not found",
                error_code="CONVERSATION_NOT_FOUND",
            )
        return None

    @classmethod
    def send_message(
        cls,
        conversation_id,
        sender: User,
        content: str,
        client_id: str | None = "",
    ) -> ServiceResult[Message]:
        """
        Send a text message to a conversation.

        The message is created unread. Once the transaction commits, a
        message.created event is published to the conversation's group.

        Args:
            conversation_id: Target conversation
            sender: User sending the message
            content: Message text (stripped)
            client_id: Optional correlation id echoed back to the client

        Returns:
            ServiceResult with new Message

        Error codes:
            MISSING_PARAMETER: conversation_id absent
            EMPTY_CONTENT: Message content cannot be empty
            VALIDATION_ERROR: Content longer than MESSAGE_CONFIG.MAX_CONTENT_LENGTH
            CONVERSATION_NOT_FOUND: Sender is not a participant
        """
        missing = cls.validate_required(conversation_id=conversation_id)
        if missing is not None:
            return missing

        content = content.strip() if content else ""
        if not content:
            return ServiceResult.failure(
                "Message content cannot be empty",
                error_code="EMPTY_CONTENT",
            )

        if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
            return ServiceResult.failure(
                f"Message content exceeds {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
                error_code="VALIDATION_ERROR",
                errors={"content": ["Message is too long."]},
            )

        denied = cls._require_participant(conversation_id, sender.id)
        if denied is not None:
            return denied

        with cls.atomic():
            message = Message.objects.create(
                conversation_id=conversation_id,
                sender=sender,
                content=content,
                client_id=client_id or "",
            )

            # Update conversation last_message_at
            Conversation.objects.filter(id=conversation_id).update(
                last_message_at=message.created_at,
                updated_at=message.created_at,
            )

            transaction.on_commit(lambda: broadcast.publish_message_created(message))

        cls.get_logger().debug(
            f"User {sender.id} sent message {message.id} "
            f"to conversation {conversation_id}"
        )
        return ServiceResult.success(message)

    @classmethod
    def mark_as_read(cls, conversation_id, reader: User) -> ServiceResult[int]:
        """
        Mark every unread message from other participants as read.

        Idempotent: a second call finds nothing to update and returns 0.

        Returns:
            ServiceResult with the number of messages updated

        Error codes:
            MISSING_PARAMETER: conversation_id absent
            CONVERSATION_NOT_FOUND: Reader is not a participant
        """
        missing = cls.validate_required(conversation_id=conversation_id)
        if missing is not None:
            return missing

        denied = cls._require_participant(conversation_id, reader.id)
        if denied is not None:
            return denied

        with cls.atomic():
            unread = Message.objects.filter(
                conversation_id=conversation_id, read=False
            ).exclude(sender_id=reader.id)
            message_ids = list(unread.values_list("id", flat=True))
            updated = 0
            if message_ids:
                updated = Message.objects.filter(id__in=message_ids, read=False).update(
                    read=True
                )
                transaction.on_commit(
                    lambda: broadcast.publish_messages_read(
                        conversation_id, reader.id, message_ids
                    )
                )

        cls.get_logger().debug(
            f"User {reader.id} marked {updated} messages read "
            f"in conversation {conversation_id}"
        )
        return ServiceResult.success(updated)

    @classmethod
    def list_messages(cls, conversation_id, user: User) -> ServiceResult[QuerySet]:
        """
        All messages of a conversation, oldest first.

        Error codes:
            CONVERSATION_NOT_FOUND: User is not a participant
        """
        denied = cls._require_participant(conversation_id, user.id)
        if denied is not None:
            return denied

        messages = (
            Message.objects.filter(conversation_id=conversation_id)
            .select_related("sender__profile")
            .order_by("created_at", "id")
        )
        return ServiceResult.success(messages)
