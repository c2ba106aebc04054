"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ConversationViewSet: Conversation list/create/get/delete-for-me and read
- MessageViewSet: Message list and send (nested under conversation)

URL Structure:
    /api/v1/chat/conversations/                  GET, POST
    /api/v1/chat/conversations/{id}/             GET, DELETE
    /api/v1/chat/conversations/{id}/read/        POST
    /api/v1/chat/conversations/{id}/messages/    GET, POST
    /api/v1/chat/conversations/{id}/stream/      GET (NDJSON, served by ASGI)

Design Decisions:
    - All operations use the service layer for business logic
    - Failed ServiceResults are raised with raise_for_result() and rendered
      by core.exception_handler
    - Non-participants get 404, the same as for unknown conversations
    - DELETE only removes the caller; the conversation goes when empty
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.serializers import (
    ConversationCreateSerializer,
    ConversationSerializer,
    MessageCreateSerializer,
    MessageSerializer,
)
from chat.services import ConversationService, MessageService
from core.exceptions import raise_for_result


@extend_schema_view(
    list=extend_schema(
        operation_id="list_conversations",
        summary="List conversations",
        responses={200: ConversationSerializer(many=True)},
        tags=["Chat - Conversations"],
    ),
    create=extend_schema(
        operation_id="create_conversation",
        summary="Create conversation",
        request=ConversationCreateSerializer,
        responses={
            201: ConversationSerializer,
            400: OpenApiResponse(description="Fewer than two participants"),
            404: OpenApiResponse(description="Unknown participant id"),
        },
        tags=["Chat - Conversations"],
    ),
    retrieve=extend_schema(
        operation_id="get_conversation",
        summary="Get conversation",
        responses={200: ConversationSerializer},
        tags=["Chat - Conversations"],
    ),
    destroy=extend_schema(
        operation_id="delete_conversation",
        summary="Delete conversation for the current user",
        responses={200: OpenApiTypes.OBJECT, 404: OpenApiResponse(description="Not found")},
        tags=["Chat - Conversations"],
    ),
)
class ConversationViewSet(
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for conversation operations.

    list:
        Get all conversations for the current user, newest activity first,
        each with its last message and unread count.

    create:
        Create a conversation. The caller is always a participant.

    retrieve:
        Get one conversation the caller participates in.

    destroy:
        Remove the caller from the conversation. The conversation and its
        messages are deleted once no participants remain.

    read:
        Mark every message from other participants as read.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ConversationSerializer
    pagination_class = None
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        """Conversations where the user is a participant."""
        return ConversationService.list_for_user(self.request.user.id)

    def get_serializer_class(self):
        if self.action == "create":
            return ConversationCreateSerializer
        return ConversationSerializer

    def create(self, request):
        """Create a conversation between the caller and participant_ids."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        participant_ids = set(serializer.validated_data["participant_ids"])
        participant_ids.add(request.user.id)

        result = ConversationService.create(participant_ids)
        raise_for_result(result)

        conversation = ConversationService.get_for_user(result.data.id, request.user.id).data
        return Response(
            ConversationSerializer(conversation).data,
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        result = ConversationService.get_for_user(pk, request.user.id)
        raise_for_result(result)
        return Response(ConversationSerializer(result.data).data)

    def destroy(self, request, pk=None):
        """Leave the conversation, deleting it if the caller was the last one."""
        result = ConversationService.delete_for_user(pk, request.user.id)
        raise_for_result(result)
        return Response({"success": True, "conversation_deleted": result.data})

    @extend_schema(
        operation_id="mark_conversation_read",
        summary="Mark conversation as read",
        request=None,
        responses={200: OpenApiTypes.OBJECT},
        tags=["Chat - Conversations"],
    )
    @action(detail=True, methods=["post"])
    def read(self, request, pk=None):
        """Mark conversation as read. Returns how many messages changed."""
        result = MessageService.mark_as_read(pk, request.user)
        raise_for_result(result)
        return Response({"updated": result.data})


@extend_schema_view(
    list=extend_schema(
        operation_id="list_messages",
        summary="List messages",
        responses={200: MessageSerializer(many=True)},
        tags=["Chat - Messages"],
    ),
    create=extend_schema(
        operation_id="send_message",
        summary="Send message",
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Empty or oversized content"),
            404: OpenApiResponse(description="Conversation not found"),
        },
        tags=["Chat - Messages"],
    ),
)
class MessageViewSet(viewsets.GenericViewSet):
    """
    ViewSet for message operations within a conversation.

    list:
        Get all messages in the conversation, oldest first.

    create:
        Send a message. client_id, when given, is stored and echoed back so
        the client can confirm its optimistic entry.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = MessageSerializer
    pagination_class = None

    def get_serializer_class(self):
        if self.action == "create":
            return MessageCreateSerializer
        return MessageSerializer

    def list(self, request, conversation_pk=None):
        result = MessageService.list_messages(conversation_pk, request.user)
        raise_for_result(result)
        return Response(MessageSerializer(result.data, many=True).data)

    def create(self, request, conversation_pk=None):
        """Send a message."""
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.send_message(
            conversation_id=conversation_pk,
            sender=request.user,
            content=serializer.validated_data["content"],
            client_id=serializer.validated_data.get("client_id", ""),
        )
        raise_for_result(result)

        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)
