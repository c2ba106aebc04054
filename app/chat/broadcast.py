"""
Channel layer fan-out for conversation events.

Every conversation has one group, "chat_<conversation_id>". NDJSON stream
and WebSocket consumers join it; services publish to it after their
transaction commits, so subscribers never see rows that were rolled back.

Events:
    message.created: {"type": "message.created", "message": {...}}
    messages.read:   {"type": "messages.read", "conversation_id": ...,
                      "reader_id": ..., "message_ids": [...]}

Usage:
    transaction.on_commit(lambda: broadcast.publish_message_created(message))
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.serializers.json import DjangoJSONEncoder

from chat.constants import STREAM_CONFIG, group_name_for

if TYPE_CHECKING:
    from chat.models import Message

logger = logging.getLogger(__name__)


def serialize_message(message: Message) -> dict:
    """
    Message as plain JSON types.

    Channel layers copy or msgpack their payloads, so nested serializer
    output is flattened to built-in dicts and lists.
    """
    from chat.serializers import MessageSerializer

    data = MessageSerializer(message).data
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def _group_send(conversation_id, event: dict) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning(f"No channel layer configured, dropping {event['type']} event")
        return

    try:
        async_to_sync(channel_layer.group_send)(group_name_for(conversation_id), event)
    except Exception:
        # The write already committed; a failed publish must not fail the request.
        logger.exception(
            f"Failed to publish {event['type']} to conversation {conversation_id}"
        )


def publish_message_created(message: Message) -> None:
    """Publish a newly committed message to its conversation's subscribers."""
    _group_send(
        message.conversation_id,
        {
            "type": STREAM_CONFIG.EVENT_MESSAGE_CREATED,
            "message": serialize_message(message),
        },
    )
    logger.debug(
        f"Published message {message.id} to conversation {message.conversation_id}"
    )


def publish_messages_read(conversation_id, reader_id: int, message_ids: list[int]) -> None:
    """Publish that reader_id has read message_ids."""
    _group_send(
        conversation_id,
        {
            "type": STREAM_CONFIG.EVENT_MESSAGES_READ,
            "conversation_id": conversation_id,
            "reader_id": reader_id,
            "message_ids": list(message_ids),
        },
    )
