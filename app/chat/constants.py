"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Message operations (content limits, correlation ids)
- Live streams (group naming, NDJSON framing)

Import example:
    from chat.constants import MESSAGE_CONFIG, STREAM_CONFIG
"""

from typing import Final


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters
    MAX_CLIENT_ID_LENGTH: Final[int] = 64


# =============================================================================
# Stream Configuration
# =============================================================================


class STREAM_CONFIG:
    """Configuration for the NDJSON stream and WebSocket consumers."""

    GROUP_PREFIX: Final[str] = "chat_"
    CONTENT_TYPE: Final[bytes] = b"application/x-ndjson"

    # Frame types written to the stream
    FRAME_INITIAL: Final[str] = "initial"
    FRAME_UPDATE: Final[str] = "update"
    FRAME_READ: Final[str] = "read"

    # Channel layer event types (dots map to consumer handler underscores)
    EVENT_MESSAGE_CREATED: Final[str] = "message.created"
    EVENT_MESSAGES_READ: Final[str] = "messages.read"
    EVENT_TYPING: Final[str] = "chat.typing"

    # WebSocket close codes
    CLOSE_UNAUTHENTICATED: Final[int] = 4001
    CLOSE_FORBIDDEN: Final[int] = 4003
    CLOSE_NOT_FOUND: Final[int] = 4004


def group_name_for(conversation_id) -> str:
    """Channel layer group for a conversation id."""
    return f"{STREAM_CONFIG.GROUP_PREFIX}{conversation_id}"

