"""
Chat application configuration.

This app provides the chat system with:
- Conversations between two or more users
- Delete-for-me that removes a conversation once it is empty
- Read tracking and unread counts
- Live NDJSON and WebSocket delivery over channel layer groups
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
