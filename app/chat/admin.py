"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Conversation management
- Participant viewing
- Message moderation
"""

from django.contrib import admin

from chat.models import Conversation, Message, Participant


class ParticipantInline(admin.TabularInline):
    """Inline display of participants in conversation admin."""

    model = Participant
    extra = 0
    readonly_fields = ["joined_at"]
    raw_id_fields = ["user"]


@admin.register(Conversation)
class ConversationAdmin(admin.ModelAdmin):
    """Admin interface for Conversation model."""

    list_display = [
        "id",
        "participant_count",
        "created_at",
        "last_message_at",
    ]
    list_filter = ["created_at"]
    search_fields = ["id", "participants__user__email"]
    readonly_fields = ["created_at", "updated_at", "last_message_at"]
    inlines = [ParticipantInline]
    ordering = ["-created_at"]

    @admin.display(description="Participants")
    def participant_count(self, obj: Conversation) -> int:
        return obj.participants.count()


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """Admin interface for Participant model."""

    list_display = ["id", "conversation", "user", "joined_at"]
    list_filter = ["joined_at"]
    search_fields = ["user__email"]
    readonly_fields = ["created_at", "updated_at", "joined_at"]
    raw_id_fields = ["conversation", "user"]
    ordering = ["-joined_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "conversation",
        "sender",
        "content_preview",
        "read",
        "created_at",
    ]
    list_filter = ["read", "created_at"]
    search_fields = ["content", "sender__email", "client_id"]
    readonly_fields = ["created_at", "updated_at", "client_id"]
    raw_id_fields = ["conversation", "sender"]
    ordering = ["-created_at"]
