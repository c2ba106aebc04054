"""
Chat app for real-time messaging.

This app handles:
- Conversations and their participants
- Message sending and history
- Read receipts and unread counts
- Live updates over an NDJSON stream and WebSocket

Related apps:
    - authentication: User model for participants, presence on Profile

Live Delivery:
    Uses Django Channels groups, one per conversation.
    See broadcast.py for publishing, consumers.py for subscribers and
    routing.py for URL patterns.

Usage:
    from chat.services import ConversationService, MessageService

    # Create conversation
    result = ConversationService.create([user.id, other_user.id])

    # Send message
    result = MessageService.send_message(
        conversation_id=result.data.id,
        sender=user,
        content="Hello!",
        client_id="tmp-1",
    )
"""
