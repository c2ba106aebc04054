"""
Authentication application configuration.
"""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Users, profiles and the session cookie."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
    verbose_name = "Authentication"

    def ready(self):
        # Connects the post_save handler that creates each user's Profile
        from authentication import signals  # noqa: F401
