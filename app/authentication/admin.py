"""
Django admin configuration for authentication models.

Registers User and Profile with the Django admin site.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from authentication.models import Profile, User


class ProfileInline(admin.StackedInline):
    """Profile shown on the user change page."""

    model = Profile
    can_delete = False
    fields = ("first_name", "last_name", "status", "profile_picture", "is_online", "last_seen")
    readonly_fields = ("is_online", "last_seen")


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Customized for email-based authentication. Name and presence are edited
    through the Profile inline.
    """

    list_display = (
        "email",
        "is_active",
        "is_staff",
        "date_joined",
    )
    list_filter = (
        "is_active",
        "is_staff",
        "is_superuser",
        "date_joined",
    )
    search_fields = ("email", "profile__first_name", "profile__last_name")
    ordering = ("-date_joined",)
    inlines = [ProfileInline]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Status", {"fields": ("is_active", "is_staff", "is_superuser")}),
        ("Permissions", {"fields": ("groups", "user_permissions")}),
        ("Important dates", {"fields": ("date_joined", "last_login")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin configuration for Profile model."""

    list_display = (
        "user",
        "first_name",
        "last_name",
        "status",
        "is_online",
        "last_seen",
    )
    list_filter = ("is_online", "created_at")
    search_fields = ("user__email", "first_name", "last_name")
    ordering = ("-created_at",)

    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at", "last_seen")
