"""
Serializers for authentication models.

This module provides DRF serializers for:
- User (current-user and login responses)
- User summaries (search results, conversation participants, message senders)
- Profile (read and update)
- Login and registration requests

Related files:
    - models.py: User and Profile models
    - views.py: Views that use these serializers

Security:
    - Password fields are write-only
    - Only public fields are exposed for other users
"""

from rest_framework import serializers

from authentication.models import Profile, User


class UserSummarySerializer(serializers.ModelSerializer):
    """
    Public fields of another user.

    Used for search results, conversation participants and message senders.
    """

    first_name = serializers.CharField(source="profile.first_name", read_only=True)
    last_name = serializers.CharField(source="profile.last_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "email"]
        read_only_fields = fields


class UserSerializer(UserSummarySerializer):
    """
    The authenticated user's own account.

    Returned by login, register and the current-user endpoint.
    """

    active = serializers.BooleanField(source="is_active", read_only=True)
    status = serializers.CharField(source="profile.status", read_only=True)
    profile_picture = serializers.CharField(
        source="profile.profile_picture", read_only=True
    )

    class Meta(UserSummarySerializer.Meta):
        fields = UserSummarySerializer.Meta.fields + [
            "active",
            "status",
            "profile_picture",
        ]
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """Profile with identity and presence fields."""

    id = serializers.IntegerField(source="user.id", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "profile_picture",
            "status",
            "last_seen",
            "is_online",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """Fields a user may change on their own profile. All optional."""

    status = serializers.CharField(max_length=100, required=False, allow_blank=True)
    profile_picture = serializers.URLField(
        max_length=500, required=False, allow_blank=True
    )
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    """
    Email/password login request.

    Email is not format-checked so a malformed address fails like any other
    unknown email.
    """

    email = serializers.CharField(max_length=254)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class RegisterSerializer(serializers.Serializer):
    """Account registration request."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
