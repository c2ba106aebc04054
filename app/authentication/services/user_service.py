"""
User directory and profile operations.

Related files:
    - models.py: User, Profile
    - views.py: UserSearchView, ProfileView
    - chat/consumers.py: Presence updates on stream connect/disconnect
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone

from authentication.models import Profile
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from authentication.models import User

SEARCH_RESULT_LIMIT = 20


class UserService(BaseService):
    """User search, profile updates and presence flags."""

    @classmethod
    def search(cls, query: str | None, current_user: User) -> ServiceResult[QuerySet]:
        """
        Find active users whose first name, last name or email contains query.

        Matching is case-insensitive. The caller is never included.

        Error codes:
            MISSING_PARAMETER: Query absent or blank
        """
        missing = cls.validate_required(q=query)
        if missing is not None:
            return missing

        term = query.strip()
        UserModel = get_user_model()
        users = (
            UserModel.objects.filter(is_active=True)
            .filter(
                Q(profile__first_name__icontains=term)
                | Q(profile__last_name__icontains=term)
                | Q(email__icontains=term)
            )
            .exclude(id=current_user.id)
            .select_related("profile")
            .order_by("profile__first_name", "email")[:SEARCH_RESULT_LIMIT]
        )
        return ServiceResult.success(users)

    @classmethod
    def update_profile(
        cls,
        user: User,
        status: str | None = None,
        profile_picture: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> ServiceResult[Profile]:
        """
        Update the given profile fields and stamp last_seen.

        Fields passed as None are left unchanged.
        """
        profile, _ = Profile.objects.get_or_create(user=user)

        changes = {
            "status": status,
            "profile_picture": profile_picture,
            "first_name": first_name,
            "last_name": last_name,
        }
        update_fields = ["last_seen", "updated_at"]
        for field_name, value in changes.items():
            if value is not None:
                setattr(profile, field_name, value)
                update_fields.append(field_name)

        profile.last_seen = timezone.now()
        profile.save(update_fields=update_fields)

        cls.get_logger().info(f"User {user.id} updated profile")
        return ServiceResult.success(profile)

    @classmethod
    def set_online(cls, user_id: int, is_online: bool) -> int:
        """
        Flip the presence flag and stamp last_seen.

        Returns:
            Number of profiles updated (0 if the user has no profile)
        """
        now = timezone.now()
        updated = Profile.objects.filter(user_id=user_id).update(
            is_online=is_online,
            last_seen=now,
            updated_at=now,
        )
        cls.get_logger().debug(f"User {user_id} presence set to online={is_online}")
        return updated
