"""
Custom user manager for email-based authentication.

Related files:
    - models.py: User model that uses this manager
    - signals.py: Creates the Profile that receives first/last name

Security:
    - Passwords are automatically hashed via set_password()
    - Email addresses are normalized (lowercase domain)
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Custom manager for User model with email-based authentication.

    first_name and last_name are accepted for convenience and written to
    the auto-created Profile, since User itself carries no name fields.

    Usage:
        user = User.objects.create_user(
            email="user@example.com",
            password="securepassword",
            first_name="Ada",
        )
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a regular user with the given email and password.

        Args:
            email: User's email address (required)
            password: User's password (optional; unusable if omitted)
            **extra_fields: User fields, plus first_name/last_name for Profile

        Returns:
            User: The created user instance

        Raises:
            ValueError: If email is not provided
        """
        if not email:
            raise ValueError("The Email field must be set")

        email = self.normalize_email(email)

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        # These belong on the Profile model, not User
        first_name = extra_fields.pop("first_name", "")
        last_name = extra_fields.pop("last_name", "")

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)

        if first_name or last_name:
            profile = user.profile
            profile.first_name = first_name or ""
            profile.last_name = last_name or ""
            profile.save(update_fields=["first_name", "last_name", "updated_at"])

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser with the given email and password.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)
