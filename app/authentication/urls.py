"""
URL configuration for authentication app.

URL structure (prefixed with /api/v1/ in config/urls.py):
    auth/register/        - Create account and set auth cookie (POST)
    auth/login/           - Email/password login, set auth cookie (POST)
    auth/logout/          - Clear auth cookie (POST)
    auth/me/              - Current user from auth cookie (GET)
    users/search/         - Search active users (GET ?q=)
    users/profile/        - Own profile (GET/PUT/PATCH)
"""

from django.urls import path

from authentication.views import (
    CurrentUserView,
    LoginView,
    LogoutView,
    ProfileView,
    RegisterView,
    UserSearchView,
)

app_name = "authentication"

urlpatterns = [
    # Session lifecycle
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/me/", CurrentUserView.as_view(), name="me"),
    # Users
    path("users/search/", UserSearchView.as_view(), name="user-search"),
    path("users/profile/", ProfileView.as_view(), name="profile"),
]
