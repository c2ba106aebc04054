"""
Authentication application.

This app provides email/password login, the session cookie, user search,
profile management and the route gate for protected pages.

Key components:
    - User model: Custom email-based user authentication
    - Profile model: Names and presence data
    - AuthService: Token issue/verify, login, register, current user
    - UserService: Search, profile update, online flag
    - CookieJWTAuthentication: DRF auth from the cookie or Bearer header

Usage:
    from authentication.models import User, Profile
    from authentication.services import AuthService
"""
