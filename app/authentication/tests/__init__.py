"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User, Profile and UserManager tests
- test_services.py: AuthService and UserService tests
- test_views.py: API endpoint tests
- test_middleware.py: Protected path redirect tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_models.py
"""
