"""
Route gate for protected pages.

Requests whose path starts with one of settings.PROTECTED_PATH_PREFIXES must
carry a valid auth cookie. Otherwise they are redirected to
settings.LOGIN_REDIRECT_PATH, and an invalid cookie is cleared.

API routes are not gated here; DRF authentication answers those with 401.
"""

import logging

from django.conf import settings
from django.shortcuts import redirect

from authentication.cookies import clear_auth_cookie, get_auth_cookie
from authentication.services import AuthService

logger = logging.getLogger(__name__)


class ProtectedPathMiddleware:
    """Redirect unauthenticated requests away from protected path prefixes."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        prefixes = tuple(settings.PROTECTED_PATH_PREFIXES)
        if prefixes and request.path.startswith(prefixes):
            raw_token = get_auth_cookie(request)
            if raw_token is None:
                return redirect(settings.LOGIN_REDIRECT_PATH)

            if not AuthService.verify_token(raw_token):
                logger.info(f"Invalid auth cookie on {request.path}, redirecting")
                response = redirect(settings.LOGIN_REDIRECT_PATH)
                clear_auth_cookie(response)
                return response

        return self.get_response(request)
