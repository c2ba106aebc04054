"""
DRF authentication class for the session cookie.

Configured first in REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"] so that
unauthenticated requests get 401 (with a WWW-Authenticate header) rather
than 403.

Token sources, in order:
    1. Authorization: Bearer <token> (API clients, tooling)
    2. auth_token cookie (browser client)
"""

from rest_framework_simplejwt.authentication import JWTAuthentication

from authentication.cookies import get_auth_cookie


class CookieJWTAuthentication(JWTAuthentication):
    """
    simplejwt authentication that also accepts the token from the auth cookie.

    An invalid or expired token raises simplejwt's InvalidToken, which the
    exception handler renders as 401 UNAUTHORIZED.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = get_auth_cookie(request)

        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token
