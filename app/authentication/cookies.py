"""
Session cookie helpers.

The session token travels only in the auth cookie:
    name      settings.AUTH_COOKIE_NAME ("auth_token")
    max-age   settings.AUTH_COOKIE_MAX_AGE (86400, matches the token lifetime)
    httponly  always
    samesite  settings.AUTH_COOKIE_SAMESITE ("Strict")
    secure    settings.AUTH_COOKIE_SECURE (True unless DEBUG)
"""

from django.conf import settings


def get_auth_cookie(request) -> str | None:
    """Return the raw session token from the request cookies, if any."""
    return request.COOKIES.get(settings.AUTH_COOKIE_NAME) or None


def set_auth_cookie(response, token: str) -> None:
    """Attach the session token cookie to a response."""
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        path="/",
    )


def clear_auth_cookie(response) -> None:
    """Expire the session token cookie on a response."""
    response.delete_cookie(
        settings.AUTH_COOKIE_NAME,
        path="/",
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )
