"""
DRF exception handler rendering every error as a JSON error body.

Configured in settings:
    REST_FRAMEWORK["EXCEPTION_HANDLER"] = "core.exception_handler.api_exception_handler"

Response shape:
    {"error": "<message>", "error_code": "<CODE>", "details": {...}}

Mapping:
    - BaseApplicationError subclasses: their own status_code and error_code
    - DRF NotAuthenticated / AuthenticationFailed: 401 UNAUTHORIZED
    - DRF ValidationError: 400 VALIDATION_ERROR with field details
    - DRF NotFound / Http404: 404 NOT_FOUND
    - Other DRF APIExceptions: their status, code upper-cased
    - Anything else: logged, 500 SERVER_ERROR
"""

from __future__ import annotations

import logging

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import set_rollback

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def _message_from_detail(detail) -> str:
    if isinstance(detail, (list, tuple)) and detail:
        return str(detail[0])
    if isinstance(detail, dict):
        return "Validation failed"
    return str(detail)


def api_exception_handler(exc, context):
    """Convert any exception raised in a DRF view into a JSON error response."""
    if isinstance(exc, BaseApplicationError):
        set_rollback()
        if exc.status_code >= 500:
            logger.error(f"{exc.__class__.__name__} in {context.get('view')}: {exc}")
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        headers = {}
        if getattr(exc, "auth_header", None):
            headers["WWW-Authenticate"] = exc.auth_header
        return Response(
            {"error": str(exc.detail), "error_code": "UNAUTHORIZED"},
            status=status.HTTP_401_UNAUTHORIZED,
            headers=headers,
        )

    if isinstance(exc, exceptions.ValidationError):
        body = {
            "error": _message_from_detail(exc.detail),
            "error_code": "VALIDATION_ERROR",
        }
        if isinstance(exc.detail, dict):
            body["details"] = exc.detail
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, exceptions.APIException):
        set_rollback()
        headers = {}
        if getattr(exc, "wait", None):
            headers["Retry-After"] = str(int(exc.wait))
        error_code = exc.default_code.upper()
        return Response(
            {"error": _message_from_detail(exc.detail), "error_code": error_code},
            status=exc.status_code,
            headers=headers,
        )

    logger.exception(f"Unhandled error in {context.get('view')}: {exc}")
    set_rollback()
    return Response(
        {"error": "Server error", "error_code": "SERVER_ERROR"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
