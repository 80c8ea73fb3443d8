"""
Global exception handler for the Coupon API.

This module provides a custom exception handler for DRF that handles
custom exceptions and provides consistent error responses.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.utils import DatabaseError
from django.http import Http404
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

logger = logging.getLogger(__name__)


def get_error_code(exception: Exception) -> str:
    """
    Get standardized error code from exception.

    Args:
        exception: The exception to get code for

    Returns:
        str: Standardized error code
    """
    if isinstance(exception, ValidationError):
        return "validation_error"
    elif isinstance(exception, NotAuthenticated):
        return "authentication_required"
    elif isinstance(exception, AuthenticationFailed):
        return "authentication_failed"
    elif isinstance(exception, PermissionDenied):
        return "permission_denied"
    elif isinstance(exception, (Http404, NotFound, ObjectDoesNotExist)):
        return "not_found"
    elif isinstance(exception, DatabaseError):
        return "storage_error"
    elif isinstance(exception, APIException):
        return getattr(exception, "default_code", None) or "error"
    else:
        return "internal_error"


def get_error_message(exception: Exception) -> str:
    """
    Get a human-readable message for an exception.

    Args:
        exception: The exception

    Returns:
        str: Error message
    """
    detail = getattr(exception, "detail", None)
    if isinstance(detail, str):
        return str(detail)

    if isinstance(exception, ValidationError):
        return str(_("Invalid input."))
    elif isinstance(exception, DatabaseError):
        return str(_("A storage error occurred. Please try again later."))
    elif isinstance(exception, (Http404, ObjectDoesNotExist)):
        return str(_("The requested resource was not found."))

    return str(_("An error occurred processing your request."))


def get_error_details(exception: Exception) -> Optional[Dict[str, Any]]:
    """
    Get detailed error information from exception.

    Args:
        exception: The exception

    Returns:
        Optional[Dict]: Error details if available
    """
    # Domain exceptions carry their own structured details
    details = getattr(exception, "details", None)
    if details:
        return details

    if (
        isinstance(exception, ValidationError)
        and hasattr(exception, "detail")
        and not isinstance(exception.detail, str)
    ):
        if isinstance(exception.detail, list):
            return {"validation_errors": exception.detail}
        return exception.detail

    return None


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Custom exception handler for DRF views.

    Renders every failure as ``{"error", "message", "status", "details"}``.

    Args:
        exc: The exception
        context: The exception context

    Returns:
        Response: Consistent error response
    """
    # Handle Django ValidationError by converting to DRF ValidationError
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, "message_dict"):
            exc = ValidationError(detail=exc.message_dict)
        else:
            exc = ValidationError(detail=exc.messages)

    response = drf_exception_handler(exc, context)

    error_code = get_error_code(exc)
    error_message = get_error_message(exc)
    error_details = get_error_details(exc)

    if response is not None:
        status_code = response.status_code
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    view = context.get("view")
    if status_code < 500:
        logger.warning(
            "Exception: %s - %s | view=%s | details=%s",
            error_code,
            error_message,
            view.__class__.__name__ if view else None,
            error_details,
        )
    else:
        logger.error(
            "Exception: %s - %s | view=%s\nTraceback: %s",
            error_code,
            error_message,
            view.__class__.__name__ if view else None,
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )

    data = {
        "error": error_code,
        "message": error_message,
        "status": status_code,
        **({"details": error_details} if error_details is not None else {}),
    }

    # If DRF handled the exception, keep its headers (WWW-Authenticate etc.)
    if response is not None:
        response.data = data
        return response

    # Handle unhandled exceptions; never commit a half-finished request
    set_rollback()
    return Response(data, status=status_code)
