from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
import logging

from .constants import (
    MSG_ACCESS_DENIED,
    MSG_CONFIRM_CLEAR,
    MSG_DUPLICATE_ACCOUNT,
    MSG_INVALID_CREDENTIALS,
    MSG_INVALID_IMPORT,
    MSG_INVALID_QR,
    MSG_INVALID_REGISTRATION,
    MSG_PARTICIPANT_NOT_FOUND,
)

logger = logging.getLogger("ems.core")


# -----------------------------
# Domain errors
# -----------------------------
class DeskError(APIException):
    """Base class for failures reported back to the desk operator."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be completed."
    default_code = "desk_error"


class ValidationFailed(DeskError):
    default_detail = MSG_INVALID_REGISTRATION
    default_code = "invalid"


class InvalidCredentials(DeskError):
    default_detail = MSG_INVALID_CREDENTIALS
    default_code = "invalid_credentials"


class DuplicateAccount(DeskError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = MSG_DUPLICATE_ACCOUNT
    default_code = "duplicate_account"


class AccessDenied(DeskError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = MSG_ACCESS_DENIED
    default_code = "access_denied"


class ParticipantNotFound(DeskError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = MSG_PARTICIPANT_NOT_FOUND
    default_code = "participant_not_found"


class InvalidQRPayload(DeskError):
    default_detail = MSG_INVALID_QR
    default_code = "invalid_qr"


class InvalidImport(DeskError):
    default_detail = MSG_INVALID_IMPORT
    default_code = "invalid_import"


class ConfirmationRequired(DeskError):
    default_detail = MSG_CONFIRM_CLEAR
    default_code = "confirmation_required"


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        if isinstance(exc, DeskError):
            logger.info(f"Desk request rejected ({exc.status_code}): {exc.detail}")
        return Response(
            {
                "success": False,
                "status_code": response.status_code,
                "errors": response.data,
            },
            status=response.status_code,
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
