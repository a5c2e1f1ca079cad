"""
Gavel - API Error System
========================

Error codes and exception handling for consistent API responses.

Every error body carries a human readable "message", which is what the
appeal page shows the user.

Author: Gavel contributors
"""

from enum import Enum
from typing import Dict, Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from gavel.core.errors import RejectionKind


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(str, Enum):
    """
    Centralized error codes for the API.

    Format: CATEGORY_SPECIFIC_ERROR
    """

    # Authentication errors (401)
    AUTH_MISSING_TOKEN = "AUTH_MISSING_TOKEN"
    AUTH_INVALID_TOKEN = "AUTH_INVALID_TOKEN"

    # Appeal errors (400)
    APPEAL_PENDING_EXISTS = "APPEAL_PENDING_EXISTS"
    APPEAL_COOLDOWN_ACTIVE = "APPEAL_COOLDOWN_ACTIVE"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    VALIDATION_INVALID_FORMAT = "VALIDATION_INVALID_FORMAT"

    # Server errors (500, 503)
    SERVER_ERROR = "SERVER_ERROR"
    SERVER_DATABASE_ERROR = "SERVER_DATABASE_ERROR"
    SERVICE_NOT_READY = "SERVICE_NOT_READY"


# =============================================================================
# Error Messages
# =============================================================================

ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.AUTH_MISSING_TOKEN: "You must be logged in.",
    ErrorCode.AUTH_INVALID_TOKEN: "Invalid or expired login. Please log in again.",
    ErrorCode.APPEAL_PENDING_EXISTS: "You already have a pending appeal.",
    ErrorCode.APPEAL_COOLDOWN_ACTIVE: "Please wait before appealing again.",
    ErrorCode.VALIDATION_ERROR: "Missing required fields.",
    ErrorCode.VALIDATION_INVALID_FORMAT: "Invalid request body.",
    ErrorCode.SERVER_ERROR: "Internal server error.",
    ErrorCode.SERVER_DATABASE_ERROR: "Internal server error.",
    ErrorCode.SERVICE_NOT_READY: "Appeal service is starting, please try again shortly.",
}


# =============================================================================
# Default Status Codes
# =============================================================================

ERROR_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.AUTH_MISSING_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID_TOKEN: HTTP_401_UNAUTHORIZED,
    ErrorCode.APPEAL_PENDING_EXISTS: HTTP_400_BAD_REQUEST,
    ErrorCode.APPEAL_COOLDOWN_ACTIVE: HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_ERROR: HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_INVALID_FORMAT: HTTP_400_BAD_REQUEST,
    ErrorCode.SERVER_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVER_DATABASE_ERROR: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.SERVICE_NOT_READY: HTTP_503_SERVICE_UNAVAILABLE,
}


# Submission rejections mapped onto API error codes
REJECTION_CODES: Dict[RejectionKind, ErrorCode] = {
    RejectionKind.VALIDATION: ErrorCode.VALIDATION_ERROR,
    RejectionKind.PENDING_EXISTS: ErrorCode.APPEAL_PENDING_EXISTS,
    RejectionKind.THROTTLED: ErrorCode.APPEAL_COOLDOWN_ACTIVE,
    RejectionKind.UNAVAILABLE: ErrorCode.SERVER_ERROR,
}


# =============================================================================
# API Error Exception
# =============================================================================

class APIError(HTTPException):
    """
    API exception with an error code.

    Usage:
        raise APIError(ErrorCode.AUTH_MISSING_TOKEN, headers={"WWW-Authenticate": "Bearer"})
        raise APIError(ErrorCode.SERVER_DATABASE_ERROR)
    """

    def __init__(
        self,
        code: ErrorCode,
        status_code: Optional[int] = None,
        message: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error_code = code
        self.error_message = message or ERROR_MESSAGES.get(code, "An error occurred")

        if status_code is None:
            status_code = ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST)

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error_code": code.value,
                "message": self.error_message,
            },
            headers=headers,
        )


# =============================================================================
# Helper Functions
# =============================================================================

def error_response(
    code: ErrorCode,
    status_code: Optional[int] = None,
    message: Optional[str] = None,
) -> JSONResponse:
    """
    Create a JSON error response without raising an exception.

    Args:
        code: Error code.
        status_code: Overrides the code's default status.
        message: Overrides the code's default message.
    """
    return JSONResponse(
        status_code=status_code or ERROR_STATUS_CODES.get(code, HTTP_400_BAD_REQUEST),
        content={
            "success": False,
            "error_code": code.value,
            "message": message or ERROR_MESSAGES.get(code, "An error occurred"),
        },
    )


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ERROR_STATUS_CODES",
    "REJECTION_CODES",
    "APIError",
    "error_response",
]
