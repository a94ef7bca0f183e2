"""
Standardized error handling utilities for EcoTrack API endpoints.
Provides consistent error formats, HTTP status codes, and error codes across all endpoints.
"""

import logging
from flask import jsonify
from typing import Dict, Any, Optional

# Standard error codes for consistent API responses
ERROR_CODES = {
    # Authentication errors
    "TOKEN_MISSING": "User not authenticated.",

    # Validation errors
    "VALIDATION_ERROR": "Request validation failed",

    # Resource errors
    "NOT_FOUND": "Resource not found",
    "USER_NOT_FOUND": "User not found.",

    # System errors
    "SERVER_ERROR": "Internal server error",
    "DATABASE_ERROR": "Database operation failed",
    "EXTERNAL_SERVICE_ERROR": "External service unavailable",
}

# Default HTTP status for each error code
ERROR_STATUS = {
    "TOKEN_MISSING": 401,
    "VALIDATION_ERROR": 400,
    "NOT_FOUND": 404,
    "USER_NOT_FOUND": 404,
    "SERVER_ERROR": 500,
    "DATABASE_ERROR": 500,
    "EXTERNAL_SERVICE_ERROR": 502,
}

def create_error_response(
    error_code: str,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    status_code: Optional[int] = None
) -> tuple:
    """
    Create a standardized error response with consistent format.

    Args:
        error_code: One of the standard ERROR_CODES keys
        message: Optional custom message (defaults to standard message)
        details: Optional additional error details
        status_code: HTTP status code (defaults to ERROR_STATUS for the code)

    Returns:
        Tuple of (JSON response, HTTP status code)
    """
    if error_code not in ERROR_CODES:
        logging.warning(f"Unknown error code used: {error_code}")
        error_code = "SERVER_ERROR"

    error_message = message or ERROR_CODES[error_code]
    status_code = status_code or ERROR_STATUS[error_code]

    response_data = {
        "error_code": error_code,
        "message": error_message
    }

    if details:
        response_data["details"] = details

    logging.error(f"API Error [{error_code}]: {error_message} - Status: {status_code}")

    return jsonify(response_data), status_code

def result_error_response(result: Dict[str, Any]) -> tuple:
    """Converts a failed action-surface result ({error, error_code}) into an error response."""
    return create_error_response(result.get("error_code", "SERVER_ERROR"), result.get("error"))

def handle_exception(e: Exception, context: str = "API endpoint") -> tuple:
    """
    Handle unexpected exceptions with standardized error response.

    Args:
        e: The exception that occurred
        context: Context information for logging

    Returns:
        Tuple of (JSON response, HTTP status code)
    """
    error_type = type(e).__name__
    error_message = str(e)

    logging.error(f"Unexpected error in {context}: {error_type} - {error_message}", exc_info=True)

    return create_error_response(
        error_code="SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error_type": error_type, "error_message": error_message},
        status_code=500
    )

# Common error response shortcuts
def validation_error(message: Optional[str] = None, details: Optional[Dict] = None) -> tuple:
    return create_error_response("VALIDATION_ERROR", message, details, status_code=400)
