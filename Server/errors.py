"""
CampusShare Server - Error Types

All errors raised by the storage, catalog and auth layers derive from
CampusShareError. Each carries the HTTP status it maps to; server.py
renders them as {"detail": message}.
"""

from fastapi import status


class CampusShareError(Exception):
    """Base exception for CampusShare server errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# ==================== 400 Bad Request ====================

class ValidationFailed(CampusShareError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class DuplicateKey(CampusShareError):
    """Uniqueness violation on username, email or student ID."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username / email / studentId already exists"


class UnsupportedType(CampusShareError):
    """Upload rejected because of its file extension."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Unsupported file type"


class PayloadTooLarge(CampusShareError):
    """Upload rejected because it exceeds the size limit."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File too large"


# ==================== 401 Unauthorized ====================

class Unauthorized(CampusShareError):
    """Base for every authentication failure."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class MalformedRequest(Unauthorized):
    """Token absent or not structurally a token."""
    default_message = "Missing or malformed Authorization header"


class InvalidToken(Unauthorized):
    """Token signature invalid, expired, or missing its claims."""
    default_message = "Invalid or expired token"


class UserNotFound(Unauthorized):
    """Token names a user that no longer exists."""
    default_message = "User not found"


class InvalidCredentials(Unauthorized):
    """Login failure; unknown user and wrong password are indistinguishable."""
    default_message = "Invalid credentials"


# ==================== 404 / 500 ====================

class NotFound(CampusShareError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Material not found"


class StoreFailure(CampusShareError):
    """Underlying database or filesystem I/O error."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage failure"
