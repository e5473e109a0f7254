"""
Custom exceptions for the application
"""
from typing import List, Tuple


class BaseAppException(Exception):
    """Base application exception"""
    status_code = 500

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class NotFoundError(BaseAppException):
    """Raised when a resource is not found"""
    status_code = 404


class ValidationError(BaseAppException):
    """Raised when a submission fails its schema.

    ``violations`` keeps (field, reason) pairs in field declaration order;
    the message joins all of them so the client sees every problem at once.
    """
    status_code = 400

    def __init__(self, violations: List[Tuple[str, str]]):
        self.violations = list(violations)
        message = "; ".join(f"{field}: {reason}" for field, reason in self.violations)
        super().__init__(message or "Invalid request")

    @property
    def fields(self) -> List[str]:
        return [field for field, _ in self.violations]


class AuthenticationError(BaseAppException):
    """Raised when user login or bearer token checks fail"""
    status_code = 401


class Unauthorized(BaseAppException):
    """Raised when the admin credential is missing or wrong"""
    status_code = 401

    def __init__(self, message: str = "Unauthorized", details: str = None, headers: dict = None):
        super().__init__(message, details)
        self.headers = headers


class AdminNotConfigured(Unauthorized):
    """Raised when the server has no admin credential configured at all"""
    status_code = 500

    def __init__(self, message: str = "Admin key not configured", details: str = None):
        super().__init__(message, details)


class StorageError(BaseAppException):
    """Raised when database operations fail"""
    status_code = 500

    def __init__(self, message: str = "Database error", details: str = None):
        super().__init__(message, details)


class NotificationError(BaseAppException):
    """Raised when an email cannot be delivered. Never reaches the client."""
    pass


class RateLimitedError(BaseAppException):
    status_code = 429

    def __init__(self, message: str = "Too many requests", details: str = None):
        super().__init__(message, details)
