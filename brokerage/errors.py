"""Domain errors raised by the service layer and mapped to HTTP responses."""

from fastapi import status


class BrokerageError(Exception):
    """Base error for the back-office service."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = None):
        super().__init__(message or self.__doc__)
        self.message = message or self.__doc__


class ConflictError(BrokerageError):
    """Creation would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT


class AuthError(BrokerageError):
    """Invalid email or password"""

    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(BrokerageError):
    """Invalid or expired reset token"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(BrokerageError):
    """Record not found."""

    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedError(BrokerageError):
    """Permission denied."""

    status_code = status.HTTP_403_FORBIDDEN
