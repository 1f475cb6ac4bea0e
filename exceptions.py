"""Application errors, translated to JSON responses by the handlers in main.py."""
from fastapi import status
from typing import Optional


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(AppError):
    """No bearer token was presented"""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token provided"


class InvalidToken(AppError):
    """Token is malformed, tampered with, signed with another key or expired"""
    status_code = status.HTTP_403_FORBIDDEN
    message = "Token invalid/expired"


class TokenExpired(InvalidToken):
    pass


class InvalidCredentials(AppError):
    # Same message for unknown users and wrong passwords
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class StorageError(AppError):
    """Underlying database fault; message is the driver's error text"""
    message = "Database error"
