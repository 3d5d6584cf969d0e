"""
Domain errors raised by services and translated to HTTP responses in app.main.
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that are reported to the caller as-is."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "unexpected_error"
    default_message = "Unexpected server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnexpectedError(AppError):
    """Storage or unknown failure. Details are logged, never returned."""


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid payload"


# Authentication

class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "auth_error"
    default_message = "Not authenticated"


class MissingCredential(AuthError):
    code = "missing_credential"
    default_message = "Missing authorization header"


class MalformedCredential(AuthError):
    code = "malformed_credential"
    default_message = "Invalid token"


class ExpiredCredential(AuthError):
    code = "expired_credential"
    default_message = "Token has expired"


class UnknownSubject(AuthError):
    code = "unknown_subject"
    default_message = "User not found"


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class WrongRecoveryAnswer(AuthError):
    code = "wrong_recovery_answer"
    default_message = "Incorrect security answer"


class RecoveryNotConfigured(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "recovery_not_configured"
    default_message = "No security question set for this account"


# Conflicts

class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Conflict"


class EmailTaken(ConflictError):
    code = "email_taken"
    default_message = "Email already registered"


class AlreadyHost(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "already_host"
    default_message = "You already host this ride"


class AlreadyJoined(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "already_joined"
    default_message = "You already joined this ride"


class RideFull(ConflictError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "ride_full"
    default_message = "Ride is full"


# Lookups

class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class RideNotFound(NotFoundError):
    code = "ride_not_found"
    default_message = "Ride not found"


class UserNotFound(NotFoundError):
    code = "user_not_found"
    default_message = "User not found"
