from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and a user-facing message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized access"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Request conflicts with the current state"


class InternalError(AppError):
    pass


# ==================== LEDGER / CREDIT ERRORS ====================

class CreditNotFound(NotFoundError):
    default_message = "Credit record not found"


class InvalidAmount(ValidationError):
    default_message = "Invalid payment amount"


class InactiveRecord(ConflictError):
    default_message = "Credit record is already settled"


class InvalidBankAccount(ValidationError):
    default_message = "Bank account not found or inactive"


class InsufficientFunds(ConflictError):
    default_message = "Insufficient balance for this transaction"


class InsufficientStock(ConflictError):
    default_message = "Insufficient stock"
