"""
Domain errors raised by the service layer.

Services never build HTTP responses; they raise one of these and the
handlers registered in ``eventra.main`` turn them into ``{"message": ...}``
bodies with the matching status code.
"""

from fastapi import status


class DomainError(Exception):
    """Base error carrying a user-safe message and an HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, message: str | None = None) -> None:
        super().__init__(message or f"{entity} not found.")
        self.entity = entity


class BusinessRuleError(DomainError):
    """A well-formed request that the current state does not allow."""

    status_code = status.HTTP_400_BAD_REQUEST


class CapacityExceededError(BusinessRuleError):
    pass


class DuplicateBookingError(BusinessRuleError):
    pass


class PaymentExceedsBalanceError(BusinessRuleError):
    pass


class InvalidStateError(BusinessRuleError):
    pass


class PermissionDeniedError(DomainError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class AuthenticationError(DomainError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid credentials.") -> None:
        super().__init__(message)
