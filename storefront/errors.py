"""Domain errors surfaced to API callers as typed failures."""

from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    CAPACITY = "CAPACITY"
    INVALID_STATE = "INVALID_STATE"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION = "VALIDATION"
    UNAVAILABLE = "UNAVAILABLE"
    TICKET_ISSUANCE_FAILED = "TICKET_ISSUANCE_FAILED"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    status_code = 400

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """Raised when an order, event, ticket or other record is absent."""

    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(ErrorCode.NOT_FOUND, f"{resource} not found")
        self.resource = resource


class CapacityError(DomainError):
    """Raised when the requested ticket quantity exceeds remaining inventory."""

    status_code = 409

    def __init__(self, event_id: int, requested: int) -> None:
        super().__init__(ErrorCode.CAPACITY, "Not enough tickets available")
        self.event_id = event_id
        self.requested = requested


class InvalidStateError(DomainError):
    """Raised when a ticket cannot make the requested transition."""

    status_code = 409

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.INVALID_STATE, message)


class ForbiddenError(DomainError):
    status_code = 403

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(ErrorCode.FORBIDDEN, message)


class ValidationError(DomainError):
    status_code = 422

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.VALIDATION, message)


class UnavailableError(DomainError):
    """Raised when the persistence or storage backend cannot be reached."""

    status_code = 503

    def __init__(self, message: str = "Database not available") -> None:
        super().__init__(ErrorCode.UNAVAILABLE, message)


class TicketIssuanceError(DomainError):
    status_code = 500

    def __init__(self, message: str = "Failed to create event tickets") -> None:
        super().__init__(ErrorCode.TICKET_ISSUANCE_FAILED, message)
