"""Domain error codes for the tickets module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ISSUANCE_REQUEST = "INVALID_ISSUANCE_REQUEST"
    INVALID_HOLDER_ID = "INVALID_HOLDER_ID"
    UNKNOWN_HOLDER = "UNKNOWN_HOLDER"
    VERIFICATION_UNAVAILABLE = "VERIFICATION_UNAVAILABLE"
    ISSUANCE_CONFLICT = "ISSUANCE_CONFLICT"
    DUPLICATE_TICKET_ID = "DUPLICATE_TICKET_ID"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidIssuanceRequestError(DomainError):
    """Raised when an issuance request is missing or has malformed fields."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ISSUANCE_REQUEST, message=message)


class InvalidHolderIdError(DomainError):
    """Raised when a holder ID is not a numeric identifier."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_HOLDER_ID,
            message="Invalid holder ID format",
        )


class UnknownHolderError(DomainError):
    """Raised when the identity service reports the holder does not exist."""

    def __init__(self, holder_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_HOLDER,
            message="Holder not found by identity service",
        )
        self.holder_id = holder_id


class VerificationUnavailableError(DomainError):
    """Raised when the holder's identity could not be verified."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VERIFICATION_UNAVAILABLE,
            message="Identity verification could not be completed",
        )


class IssuanceConflictError(DomainError):
    """Raised when a fresh ticket ID collided twice in a row."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ISSUANCE_CONFLICT,
            message="Could not allocate a unique ticket ID",
        )


class DuplicateTicketIdError(DomainError):
    """Raised by stores when inserting an ID that already exists."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_TICKET_ID,
            message="Ticket ID already exists",
        )
        self.ticket_id = ticket_id


class TicketNotFoundError(DomainError):
    """Raised when a ticket is not found."""

    def __init__(self, ticket_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="Ticket not found",
        )
        self.ticket_id = ticket_id


class StorageUnavailableError(DomainError):
    """Raised when the ticket store cannot be reached or fails."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_UNAVAILABLE,
            message="Ticket storage is temporarily unavailable",
        )
