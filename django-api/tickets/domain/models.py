"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in tickets/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from tickets.domain.value_objects import HolderId, TicketClass, TicketId


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket.

    Limited tickets carry ``remaining_uses`` and no expiry; daily and annual
    tickets carry ``valid_until`` and no use counter.
    """

    id: TicketId
    holder_id: HolderId
    ticket_class: TicketClass
    issued_at: datetime
    valid_until: datetime | None = None
    remaining_uses: int | None = None

    def __post_init__(self) -> None:
        if self.issued_at.tzinfo is None:
            raise ValueError("issued_at must be timezone-aware")
        if not self.ticket_class.is_time_bounded:
            if self.remaining_uses is None or self.valid_until is not None:
                raise ValueError("Limited tickets carry remaining_uses only")
            if self.remaining_uses < 0:
                raise ValueError("remaining_uses cannot be negative")
        else:
            if self.valid_until is None or self.remaining_uses is not None:
                raise ValueError("Time-bounded tickets carry valid_until only")
            if self.valid_until.tzinfo is None:
                raise ValueError("valid_until must be timezone-aware")


class ConsumeStatus(Enum):
    """Result of an atomic attempt to take one use from a ticket."""

    CONSUMED = "CONSUMED"
    EXHAUSTED = "EXHAUSTED"
    WRONG_CLASS = "WRONG_CLASS"


@dataclass(frozen=True)
class ConsumeResult:
    status: ConsumeStatus
    remaining_uses: int | None = None

    @property
    def consumed(self) -> bool:
        return self.status is ConsumeStatus.CONSUMED


@dataclass(frozen=True)
class ValidationOutcome:
    """Answer given to an access point presenting a ticket.

    Denials (exhausted, expired) are outcomes, not errors. ``holder_id`` is
    always populated so queueing or audit collaborators can act on it.
    """

    allowed: bool
    reason: str
    holder_id: HolderId
    ticket_id: TicketId
    ticket_class: TicketClass
    remaining_uses: int | None = None
    valid_until: datetime | None = None
