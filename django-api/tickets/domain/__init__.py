from tickets.domain.models import ConsumeResult, ConsumeStatus, Ticket, ValidationOutcome
from tickets.domain.value_objects import HolderId, TicketClass, TicketId

__all__ = [
    "Ticket",
    "ValidationOutcome",
    "ConsumeResult",
    "ConsumeStatus",
    "TicketId",
    "HolderId",
    "TicketClass",
]
