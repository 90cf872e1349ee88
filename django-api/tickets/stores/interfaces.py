"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from tickets.domain import ConsumeResult, HolderId, Ticket, TicketId


class TicketStore(ABC):
    """Interface for ticket persistence operations.

    The store is the only shared mutable resource and owns per-ticket
    atomicity; callers never lock around it.
    """

    @abstractmethod
    def put(self, ticket: Ticket) -> Ticket:
        """Insert a new ticket.

        Raises:
            DuplicateTicketIdError: If a ticket with the same ID exists.
        """
        ...

    @abstractmethod
    def get(self, ticket_id: TicketId) -> Ticket:
        """Return a ticket by ID.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
        """
        ...

    @abstractmethod
    def list_all(self) -> list[Ticket]:
        """Return all tickets ordered by issued_at descending."""
        ...

    @abstractmethod
    def list_by_holder(self, holder_id: HolderId) -> list[Ticket]:
        """Return all tickets of a holder, or an empty list."""
        ...

    @abstractmethod
    def try_consume_use(self, ticket_id: TicketId) -> ConsumeResult:
        """Atomically take one use from a limited ticket.

        Calls for the same ID are serialized: each caller sees a distinct
        post-decrement count and at most one caller takes the last use.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
        """
        ...
