"""Read-only ticket queries for the listing endpoints."""

from tickets.domain import HolderId, Ticket, TicketId
from tickets.domain.errors import InvalidHolderIdError, TicketNotFoundError
from tickets.stores.interfaces import TicketStore


class TicketService:
    """Service for ticket lookup operations."""

    def __init__(self, store: TicketStore) -> None:
        self._store = store

    def list_tickets(self) -> list[Ticket]:
        """Return all tickets, newest first."""
        return self._store.list_all()

    def list_tickets_for_holder(self, holder_id: str) -> list[Ticket]:
        """Return a holder's tickets; empty if they have none.

        Raises:
            InvalidHolderIdError: If the holder_id is not numeric.
        """
        try:
            holder = HolderId.from_raw(holder_id)
        except ValueError:
            raise InvalidHolderIdError() from None
        return self._store.list_by_holder(holder)

    def get_ticket(self, ticket_id: str) -> Ticket:
        """Return a ticket by ID.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
        """
        try:
            tid = TicketId(ticket_id)
        except ValueError:
            raise TicketNotFoundError(ticket_id) from None
        return self._store.get(tid)
