"""In-process implementation of the TicketStore.

Used as a test double and for single-process deployments. Each ticket ID
has its own lock, held across the read-decide-write of a use consumption.
"""

import threading
from dataclasses import replace

from tickets.domain import ConsumeResult, ConsumeStatus, HolderId, Ticket, TicketClass, TicketId
from tickets.domain.errors import DuplicateTicketIdError, TicketNotFoundError
from tickets.stores.interfaces import TicketStore


class InMemoryTicketStore(TicketStore):
    """Thread-safe dict-backed ticket store."""

    def __init__(self) -> None:
        self._tickets: dict[TicketId, Ticket] = {}
        self._ticket_locks: dict[TicketId, threading.Lock] = {}
        self._guard = threading.Lock()

    def put(self, ticket: Ticket) -> Ticket:
        with self._guard:
            if ticket.id in self._tickets:
                raise DuplicateTicketIdError(ticket.id.value)
            self._tickets[ticket.id] = ticket
            self._ticket_locks[ticket.id] = threading.Lock()
        return ticket

    def get(self, ticket_id: TicketId) -> Ticket:
        with self._guard:
            ticket = self._tickets.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id.value)
        return ticket

    def list_all(self) -> list[Ticket]:
        with self._guard:
            tickets = list(self._tickets.values())
        return sorted(tickets, key=lambda t: t.issued_at, reverse=True)

    def list_by_holder(self, holder_id: HolderId) -> list[Ticket]:
        return [t for t in self.list_all() if t.holder_id == holder_id]

    def try_consume_use(self, ticket_id: TicketId) -> ConsumeResult:
        with self._guard:
            lock = self._ticket_locks.get(ticket_id)
        if lock is None:
            raise TicketNotFoundError(ticket_id.value)

        with lock:
            ticket = self._tickets[ticket_id]
            if ticket.ticket_class is not TicketClass.LIMITED:
                return ConsumeResult(ConsumeStatus.WRONG_CLASS)
            if ticket.remaining_uses == 0:
                return ConsumeResult(ConsumeStatus.EXHAUSTED, remaining_uses=0)

            updated = replace(ticket, remaining_uses=ticket.remaining_uses - 1)
            with self._guard:
                self._tickets[ticket_id] = updated
            return ConsumeResult(ConsumeStatus.CONSUMED, remaining_uses=updated.remaining_uses)
