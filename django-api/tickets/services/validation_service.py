"""Ticket validation at access points."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from tickets.domain import ConsumeStatus, Ticket, TicketClass, TicketId, ValidationOutcome
from tickets.domain.errors import TicketNotFoundError
from tickets.services.issuance_service import utc_now
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

REASON_EXHAUSTED = "no remaining uses"
REASON_EXPIRED = "expired"


class TicketValidator:
    """Decides whether a presented ticket grants access right now.

    Limited tickets lose one use per granted access; daily and annual tickets
    are a pure function of their expiry and the current time.
    """

    def __init__(self, store: TicketStore, clock: Callable[[], datetime] = utc_now) -> None:
        self._store = store
        self._clock = clock

    def validate(self, ticket_id: str, now: datetime | None = None) -> ValidationOutcome:
        """Validate a ticket, consuming a use if it is a limited one.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
        """
        try:
            tid = TicketId(ticket_id)
        except ValueError:
            raise TicketNotFoundError(ticket_id) from None

        ticket = self._store.get(tid)
        if ticket.ticket_class is TicketClass.LIMITED:
            outcome = self._consume(ticket)
        else:
            outcome = self._check_expiry(ticket, now if now is not None else self._clock())

        logger.info(
            "Ticket %s %s: %s", tid, "allowed" if outcome.allowed else "denied", outcome.reason
        )
        return outcome

    def _consume(self, ticket: Ticket) -> ValidationOutcome:
        result = self._store.try_consume_use(ticket.id)
        if result.status is ConsumeStatus.WRONG_CLASS:
            # Ticket class is immutable, so the store disagreeing is corruption.
            raise RuntimeError(f"Store reports ticket {ticket.id} is not limited")

        if result.consumed:
            reason = f"access granted, {result.remaining_uses} uses remaining"
        else:
            reason = REASON_EXHAUSTED
        return ValidationOutcome(
            allowed=result.consumed,
            reason=reason,
            holder_id=ticket.holder_id,
            ticket_id=ticket.id,
            ticket_class=ticket.ticket_class,
            remaining_uses=result.remaining_uses,
        )

    def _check_expiry(self, ticket: Ticket, now: datetime) -> ValidationOutcome:
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)

        allowed = now <= ticket.valid_until
        return ValidationOutcome(
            allowed=allowed,
            reason=f"access granted ({ticket.ticket_class.value})" if allowed else REASON_EXPIRED,
            holder_id=ticket.holder_id,
            ticket_id=ticket.id,
            ticket_class=ticket.ticket_class,
            valid_until=ticket.valid_until,
        )
