"""Django ORM implementation of the TicketStore.

Use consumption is a single conditional UPDATE, so concurrent validations of
the same ticket are serialized by the database row lock rather than by a
read-then-write in Python.
"""

import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F

from tickets.domain import ConsumeResult, ConsumeStatus, HolderId, Ticket, TicketClass, TicketId
from tickets.domain.errors import (
    DuplicateTicketIdError,
    StorageUnavailableError,
    TicketNotFoundError,
)
from tickets.models import Ticket as TicketRecord
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)


def _to_domain(record: TicketRecord) -> Ticket:
    return Ticket(
        id=TicketId(record.id),
        holder_id=HolderId(record.holder_id),
        ticket_class=TicketClass(record.ticket_class),
        issued_at=record.issued_at,
        valid_until=record.valid_until,
        remaining_uses=record.remaining_uses,
    )


class DjangoTicketStore(TicketStore):
    """Database-backed ticket store using Django ORM."""

    def put(self, ticket: Ticket) -> Ticket:
        try:
            with transaction.atomic():
                record = TicketRecord.objects.create(
                    id=ticket.id.value,
                    holder_id=ticket.holder_id.value,
                    ticket_class=ticket.ticket_class.value,
                    issued_at=ticket.issued_at,
                    valid_until=ticket.valid_until,
                    remaining_uses=ticket.remaining_uses,
                )
        except IntegrityError as e:
            raise DuplicateTicketIdError(ticket.id.value) from e
        except DatabaseError as e:
            logger.exception("Failed to insert ticket %s", ticket.id)
            raise StorageUnavailableError() from e
        return _to_domain(record)

    def get(self, ticket_id: TicketId) -> Ticket:
        try:
            record = TicketRecord.objects.get(pk=ticket_id.value)
        except TicketRecord.DoesNotExist:
            raise TicketNotFoundError(ticket_id.value) from None
        except DatabaseError as e:
            logger.exception("Failed to load ticket %s", ticket_id)
            raise StorageUnavailableError() from e
        return _to_domain(record)

    def list_all(self) -> list[Ticket]:
        try:
            return [_to_domain(r) for r in TicketRecord.objects.order_by("-issued_at")]
        except DatabaseError as e:
            logger.exception("Failed to list tickets")
            raise StorageUnavailableError() from e

    def list_by_holder(self, holder_id: HolderId) -> list[Ticket]:
        try:
            records = TicketRecord.objects.filter(holder_id=holder_id.value).order_by("-issued_at")
            return [_to_domain(r) for r in records]
        except DatabaseError as e:
            logger.exception("Failed to list tickets for holder %s", holder_id)
            raise StorageUnavailableError() from e

    def try_consume_use(self, ticket_id: TicketId) -> ConsumeResult:
        try:
            with transaction.atomic():
                updated = TicketRecord.objects.filter(
                    pk=ticket_id.value,
                    ticket_class=TicketClass.LIMITED.value,
                    remaining_uses__gt=0,
                ).update(remaining_uses=F("remaining_uses") - 1)

                # The row stays write-locked until commit, so this read sees
                # our own decrement and nobody else's.
                row = (
                    TicketRecord.objects.filter(pk=ticket_id.value)
                    .values("ticket_class", "remaining_uses")
                    .first()
                )
        except DatabaseError as e:
            logger.exception("Failed to consume a use of ticket %s", ticket_id)
            raise StorageUnavailableError() from e

        if row is None:
            raise TicketNotFoundError(ticket_id.value)
        if updated:
            return ConsumeResult(ConsumeStatus.CONSUMED, remaining_uses=row["remaining_uses"])
        if row["ticket_class"] != TicketClass.LIMITED.value:
            return ConsumeResult(ConsumeStatus.WRONG_CLASS)
        return ConsumeResult(ConsumeStatus.EXHAUSTED, remaining_uses=0)
