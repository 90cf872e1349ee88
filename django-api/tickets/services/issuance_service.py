"""Ticket issuance - all issuance business logic lives here.

Services:
- Depend only on interfaces (stores, identity verifier)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from tickets.domain import HolderId, Ticket, TicketClass, TicketId
from tickets.domain.errors import (
    DuplicateTicketIdError,
    InvalidIssuanceRequestError,
    IssuanceConflictError,
    UnknownHolderError,
    VerificationUnavailableError,
)
from tickets.domain.value_objects import MAX_QUOTA, is_ascii_digits
from tickets.identity.interfaces import IdentityServiceError, IdentityVerifier
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

MAX_QUOTA_DIGITS = len(str(MAX_QUOTA))

VALIDITY_PERIODS = {
    TicketClass.DAILY: timedelta(days=1),
    TicketClass.ANNUAL: timedelta(days=365),
}


def utc_now() -> datetime:
    return datetime.now(UTC)


def parse_quota(raw: object) -> int:
    """Parse a limited-ticket quota into a positive integer.

    Raises:
        InvalidIssuanceRequestError: If the value is missing, not an integer,
            not positive, or larger than the store can hold.
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidIssuanceRequestError("Limited tickets require a positive integer quota")
    if isinstance(raw, int):
        quota = raw
    elif isinstance(raw, str) and is_ascii_digits(raw.strip(), MAX_QUOTA_DIGITS):
        quota = int(raw.strip())
    else:
        raise InvalidIssuanceRequestError("Limited tickets require a positive integer quota")
    if not 0 < quota <= MAX_QUOTA:
        raise InvalidIssuanceRequestError(f"Quota must be between 1 and {MAX_QUOTA}")
    return quota


class TicketIssuer:
    """Creates tickets for verified holders."""

    def __init__(
        self,
        store: TicketStore,
        verifier: IdentityVerifier,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], TicketId] = TicketId.generate,
    ) -> None:
        self._store = store
        self._verifier = verifier
        self._clock = clock
        self._id_factory = id_factory

    def issue(self, holder_id: object, ticket_class: object, quota: object = None) -> Ticket:
        """Verify the holder and store a new ticket.

        Raises:
            InvalidIssuanceRequestError: If any input is missing or malformed.
            UnknownHolderError: If the identity service does not know the holder.
            VerificationUnavailableError: If the identity service gave no answer.
            IssuanceConflictError: If two generated IDs in a row collided.
        """
        holder, cls, uses = self._parse_request(holder_id, ticket_class, quota)

        try:
            known = self._verifier.exists(holder)
        except IdentityServiceError as e:
            logger.warning("Refusing to issue ticket, holder %s unverified: %s", holder, e)
            raise VerificationUnavailableError() from e
        if not known:
            logger.info("Refusing to issue ticket, unknown holder %s", holder)
            raise UnknownHolderError(holder.value)

        issued_at = self._clock()
        try:
            ticket = self._store.put(self._build(holder, cls, uses, issued_at))
        except DuplicateTicketIdError:
            logger.warning("Ticket ID collision, regenerating once")
            try:
                ticket = self._store.put(self._build(holder, cls, uses, issued_at))
            except DuplicateTicketIdError as e:
                raise IssuanceConflictError() from e

        logger.info("Issued %s ticket %s to holder %s", cls.value, ticket.id, holder)
        return ticket

    def _parse_request(
        self, holder_id: object, ticket_class: object, quota: object
    ) -> tuple[HolderId, TicketClass, int | None]:
        if holder_id is None or holder_id == "" or ticket_class is None or ticket_class == "":
            raise InvalidIssuanceRequestError("holder_id and ticket_class are required")
        try:
            holder = HolderId.from_raw(holder_id)
        except ValueError:
            raise InvalidIssuanceRequestError("holder_id must be a numeric identifier") from None
        if isinstance(ticket_class, str):
            ticket_class = ticket_class.strip().lower()
        try:
            cls = TicketClass(ticket_class)
        except ValueError:
            raise InvalidIssuanceRequestError(
                "ticket_class must be one of: limited, daily, annual"
            ) from None

        uses = parse_quota(quota) if cls is TicketClass.LIMITED else None
        return holder, cls, uses

    def _build(
        self, holder: HolderId, cls: TicketClass, uses: int | None, issued_at: datetime
    ) -> Ticket:
        if not cls.is_time_bounded:
            return Ticket(
                id=self._id_factory(),
                holder_id=holder,
                ticket_class=cls,
                issued_at=issued_at,
                remaining_uses=uses,
            )
        return Ticket(
            id=self._id_factory(),
            holder_id=holder,
            ticket_class=cls,
            issued_at=issued_at,
            valid_until=issued_at + VALIDITY_PERIODS[cls],
        )
