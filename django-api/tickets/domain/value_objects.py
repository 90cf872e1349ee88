"""Domain primitives that enforce validity at creation time."""

import secrets
import time
from dataclasses import dataclass
from enum import Enum
from typing import Self

TICKET_ID_MAX_LENGTH = 64
HOLDER_ID_MAX_LENGTH = 32

# Upper bound of the remaining_uses column (a 32-bit signed integer).
MAX_QUOTA = 2_147_483_647


def is_ascii_digits(value: str, max_length: int) -> bool:
    """True for 1..max_length ASCII digits; rejects other Unicode digits."""
    return 0 < len(value) <= max_length and value.isascii() and value.isdigit()


class TicketClass(Enum):
    """Access policy a ticket is issued under."""

    LIMITED = "limited"
    DAILY = "daily"
    ANNUAL = "annual"

    @property
    def is_time_bounded(self) -> bool:
        return self is not TicketClass.LIMITED


@dataclass(frozen=True)
class TicketId:
    """Unique identifier for a Ticket."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value) > TICKET_ID_MAX_LENGTH:
            raise ValueError("Ticket ID must be 1-64 characters")

    @classmethod
    def generate(cls) -> Self:
        """Return a fresh time-based ID with random suffix."""
        millis = time.time_ns() // 1_000_000
        return cls(value=f"TICKET-{millis}-{secrets.token_hex(6)}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HolderId:
    """Identifier of the person a ticket belongs to (a national ID number)."""

    value: str

    def __post_init__(self) -> None:
        if not is_ascii_digits(self.value, HOLDER_ID_MAX_LENGTH):
            raise ValueError("Holder ID must be a numeric string")

    @classmethod
    def from_raw(cls, value: object) -> Self:
        """Accept ints and numeric strings as sent by clients."""
        if isinstance(value, bool):
            raise ValueError("Holder ID must be a numeric string")
        return cls(value=str(value).strip())

    def __str__(self) -> str:
        return self.value
