"""Unit tests for TicketIssuer.

These test input validation, identity verification and class policy.
Run with: pytest tests/test_issuance_service.py -v
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from tickets.domain import TicketClass, TicketId
from tickets.domain.errors import (
    InvalidIssuanceRequestError,
    IssuanceConflictError,
    UnknownHolderError,
    VerificationUnavailableError,
)
from tickets.services.issuance_service import TicketIssuer, parse_quota
from tickets.stores.memory_store import InMemoryTicketStore


@pytest.fixture
def issuer(memory_store, verifier, clock) -> TicketIssuer:
    return TicketIssuer(store=memory_store, verifier=verifier, clock=clock)


class TestClassPolicy:
    """Each class gets the right policy fields."""

    def test_limited_ticket_gets_quota(self, issuer, memory_store, clock):
        ticket = issuer.issue("111", "limited", 5)

        assert ticket.ticket_class is TicketClass.LIMITED
        assert ticket.remaining_uses == 5
        assert ticket.valid_until is None
        assert ticket.issued_at == clock.now
        assert memory_store.get(ticket.id) == ticket

    def test_daily_ticket_valid_for_one_day(self, issuer, clock):
        ticket = issuer.issue("111", "daily")

        assert ticket.valid_until == clock.now + timedelta(days=1)
        assert ticket.remaining_uses is None

    def test_annual_ticket_valid_for_365_days(self, issuer, clock):
        ticket = issuer.issue("111", "annual")

        assert ticket.valid_until == clock.now + timedelta(days=365)
        assert ticket.remaining_uses is None

    def test_quota_ignored_for_time_bounded_ticket(self, issuer):
        assert issuer.issue("111", "daily", 3).remaining_uses is None

    def test_numeric_holder_and_string_quota_accepted(self, issuer):
        ticket = issuer.issue(111, "LIMITED", "2")
        assert ticket.holder_id.value == "111"
        assert ticket.remaining_uses == 2


class TestInputValidation:
    """Bad requests fail before any side effect."""

    @pytest.mark.parametrize(
        "holder_id, ticket_class",
        [(None, "daily"), ("", "daily"), ("111", None), ("111", ""), ("abc", "daily"), ("111", "weekly")],
    )
    def test_invalid_holder_or_class_rejected(self, issuer, memory_store, verifier, holder_id, ticket_class):
        with pytest.raises(InvalidIssuanceRequestError):
            issuer.issue(holder_id, ticket_class)
        assert verifier.calls == []
        assert memory_store.list_all() == []

    @pytest.mark.parametrize(
        "quota",
        [None, 0, -1, "0", "abc", 2.5, True, "", "\u00b2", "9" * 5000, 10**20, 2_147_483_648, "2147483648"],
    )
    def test_limited_requires_positive_quota(self, issuer, memory_store, quota):
        with pytest.raises(InvalidIssuanceRequestError):
            issuer.issue("111", "limited", quota)
        assert memory_store.list_all() == []

    def test_parse_quota_accepts_padded_digits(self):
        assert parse_quota(" 7 ") == 7

    def test_parse_quota_accepts_column_maximum(self):
        assert parse_quota(2_147_483_647) == 2_147_483_647
        assert parse_quota("2147483647") == 2_147_483_647

    def test_non_ascii_digit_holder_never_reaches_verifier(self, issuer, verifier):
        with pytest.raises(InvalidIssuanceRequestError):
            issuer.issue("\u00b2\u00b3", "daily")
        assert verifier.calls == []


class TestIdentityVerification:
    def test_unknown_holder_creates_nothing(self, issuer, memory_store):
        with pytest.raises(UnknownHolderError):
            issuer.issue("999", "daily")
        assert memory_store.list_all() == []

    def test_unavailable_verifier_fails_closed(self, memory_store, unavailable_verifier, clock):
        issuer = TicketIssuer(store=memory_store, verifier=unavailable_verifier, clock=clock)

        with pytest.raises(VerificationUnavailableError):
            issuer.issue("111", "annual")
        assert unavailable_verifier.calls == ["111"]
        assert memory_store.list_all() == []


class TestIdGeneration:
    def test_collision_retried_once(self, memory_store, verifier, clock):
        ids = iter([TicketId("T-dup"), TicketId("T-dup"), TicketId("T-fresh")])
        issuer = TicketIssuer(memory_store, verifier, clock=clock, id_factory=lambda: next(ids))

        issuer.issue("111", "daily")
        ticket = issuer.issue("111", "daily")

        assert ticket.id == TicketId("T-fresh")

    def test_second_collision_is_conflict(self, memory_store, verifier, clock):
        issuer = TicketIssuer(memory_store, verifier, clock=clock, id_factory=lambda: TicketId("T-dup"))
        issuer.issue("111", "daily")

        with pytest.raises(IssuanceConflictError):
            issuer.issue("222", "daily")
        assert len(memory_store.list_all()) == 1

    def test_concurrent_issuance_yields_unique_ids(self, verifier):
        store = InMemoryTicketStore()
        issuer = TicketIssuer(store=store, verifier=verifier)

        with ThreadPoolExecutor(max_workers=8) as pool:
            tickets = list(pool.map(lambda _: issuer.issue("111", "limited", 1), range(200)))

        assert len({t.id for t in tickets}) == 200
        assert len(store.list_all()) == 200
