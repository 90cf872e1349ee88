"""Unit tests for TicketValidator.

Run with: pytest tests/test_validation_service.py -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from tickets.domain.errors import TicketNotFoundError
from tickets.services.issuance_service import TicketIssuer
from tickets.services.validation_service import REASON_EXHAUSTED, REASON_EXPIRED, TicketValidator


@pytest.fixture
def issuer(memory_store, verifier, clock) -> TicketIssuer:
    return TicketIssuer(store=memory_store, verifier=verifier, clock=clock)


@pytest.fixture
def validator(memory_store, clock) -> TicketValidator:
    return TicketValidator(store=memory_store, clock=clock)


class TestLimitedTickets:
    def test_single_use_ticket(self, issuer, validator):
        ticket = issuer.issue("111", "limited", 1)

        first = validator.validate(ticket.id.value)
        second = validator.validate(ticket.id.value)

        assert first.allowed is True
        assert first.remaining_uses == 0
        assert second.allowed is False
        assert second.reason == REASON_EXHAUSTED
        assert second.holder_id.value == "111"

    def test_exactly_quota_validations_succeed(self, issuer, validator, memory_store):
        ticket = issuer.issue("111", "limited", 3)

        outcomes = [validator.validate(ticket.id.value) for _ in range(5)]

        assert [o.allowed for o in outcomes] == [True, True, True, False, False]
        assert [o.remaining_uses for o in outcomes[:3]] == [2, 1, 0]
        assert "2 uses remaining" in outcomes[0].reason
        assert memory_store.get(ticket.id).remaining_uses == 0

    def test_limited_ticket_has_no_time_ceiling(self, issuer, validator, clock):
        ticket = issuer.issue("111", "limited", 1)
        outcome = validator.validate(ticket.id.value, now=clock.now + timedelta(days=3650))
        assert outcome.allowed is True

    def test_concurrent_validations_of_last_use(self, issuer, validator):
        ticket = issuer.issue("111", "limited", 1)
        barrier = threading.Barrier(10)

        def attempt(_):
            barrier.wait()
            return validator.validate(ticket.id.value)

        with ThreadPoolExecutor(max_workers=10) as pool:
            outcomes = list(pool.map(attempt, range(10)))

        assert sum(o.allowed for o in outcomes) == 1
        assert sum(o.reason == REASON_EXHAUSTED for o in outcomes) == 9

    def test_concurrent_validations_match_quota(self, issuer, validator):
        ticket = issuer.issue("111", "limited", 8)

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(lambda _: validator.validate(ticket.id.value), range(20)))

        assert sum(o.allowed for o in outcomes) == 8
        assert sorted(o.remaining_uses for o in outcomes if o.allowed) == list(range(8))


class TestTimeBoundedTickets:
    def test_daily_ticket_scenario(self, issuer, validator, memory_store, clock):
        ticket = issuer.issue("111", "daily")

        during = validator.validate(ticket.id.value, now=clock.now + timedelta(hours=23))
        after = validator.validate(ticket.id.value, now=clock.now + timedelta(hours=25))

        assert during.allowed is True
        assert after.allowed is False
        assert after.reason == REASON_EXPIRED
        assert after.holder_id.value == "111"
        assert memory_store.get(ticket.id) == ticket

    def test_daily_ticket_allowed_at_exact_expiry(self, issuer, validator, clock):
        ticket = issuer.issue("111", "daily")
        assert validator.validate(ticket.id.value, now=ticket.valid_until).allowed is True
        later = ticket.valid_until + timedelta(microseconds=1)
        assert validator.validate(ticket.id.value, now=later).allowed is False

    def test_annual_ticket(self, issuer, validator, clock):
        ticket = issuer.issue("222", "annual")

        assert validator.validate(ticket.id.value, now=clock.now + timedelta(days=364)).allowed
        assert not validator.validate(ticket.id.value, now=clock.now + timedelta(days=366)).allowed

    def test_uses_clock_when_now_omitted(self, issuer, validator, clock):
        ticket = issuer.issue("111", "daily")
        assert validator.validate(ticket.id.value).allowed is True

        clock.advance(timedelta(days=2))
        assert validator.validate(ticket.id.value).reason == REASON_EXPIRED

    def test_naive_now_treated_as_utc(self, issuer, validator, clock):
        ticket = issuer.issue("111", "daily")
        naive = (clock.now + timedelta(hours=25)).replace(tzinfo=None)
        assert validator.validate(ticket.id.value, now=naive).allowed is False

    def test_repeated_validation_never_mutates(self, issuer, validator, memory_store, clock):
        ticket = issuer.issue("111", "annual")
        for _ in range(5):
            validator.validate(ticket.id.value)
        assert memory_store.get(ticket.id) == ticket


class TestUnknownTickets:
    def test_unknown_id_raises_not_found(self, validator):
        with pytest.raises(TicketNotFoundError):
            validator.validate("TICKET-0-missing")

    def test_empty_id_raises_not_found(self, validator):
        with pytest.raises(TicketNotFoundError):
            validator.validate("")
