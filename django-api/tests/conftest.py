"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from rest_framework.test import APIClient

from tickets.domain import HolderId
from tickets.identity.interfaces import IdentityServiceError, IdentityVerifier
from tickets.stores.memory_store import InMemoryTicketStore

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class StubIdentityVerifier(IdentityVerifier):
    def __init__(self, known: set[str], error: Exception | None = None) -> None:
        self.known = known
        self.error = error
        self.calls: list[str] = []

    def exists(self, holder_id: HolderId) -> bool:
        self.calls.append(holder_id.value)
        if self.error is not None:
            raise self.error
        return holder_id.value in self.known


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def memory_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def verifier() -> StubIdentityVerifier:
    return StubIdentityVerifier(known={"111", "222"})


@pytest.fixture
def unavailable_verifier() -> StubIdentityVerifier:
    return StubIdentityVerifier(known=set(), error=IdentityServiceError("gateway down"))


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(T0)
