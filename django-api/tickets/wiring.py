"""Builds services with their concrete collaborators from Django settings."""

from functools import cache

from django.conf import settings

from tickets.identity.http_verifier import HttpIdentityVerifier
from tickets.identity.interfaces import IdentityVerifier
from tickets.services.issuance_service import TicketIssuer
from tickets.services.ticket_service import TicketService
from tickets.services.validation_service import TicketValidator
from tickets.stores.django_store import DjangoTicketStore
from tickets.stores.interfaces import TicketStore


def build_ticket_store() -> TicketStore:
    return DjangoTicketStore()


@cache
def build_identity_verifier() -> IdentityVerifier:
    return HttpIdentityVerifier(
        base_url=settings.IDENTITY_SERVICE_URL,
        timeout=settings.IDENTITY_SERVICE_TIMEOUT,
        lookup_path=settings.IDENTITY_LOOKUP_PATH,
    )


def build_issuer() -> TicketIssuer:
    return TicketIssuer(store=build_ticket_store(), verifier=build_identity_verifier())


def build_validator() -> TicketValidator:
    return TicketValidator(store=build_ticket_store())


def build_ticket_service() -> TicketService:
    return TicketService(store=build_ticket_store())
