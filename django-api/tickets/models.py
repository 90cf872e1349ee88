"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models
from django.db.models import Q

from tickets.domain.value_objects import HOLDER_ID_MAX_LENGTH, TICKET_ID_MAX_LENGTH


class TicketClass(models.TextChoices):
    LIMITED = "limited", "Limited"
    DAILY = "daily", "Daily"
    ANNUAL = "annual", "Annual"


class Ticket(models.Model):
    """Persistence model for tickets."""

    id = models.CharField(primary_key=True, max_length=TICKET_ID_MAX_LENGTH, editable=False)
    holder_id = models.CharField(max_length=HOLDER_ID_MAX_LENGTH)
    ticket_class = models.CharField(max_length=16, choices=TicketClass.choices)
    issued_at = models.DateTimeField()
    valid_until = models.DateTimeField(blank=True, null=True)
    remaining_uses = models.PositiveIntegerField(blank=True, null=True)

    class Meta:
        ordering = ["-issued_at"]
        indexes = [
            models.Index(fields=["holder_id"], name="tickets_tic_holder__idx"),
            models.Index(fields=["-issued_at"], name="tickets_tic_issued__idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(
                        ticket_class=TicketClass.LIMITED,
                        remaining_uses__isnull=False,
                        valid_until__isnull=True,
                    )
                    | Q(
                        ticket_class__in=[TicketClass.DAILY, TicketClass.ANNUAL],
                        remaining_uses__isnull=True,
                        valid_until__isnull=False,
                    )
                ),
                name="ticket_policy_fields_match_class",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.id} ({self.ticket_class})"
