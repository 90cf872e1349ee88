"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class IssueTicketRequestSerializer(serializers.Serializer):
    """Raw issuance input; business rules are enforced by TicketIssuer."""

    holder_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    ticket_class = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    quota = serializers.JSONField(required=False, allow_null=True)


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.CharField(source="id.value")
    holder_id = serializers.CharField(source="holder_id.value")
    ticket_class = serializers.CharField(source="ticket_class.value")
    issued_at = serializers.DateTimeField()
    valid_until = serializers.DateTimeField(allow_null=True)
    remaining_uses = serializers.IntegerField(allow_null=True)


class ValidationOutcomeSerializer(serializers.Serializer):
    """Serializer for ValidationOutcome domain model."""

    allowed = serializers.BooleanField()
    reason = serializers.CharField()
    holder_id = serializers.CharField(source="holder_id.value")
    ticket_id = serializers.CharField(source="ticket_id.value")
    ticket_class = serializers.CharField(source="ticket_class.value")
    remaining_uses = serializers.IntegerField(allow_null=True)
    valid_until = serializers.DateTimeField(allow_null=True)
