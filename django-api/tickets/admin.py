from django.contrib import admin

from tickets.models import Ticket


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    """Read-only view of the ticket audit trail.

    Tickets are created by the issuance endpoint only; deletion is the one
    administrative action allowed.
    """

    list_display = ["id", "holder_id", "ticket_class", "issued_at", "valid_until", "remaining_uses"]
    list_filter = ["ticket_class"]
    search_fields = ["id", "holder_id"]
    readonly_fields = ["id", "holder_id", "ticket_class", "issued_at", "valid_until", "remaining_uses"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False
