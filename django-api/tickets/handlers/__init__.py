from tickets.handlers.views import (
    HolderTicketListView,
    TicketDetailView,
    TicketListView,
    ValidateTicketView,
)

__all__ = [
    "TicketListView",
    "TicketDetailView",
    "HolderTicketListView",
    "ValidateTicketView",
]
