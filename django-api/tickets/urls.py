from django.urls import path

from tickets.handlers import (
    HolderTicketListView,
    TicketDetailView,
    TicketListView,
    ValidateTicketView,
)

urlpatterns = [
    path("tickets", TicketListView.as_view(), name="ticket-list"),
    path(
        "tickets/holder/<str:holder_id>",
        HolderTicketListView.as_view(),
        name="holder-ticket-list",
    ),
    path("tickets/<str:ticket_id>", TicketDetailView.as_view(), name="ticket-detail"),
    path("validate/<str:ticket_id>", ValidateTicketView.as_view(), name="ticket-validate"),
]
