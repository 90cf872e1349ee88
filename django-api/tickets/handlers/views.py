"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from tickets import wiring
from tickets.domain.errors import DomainError, ErrorCode, TicketNotFoundError
from tickets.handlers.serializers import (
    IssueTicketRequestSerializer,
    TicketSerializer,
    ValidationOutcomeSerializer,
)

ERROR_STATUS = {
    ErrorCode.INVALID_ISSUANCE_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_HOLDER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNKNOWN_HOLDER: status.HTTP_404_NOT_FOUND,
    ErrorCode.VERIFICATION_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.ISSUANCE_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_TICKET_ID: status.HTTP_409_CONFLICT,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError, **extra) -> Response:
    body = {"code": error.code.value, "message": error.message, **extra}
    return Response(body, status=ERROR_STATUS[error.code])


class TicketListView(APIView):
    """Handler for GET and POST /api/tickets"""

    def get(self, request: Request) -> Response:
        try:
            tickets = wiring.build_ticket_service().list_tickets()
        except DomainError as e:
            return error_response(e)
        return Response(TicketSerializer(tickets, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = IssueTicketRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"code": ErrorCode.INVALID_ISSUANCE_REQUEST.value, "message": "Malformed request body"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        data = serializer.validated_data
        try:
            ticket = wiring.build_issuer().issue(
                holder_id=data.get("holder_id"),
                ticket_class=data.get("ticket_class"),
                quota=data.get("quota"),
            )
        except DomainError as e:
            return error_response(e)
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketDetailView(APIView):
    """Handler for GET /api/tickets/{ticket_id}"""

    def get(self, request: Request, ticket_id: str) -> Response:
        try:
            ticket = wiring.build_ticket_service().get_ticket(ticket_id)
        except DomainError as e:
            return error_response(e)
        return Response(TicketSerializer(ticket).data)


class HolderTicketListView(APIView):
    """Handler for GET /api/tickets/holder/{holder_id}"""

    def get(self, request: Request, holder_id: str) -> Response:
        try:
            tickets = wiring.build_ticket_service().list_tickets_for_holder(holder_id)
        except DomainError as e:
            return error_response(e)
        return Response(TicketSerializer(tickets, many=True).data)


class ValidateTicketView(APIView):
    """Handler for POST /api/validate/{ticket_id}"""

    def post(self, request: Request, ticket_id: str) -> Response:
        try:
            outcome = wiring.build_validator().validate(ticket_id)
        except TicketNotFoundError as e:
            return error_response(e, allowed=False)
        except DomainError as e:
            return error_response(e)

        code = status.HTTP_200_OK if outcome.allowed else status.HTTP_403_FORBIDDEN
        return Response(ValidationOutcomeSerializer(outcome).data, status=code)
