"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from django.core.cache import cache
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.cache import CACHE_TIMEOUT, EVENT_LIST_KEY, event_detail_key
from ticketing.domain import Identity
from ticketing.domain.errors import AccessDeniedError, DomainError, ErrorCode
from ticketing.handlers.authentication import CALLER_HEADER, CallerHeaderAuthentication
from ticketing.handlers.permissions import IsAdministrator
from ticketing.handlers.serializers import (
    EventCreateSerializer,
    EventSerializer,
    EventStatusSerializer,
    TicketLookupSerializer,
    TicketPurchaseSerializer,
    TicketSerializer,
)
from ticketing.services import EventService, get_event_service

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.EVENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TICKET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_SCHEDULE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMPTY_IDENTIFIER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_ENOUGH_FUNDS: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.PAYMENT_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_409_CONFLICT),
    )


class TicketingView(APIView):
    """Base view: caller identification, domain error mapping, unmatched calls."""

    authentication_classes = [CallerHeaderAuthentication]
    permission_classes = [IsAdministrator]
    administrator_methods: frozenset[str] = frozenset()

    def get_service(self) -> EventService:
        return get_event_service()

    def get_caller(self, request: Request) -> Identity:
        if not request.user or not request.user.is_authenticated:
            raise NotAuthenticated()
        return request.user.identity

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            logger.info(
                "Request rejected",
                extra={"code": exc.code.value, "path": self.request.path},
            )
            return error_response(exc)
        return super().handle_exception(exc)

    def permission_denied(self, request, message=None, code=None):
        if request.authenticators and not request.successful_authenticator:
            raise NotAuthenticated()
        logger.warning(
            "Administrator-only request rejected",
            extra={"caller": str(request.user), "path": request.path},
        )
        raise AccessDeniedError()

    def http_method_not_allowed(self, request, *args, **kwargs):
        self.get_service().log_unmatched_call(request.headers.get(CALLER_HEADER, ""), request.body)
        return Response({"logged": True}, status=status.HTTP_202_ACCEPTED)

    def options(self, request, *args, **kwargs):
        return self.http_method_not_allowed(request, *args, **kwargs)


class EventListView(TicketingView):
    """Handler for GET/POST /api/events"""

    administrator_methods = frozenset({"POST"})

    def get(self, request: Request) -> Response:
        data = cache.get(EVENT_LIST_KEY)
        if data is None:
            data = {"events": [event_id.value for event_id in self.get_service().list_events()]}
            cache.set(EVENT_LIST_KEY, data, CACHE_TIMEOUT)
        return Response(data)

    def post(self, request: Request) -> Response:
        caller = self.get_caller(request)
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event_id = self.get_service().create_event(caller, **serializer.validated_data)
        return Response({"event_id": event_id.value}, status=status.HTTP_201_CREATED)


class EventDetailView(TicketingView):
    """Handler for GET /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        key = event_detail_key(event_id)
        data = cache.get(key)
        if data is None:
            event = self.get_service().show_event_details(event_id)
            data = dict(EventSerializer(event).data)
            cache.set(key, data, CACHE_TIMEOUT)
        return Response(data)


class EventStatusView(TicketingView):
    """Handler for PATCH /api/events/{event_id}/status"""

    administrator_methods = frozenset({"PATCH"})

    def patch(self, request: Request, event_id: str) -> Response:
        caller = self.get_caller(request)
        serializer = EventStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.get_service().toggle_pause_event_registration(
            caller, event_id, serializer.validated_data["status"]
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


class ParticipantListView(TicketingView):
    """Handler for GET /api/events/{event_id}/participants"""

    administrator_methods = frozenset({"GET"})

    def get(self, request: Request, event_id: str) -> Response:
        tickets = self.get_service().list_event_participants(self.get_caller(request), event_id)
        return Response({"participants": TicketSerializer(tickets, many=True).data})


class TicketPurchaseView(TicketingView):
    """Handler for POST /api/events/{event_id}/tickets"""

    def post(self, request: Request, event_id: str) -> Response:
        caller = self.get_caller(request)
        serializer = TicketPurchaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = self.get_service().buy_ticket(caller, event_id, **serializer.validated_data)
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class MyTicketView(TicketingView):
    """Handler for GET/DELETE /api/events/{event_id}/tickets/me"""

    def get(self, request: Request, event_id: str) -> Response:
        lookup = self.get_service().get_user_ticket(event_id, self.get_caller(request))
        return Response(TicketLookupSerializer(lookup._asdict()).data)

    def delete(self, request: Request, event_id: str) -> Response:
        refunded = self.get_service().cancel_ticket(self.get_caller(request), event_id)
        return Response({"refunded_amount": refunded.amount})


class BalanceView(TicketingView):
    """Handler for GET /api/balance"""

    administrator_methods = frozenset({"GET"})

    def get(self, request: Request) -> Response:
        balance = self.get_service().get_contract_balance(self.get_caller(request))
        return Response({"balance": balance.amount})


class UnmatchedCallView(TicketingView):
    """Catch-all: every method on an unknown path is logged, not rejected."""
