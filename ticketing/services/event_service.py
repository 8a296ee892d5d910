"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores, payment rail)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Every mutation runs inside ``store.atomic()`` with the outbound value transfer
as its last step, so a failed transfer rolls the whole operation back.
Notifications are sent only after the operation has committed.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from django.utils import timezone
from django.utils.module_loading import import_string

from ticketing import notifications
from ticketing.conf import DEFAULTS, get_config
from ticketing.domain import (
    Capacity,
    Event,
    EventId,
    EventStatus,
    Identity,
    Money,
    Ticket,
    TicketLookup,
)
from ticketing.domain.errors import (
    EmptyIdentifierError,
    EventNotFoundError,
    EventPausedError,
    InvalidScheduleError,
    InvariantViolation,
    NoStatusChangeError,
    NotEnoughFundsError,
    OrganizerCannotBuyTicketError,
    PassedEventDateError,
    RefundWindowClosedError,
    SoldOutTicketsError,
    TicketAlreadyExistsError,
    TicketNotFoundError,
)
from ticketing.services.guards import (
    AccessGuard,
    ReentrancyGuard,
    administrator_only,
    non_reentrant,
    operation_guard,
)
from ticketing.services.payments import PaymentRail
from ticketing.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for the event and ticket lifecycle."""

    def __init__(
        self,
        store: EventStore,
        payment_rail: PaymentRail,
        administrator: Identity,
        refund_window: timedelta = DEFAULTS["REFUND_WINDOW"],
        minor_units_per_major: int = DEFAULTS["MINOR_UNITS_PER_MAJOR"],
        clock: Callable[[], datetime] = timezone.now,
        reentrancy_guard: ReentrancyGuard | None = None,
    ) -> None:
        self._store = store
        self._payment_rail = payment_rail
        self._access = AccessGuard(administrator)
        self._reentrancy_guard = reentrancy_guard or ReentrancyGuard()
        self._refund_window = refund_window
        self._minor_units = minor_units_per_major
        self._clock = clock

    @property
    def administrator(self) -> Identity:
        return self._access.administrator

    # Event catalog

    @administrator_only
    def create_event(
        self,
        caller: Identity,
        name: str,
        ticket_limit: int,
        price: Decimal | int | str,
        event_date: datetime,
    ) -> EventId:
        """Create an event and return its identifier.

        ``price`` is given in major currency units and stored in minor units.

        Raises:
            AccessDeniedError: If the caller is not the administrator.
            InvalidScheduleError: If ``event_date`` is not in the future.
            ValueError: If the limit or price is negative, or ``event_date``
                is naive.
        """
        if timezone.is_naive(event_date):
            raise ValueError("event_date must be timezone-aware")
        if event_date <= self._clock():
            raise InvalidScheduleError()
        limit = Capacity(ticket_limit)
        amount = Money.from_major(price, self._minor_units)

        with self._store.atomic():
            event_id = self._store.next_event_id()
            event = Event(
                id=event_id,
                creator=caller,
                name=name,
                ticket_limit=limit,
                price=amount,
                event_date=event_date,
                status=EventStatus.ACTIVE,
            )
            self._store.add_event(event)

        logger.info("Event created", extra={"event_id": event_id.value, "event_name": name})
        notifications.event_created.send(
            sender=self.__class__,
            event_id=event.id,
            name=event.name,
            creator=event.creator,
            event_date=event.event_date,
            status=event.status,
        )
        return event_id

    def list_events(self) -> list[EventId]:
        """Return every event ID in creation order."""
        return self._store.list_event_ids()

    def show_event_details(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(EventId.from_string(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    @administrator_only
    def toggle_pause_event_registration(
        self, caller: Identity, event_id: str, new_status: EventStatus | int
    ) -> None:
        """Set an event's registration status.

        Raises:
            AccessDeniedError: If the caller is not the administrator.
            EventNotFoundError: If the event does not exist.
            NoStatusChangeError: If the event already has ``new_status``.
        """
        event = self.show_event_details(event_id)
        status = EventStatus(new_status)
        if event.status == status:
            raise NoStatusChangeError()

        with self._store.atomic():
            self._store.set_status(event.id, status)

        logger.info(
            "Event status updated",
            extra={"event_id": event.id.value, "status": status.name},
        )
        notifications.event_status_updated.send(
            sender=self.__class__, event_id=event.id, status=status
        )

    @administrator_only
    def list_event_participants(self, caller: Identity, event_id: str) -> list[Ticket]:
        """Return an event's tickets; empty for an unknown event.

        Raises:
            AccessDeniedError: If the caller is not the administrator.
            EmptyIdentifierError: If ``event_id`` is empty.
        """
        key = EventId.from_string(event_id)
        if key.is_empty():
            raise EmptyIdentifierError()
        return self._store.list_tickets(key)

    # Tickets

    def get_user_ticket(self, event_id: str, caller: Identity) -> TicketLookup:
        found = self._store.find_ticket(EventId.from_string(event_id), caller)
        if found is None:
            return TicketLookup.missing()
        index, ticket = found
        return TicketLookup(found=True, ticket=ticket, index=index)

    @non_reentrant
    def buy_ticket(
        self,
        caller: Identity,
        event_id: str,
        fname: str,
        lname: str,
        email: str,
        payment_value: Money | int,
    ) -> Ticket:
        """Buy the caller a ticket, refunding any overpayment.

        ``payment_value`` is in minor currency units.

        Raises:
            EventNotFoundError, OrganizerCannotBuyTicketError,
            TicketAlreadyExistsError, PassedEventDateError, EventPausedError,
            SoldOutTicketsError, NotEnoughFundsError: checked in that order.
            PaymentFailedError: If the overpayment refund fails; nothing is kept.
            ReentrantCallError: If called while a guarded operation runs.
        """
        payment = payment_value if isinstance(payment_value, Money) else Money(payment_value)

        with self._store.atomic():
            event = self._store.lock_event(EventId.from_string(event_id))
            if event is None:
                raise EventNotFoundError(event_id)
            if caller == event.creator:
                raise OrganizerCannotBuyTicketError()
            if self._store.find_ticket(event.id, caller) is not None:
                raise TicketAlreadyExistsError()
            now = self._clock()
            if now >= event.event_date:
                raise PassedEventDateError()
            if event.status == EventStatus.PAUSED:
                raise EventPausedError()
            sold = self._store.count_tickets(event.id)
            if sold >= event.ticket_limit.value:
                raise SoldOutTicketsError()
            if payment < event.price:
                raise NotEnoughFundsError(required=event.price.amount, provided=payment.amount)

            ticket = Ticket(
                owner=caller,
                fname=fname,
                lname=lname,
                email=email,
                paid_price=event.price,
                purchased=now,
            )
            excess = payment - event.price

            self._store.credit(payment)
            self._store.append_ticket(event.id, ticket)
            if self._store.count_tickets(event.id) != sold + 1:
                raise InvariantViolation("Ticket collection did not grow by exactly one")
            if excess.amount:
                self._store.debit(excess)
                self._payment_rail.transfer(caller, excess)

        logger.info(
            "Ticket purchased",
            extra={
                "event_id": event.id.value,
                "buyer": caller.value,
                "price": event.price.amount,
                "refunded": excess.amount,
            },
        )
        notifications.ticket_purchased.send(
            sender=self.__class__, buyer=caller, event_id=event.id, price=event.price
        )
        return ticket

    @non_reentrant
    def cancel_ticket(self, caller: Identity, event_id: str) -> Money:
        """Cancel the caller's ticket and refund what they paid.

        Raises:
            TicketNotFoundError: If the caller holds no ticket for the event.
            RefundWindowClosedError: If the refund deadline has been reached.
            PaymentFailedError: If the refund fails; the ticket is kept.
            ReentrantCallError: If called while a guarded operation runs.
        """
        with self._store.atomic():
            event = self._store.lock_event(EventId.from_string(event_id))
            found = self._store.find_ticket(event.id, caller) if event is not None else None
            if found is None:
                raise TicketNotFoundError()
            refund_deadline = event.event_date - self._refund_window
            if self._clock() >= refund_deadline:
                raise RefundWindowClosedError()

            index, ticket = found
            refund = ticket.paid_price
            before = self._store.count_tickets(event.id)
            self._store.remove_ticket(event.id, index)
            if self._store.count_tickets(event.id) != before - 1:
                raise InvariantViolation("Ticket collection did not shrink by exactly one")
            self._store.debit(refund)
            self._payment_rail.transfer(caller, refund)

        logger.info(
            "Ticket canceled",
            extra={"event_id": event.id.value, "owner": caller.value, "refunded": refund.amount},
        )
        notifications.ticket_canceled.send(
            sender=self.__class__, owner=caller, event_id=event.id, refunded_amount=refund
        )
        return refund

    # Accounting

    @administrator_only
    def get_contract_balance(self, caller: Identity) -> Money:
        """Return payments received minus refunds issued."""
        return self._store.get_balance()

    def log_unmatched_call(self, caller: str, payload: bytes | str) -> None:
        """Record a call that matched no operation. Never raises."""
        raw = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload
        logger.info("Unmatched call", extra={"caller": caller, "payload": raw})
        responses = notifications.unmatched_call.send_robust(
            sender=self.__class__, caller=caller, payload=raw
        )
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "Unmatched call receiver failed",
                    exc_info=response,
                    extra={"receiver": getattr(receiver, "__qualname__", repr(receiver))},
                )


def get_event_service() -> EventService:
    """Build a service from settings, backed by the database store."""
    from ticketing.stores.django_store import DjangoEventStore

    config = get_config()
    payment_rail = import_string(config.payment_rail)()
    return EventService(
        store=DjangoEventStore(),
        payment_rail=payment_rail,
        administrator=config.administrator,
        refund_window=config.refund_window,
        minor_units_per_major=config.minor_units_per_major,
        reentrancy_guard=operation_guard,
    )
