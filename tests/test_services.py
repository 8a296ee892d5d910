"""Unit tests for EventService.

These test the event and ticket lifecycle, error ordering and value transfers
against the in-memory store.
Run with: pytest tests/test_services.py -v
"""

from datetime import timedelta

import pytest

from ticketing import notifications
from ticketing.domain import EventId, EventStatus, Identity, Money
from ticketing.domain.errors import (
    AccessDeniedError,
    EmptyIdentifierError,
    ErrorCode,
    EventNotFoundError,
    EventPausedError,
    InvalidScheduleError,
    NoStatusChangeError,
    NotEnoughFundsError,
    OrganizerCannotBuyTicketError,
    PassedEventDateError,
    RefundWindowClosedError,
    SoldOutTicketsError,
    TicketAlreadyExistsError,
    TicketNotFoundError,
)
from tests.helpers import ADMIN, ALICE, BOB

FNAME, LNAME, EMAIL = "John", "Connor", "john.connor@terminator.io"


def buy(service, caller, event_id, payment=200):
    return service.buy_ticket(caller, event_id, FNAME, LNAME, EMAIL, payment)


@pytest.fixture
def received():
    """Collect notifications sent during a test."""
    captured = []

    def make_receiver(name):
        def receiver(sender, **kwargs):
            captured.append((name, kwargs))
        return receiver

    receivers = {
        name: make_receiver(name)
        for name in [
            "event_created",
            "event_status_updated",
            "ticket_purchased",
            "ticket_canceled",
            "unmatched_call",
        ]
    }
    for name, receiver in receivers.items():
        getattr(notifications, name).connect(receiver)
    yield captured
    for name, receiver in receivers.items():
        getattr(notifications, name).disconnect(receiver)


class TestAdministratorOnly:
    """Non-administrators are rejected before any other validation."""

    def test_create_event_denied(self, service, store, event_date):
        with pytest.raises(AccessDeniedError):
            service.create_event(ALICE, "Event-1", 1, 1, event_date)
        assert service.list_events() == []

    def test_create_event_denied_before_schedule_check(self, service, clock):
        with pytest.raises(AccessDeniedError):
            service.create_event(ALICE, "Event-1", 1, 1, clock.now - timedelta(days=1))

    def test_toggle_pause_denied(self, service, event_id):
        with pytest.raises(AccessDeniedError):
            service.toggle_pause_event_registration(ALICE, event_id, EventStatus.PAUSED)
        assert service.show_event_details(event_id).status == EventStatus.ACTIVE

    def test_list_participants_denied(self, service, event_id):
        buy(service, ALICE, event_id)
        with pytest.raises(AccessDeniedError):
            service.list_event_participants(ALICE, event_id)

    def test_list_participants_denied_before_empty_identifier(self, service):
        with pytest.raises(AccessDeniedError):
            service.list_event_participants(ALICE, "")

    def test_balance_denied(self, service):
        with pytest.raises(AccessDeniedError) as exc_info:
            service.get_contract_balance(ALICE)
        assert exc_info.value.code == ErrorCode.ACCESS_DENIED


class TestCreateEvent:
    def test_past_date_rejected(self, service, clock):
        with pytest.raises(InvalidScheduleError):
            service.create_event(ADMIN, "Event-1", 1, 1, clock.now - timedelta(seconds=1))

    def test_naive_date_rejected(self, service, event_date):
        with pytest.raises(ValueError):
            service.create_event(ADMIN, "Event-1", 1, 1, event_date.replace(tzinfo=None))
        assert service.list_events() == []

    def test_current_time_rejected(self, service, clock, store):
        with pytest.raises(InvalidScheduleError):
            service.create_event(ADMIN, "Event-1", 1, 1, clock.now)
        assert store.next_event_id() == EventId("ev1")

    def test_negative_price_does_not_consume_identifier(self, service, event_date):
        with pytest.raises(ValueError):
            service.create_event(ADMIN, "Event-1", 1, -1, event_date)
        assert service.create_event(ADMIN, "Event-1", 1, 1, event_date) == EventId("ev1")

    def test_identifiers_are_sequential(self, service, event_date):
        first = service.create_event(ADMIN, "Event-1", 1, 1, event_date)
        second = service.create_event(ADMIN, "Event-2", 1, 1, event_date)
        assert (first.value, second.value) == ("ev1", "ev2")

    def test_sends_event_created(self, service, event_date, received):
        service.create_event(ADMIN, "Event-1", 1, 1, event_date)
        name, payload = received[0]
        assert name == "event_created"
        assert payload["event_id"] == EventId("ev1")
        assert payload["name"] == "Event-1"
        assert payload["creator"] == ADMIN
        assert payload["event_date"] == event_date
        assert payload["status"] == EventStatus.ACTIVE


class TestListEvents:
    def test_empty_catalog(self, service):
        assert service.list_events() == []

    def test_one_event_is_ev1(self, service, event_date):
        service.create_event(ADMIN, "Event-1", 1, 1, event_date)
        assert service.list_events() == [EventId("ev1")]

    def test_insertion_order(self, service, event_date):
        for name in ["a", "b", "c"]:
            service.create_event(ADMIN, name, 1, 1, event_date)
        assert [event_id.value for event_id in service.list_events()] == ["ev1", "ev2", "ev3"]


class TestShowEventDetails:
    def test_unknown_event(self, service):
        with pytest.raises(EventNotFoundError) as exc_info:
            service.show_event_details("")
        assert exc_info.value.event_id == ""

    def test_returns_created_fields(self, service, event_date):
        service.create_event(ADMIN, "Event-1", 1, 1, event_date)
        event = service.show_event_details("ev1")
        assert event.id == EventId("ev1")
        assert event.creator == ADMIN
        assert event.name == "Event-1"
        assert event.ticket_limit.value == 1
        assert event.price == Money(100)
        assert event.event_date == event_date
        assert event.status == EventStatus.ACTIVE


class TestTogglePause:
    def test_unknown_event(self, service):
        with pytest.raises(EventNotFoundError):
            service.toggle_pause_event_registration(ADMIN, "wrong-id", EventStatus.PAUSED)

    def test_same_status_rejected(self, service, event_id):
        with pytest.raises(NoStatusChangeError):
            service.toggle_pause_event_registration(ADMIN, event_id, EventStatus.ACTIVE)

    def test_pause_and_resume(self, service, event_id, received):
        service.toggle_pause_event_registration(ADMIN, event_id, 1)
        assert service.show_event_details(event_id).status == EventStatus.PAUSED
        service.toggle_pause_event_registration(ADMIN, event_id, EventStatus.ACTIVE)
        assert service.show_event_details(event_id).status == EventStatus.ACTIVE
        assert [name for name, _ in received] == ["event_status_updated", "event_status_updated"]


class TestListEventParticipants:
    def test_empty_identifier(self, service):
        with pytest.raises(EmptyIdentifierError):
            service.list_event_participants(ADMIN, "")

    def test_unknown_event_is_empty(self, service):
        assert service.list_event_participants(ADMIN, "ev99") == []

    def test_returns_tickets(self, service, event_id):
        buy(service, ALICE, event_id)
        participants = service.list_event_participants(ADMIN, event_id)
        assert [ticket.owner for ticket in participants] == [ALICE]


class TestBuyTicket:
    def test_unknown_event(self, service):
        with pytest.raises(EventNotFoundError):
            buy(service, ALICE, "1337")

    def test_organizer_cannot_buy(self, service, event_id):
        with pytest.raises(OrganizerCannotBuyTicketError):
            buy(service, ADMIN, event_id)

    def test_second_ticket_rejected(self, service, event_id):
        buy(service, ALICE, event_id)
        with pytest.raises(TicketAlreadyExistsError):
            buy(service, ALICE, event_id)
        assert len(service.list_event_participants(ADMIN, event_id)) == 1

    def test_after_event_date(self, service, event_id, clock, event_date):
        clock.now = event_date
        with pytest.raises(PassedEventDateError):
            buy(service, ALICE, event_id)

    def test_paused_event(self, service, event_id):
        service.toggle_pause_event_registration(ADMIN, event_id, EventStatus.PAUSED)
        with pytest.raises(EventPausedError):
            buy(service, ALICE, event_id)

    def test_zero_limit_is_sold_out(self, service, event_date):
        event_id = service.create_event(ADMIN, "Event-1", 0, 1, event_date).value
        for buyer in [ALICE, BOB]:
            with pytest.raises(SoldOutTicketsError):
                buy(service, buyer, event_id)

    def test_limit_reached(self, service, event_id):
        buy(service, ALICE, event_id)
        buy(service, BOB, event_id)
        with pytest.raises(SoldOutTicketsError):
            buy(service, Identity("carol"), event_id)
        assert len(service.list_event_participants(ADMIN, event_id)) == 2

    def test_insufficient_payment(self, service, event_id):
        with pytest.raises(NotEnoughFundsError) as exc_info:
            buy(service, ALICE, event_id, payment=50)
        assert (exc_info.value.required, exc_info.value.provided) == (100, 50)
        assert service.get_contract_balance(ADMIN) == Money.zero()

    def test_paused_checked_before_funds(self, service, event_id):
        service.toggle_pause_event_registration(ADMIN, event_id, EventStatus.PAUSED)
        with pytest.raises(EventPausedError):
            buy(service, ALICE, event_id, payment=0)

    def test_exact_payment_issues_no_refund(self, service, event_id, rail):
        buy(service, ALICE, event_id, payment=100)
        assert rail.transfers == []
        assert service.get_contract_balance(ADMIN) == Money(100)

    def test_overpayment_refunds_excess(self, service, event_id, rail):
        buy(service, ALICE, event_id, payment=1000)
        assert rail.total_sent_to(ALICE) == Money(900)
        assert service.get_contract_balance(ADMIN) == Money(100)

    def test_ticket_snapshot(self, service, event_id, clock):
        buy(service, ALICE, event_id)
        lookup = service.get_user_ticket(event_id, ALICE)
        assert lookup.found
        assert lookup.index == 0
        ticket = lookup.ticket
        assert ticket.owner == ALICE
        assert (ticket.fname, ticket.lname, ticket.email) == (FNAME, LNAME, EMAIL)
        assert ticket.paid_price == Money(100)
        assert ticket.purchased == clock.now

    def test_sends_ticket_purchased(self, service, event_id, received):
        buy(service, ALICE, event_id)
        assert received[-1] == (
            "ticket_purchased",
            {"signal": notifications.ticket_purchased, "buyer": ALICE,
             "event_id": EventId(event_id), "price": Money(100)},
        )

    def test_balance_accumulates(self, service, event_id):
        buy(service, ALICE, event_id)
        buy(service, BOB, event_id)
        assert service.get_contract_balance(ADMIN) == Money(200)


class TestGetUserTicket:
    def test_unknown_event(self, service):
        assert service.get_user_ticket("ev1", ALICE) == (False, None, 0)

    def test_no_ticket(self, service, event_id):
        assert not service.get_user_ticket(event_id, ALICE).found


class TestCancelTicket:
    def test_no_ticket(self, service):
        with pytest.raises(TicketNotFoundError):
            service.cancel_ticket(ALICE, "ev1")

    def test_refunds_paid_price(self, service, event_id, rail, received):
        buy(service, ALICE, event_id, payment=250)
        refunded = service.cancel_ticket(ALICE, event_id)

        assert refunded == Money(100)
        assert rail.total_sent_to(ALICE) == Money(250)
        assert not service.get_user_ticket(event_id, ALICE).found
        assert service.get_contract_balance(ADMIN) == Money.zero()
        name, payload = received[-1]
        assert name == "ticket_canceled"
        assert payload["refunded_amount"] == Money(100)
        assert payload["owner"] == ALICE

    def test_removes_exactly_one_ticket(self, service, event_date):
        event_id = service.create_event(ADMIN, "Event-1", 3, 1, event_date).value
        carol = Identity("carol")
        for buyer in [ALICE, BOB, carol]:
            buy(service, buyer, event_id)

        service.cancel_ticket(ALICE, event_id)

        owners = {ticket.owner for ticket in service.list_event_participants(ADMIN, event_id)}
        assert owners == {BOB, carol}

    def test_just_before_deadline(self, service, event_id, clock, event_date):
        buy(service, ALICE, event_id)
        clock.now = event_date - timedelta(days=1, seconds=1)
        assert service.cancel_ticket(ALICE, event_id) == Money(100)

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(hours=15)])
    def test_at_or_after_deadline(self, service, event_id, clock, event_date, offset):
        buy(service, ALICE, event_id)
        clock.now = event_date - timedelta(days=1) + offset
        with pytest.raises(RefundWindowClosedError):
            service.cancel_ticket(ALICE, event_id)
        assert service.get_user_ticket(event_id, ALICE).found
        assert service.get_contract_balance(ADMIN) == Money(100)

    def test_can_buy_again_after_cancel(self, service, event_id):
        buy(service, ALICE, event_id)
        service.cancel_ticket(ALICE, event_id)
        buy(service, ALICE, event_id)
        assert service.get_user_ticket(event_id, ALICE).found


class TestUnmatchedCall:
    def test_logs_and_notifies(self, service, received):
        service.log_unmatched_call("alice", b"0x")
        assert received == [
            ("unmatched_call", {"signal": notifications.unmatched_call, "caller": "alice", "payload": "0x"})
        ]

    def test_failing_receiver_does_not_raise(self, service):
        def broken(sender, **kwargs):
            raise RuntimeError("boom")

        notifications.unmatched_call.connect(broken)
        try:
            service.log_unmatched_call("alice", "payload")
        finally:
            notifications.unmatched_call.disconnect(broken)
