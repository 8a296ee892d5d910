"""In-memory implementation of the EventStore.

Used for library embedding and service unit tests. ``atomic()`` snapshots the
whole state on entry and restores it if the block raises.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from ticketing.domain import Event, EventId, EventStatus, Identity, Money, Ticket
from ticketing.domain.errors import InvariantViolation
from ticketing.stores.interfaces import EventStore


class InMemoryEventStore(EventStore):
    """Dict-backed event store."""

    def __init__(self) -> None:
        self._counter = 0
        self._events: dict[EventId, Event] = {}
        self._event_ids: list[EventId] = []
        self._tickets: dict[EventId, list[Ticket]] = {}
        self._balance = Money.zero()

    @contextmanager
    def atomic(self) -> Iterator[None]:
        snapshot = self._snapshot()
        try:
            yield
        except BaseException:
            self._restore(snapshot)
            raise

    def _snapshot(self) -> tuple:
        return (
            self._counter,
            dict(self._events),
            list(self._event_ids),
            {key: list(tickets) for key, tickets in self._tickets.items()},
            self._balance,
        )

    def _restore(self, snapshot: tuple) -> None:
        (
            self._counter,
            self._events,
            self._event_ids,
            self._tickets,
            self._balance,
        ) = snapshot

    def next_event_id(self) -> EventId:
        self._counter += 1
        return EventId.from_counter(self._counter)

    def add_event(self, event: Event) -> None:
        if event.id in self._events:
            raise InvariantViolation(f"Event ID {event.id} is already assigned")
        self._events[event.id] = event
        self._event_ids.append(event.id)
        self._tickets[event.id] = []

    def list_event_ids(self) -> list[EventId]:
        return list(self._event_ids)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def lock_event(self, event_id: EventId) -> Event | None:
        return self.get_event(event_id)

    def set_status(self, event_id: EventId, status: EventStatus) -> None:
        self._events[event_id] = self._events[event_id].with_status(status)

    def list_tickets(self, event_id: EventId) -> list[Ticket]:
        return list(self._tickets.get(event_id, []))

    def count_tickets(self, event_id: EventId) -> int:
        return len(self._tickets.get(event_id, []))

    def find_ticket(self, event_id: EventId, owner: Identity) -> tuple[int, Ticket] | None:
        for index, ticket in enumerate(self._tickets.get(event_id, [])):
            if ticket.owner == owner:
                return index, ticket
        return None

    def append_ticket(self, event_id: EventId, ticket: Ticket) -> None:
        self._tickets[event_id].append(ticket)

    def remove_ticket(self, event_id: EventId, index: int) -> None:
        tickets = self._tickets[event_id]
        tickets[index] = tickets[-1]
        tickets.pop()

    def get_balance(self) -> Money:
        return self._balance

    def credit(self, amount: Money) -> None:
        self._balance = self._balance + amount

    def debit(self, amount: Money) -> None:
        if amount > self._balance:
            raise InvariantViolation("Debit exceeds the held balance")
        self._balance = self._balance - amount
