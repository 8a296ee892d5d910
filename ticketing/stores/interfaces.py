"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from ticketing.domain import Event, EventId, EventStatus, Identity, Money, Ticket


class EventStore(ABC):
    """Interface for event and ticket persistence operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Return a context in which all mutations commit or roll back together."""
        ...

    @abstractmethod
    def next_event_id(self) -> EventId:
        """Increment the event counter and return the derived identifier."""
        ...

    @abstractmethod
    def add_event(self, event: Event) -> None:
        """Store a new event and append its ID to the ordered list."""
        ...

    @abstractmethod
    def list_event_ids(self) -> list[EventId]:
        """Return every event ID in creation order."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def lock_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, locked until the enclosing ``atomic()`` ends."""
        ...

    @abstractmethod
    def set_status(self, event_id: EventId, status: EventStatus) -> None:
        ...

    @abstractmethod
    def list_tickets(self, event_id: EventId) -> list[Ticket]:
        """Return an event's tickets in collection order, empty if none."""
        ...

    @abstractmethod
    def count_tickets(self, event_id: EventId) -> int:
        ...

    @abstractmethod
    def find_ticket(self, event_id: EventId, owner: Identity) -> tuple[int, Ticket] | None:
        """Return the (index, ticket) owned by ``owner``, or None."""
        ...

    @abstractmethod
    def append_ticket(self, event_id: EventId, ticket: Ticket) -> None:
        ...

    @abstractmethod
    def remove_ticket(self, event_id: EventId, index: int) -> None:
        """Remove the ticket at ``index`` by moving the last ticket into its slot."""
        ...

    @abstractmethod
    def get_balance(self) -> Money:
        """Return the total value currently held."""
        ...

    @abstractmethod
    def credit(self, amount: Money) -> None:
        ...

    @abstractmethod
    def debit(self, amount: Money) -> None:
        ...
