"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in ticketing/models.py (persistence layer).
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import IntEnum
from typing import NamedTuple, Self

from ticketing.domain.value_objects import Capacity, EventId, Identity, Money


class EventStatus(IntEnum):
    """Registration status of an Event."""

    ACTIVE = 0
    PAUSED = 1


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event, without its ticket collection."""

    id: EventId
    creator: Identity
    name: str
    ticket_limit: Capacity
    price: Money
    event_date: datetime
    status: EventStatus = EventStatus.ACTIVE

    def with_status(self, status: EventStatus) -> Self:
        return replace(self, status=status)


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket.

    ``paid_price`` is the event price at the time of purchase, not a live
    reference to the event.
    """

    owner: Identity
    fname: str
    lname: str
    email: str
    paid_price: Money
    purchased: datetime


class TicketLookup(NamedTuple):
    """Result of looking up a caller's ticket for an event.

    ``index`` is the ticket's position in the event's collection and is only
    meaningful until the next mutation of that collection.
    """

    found: bool
    ticket: Ticket | None
    index: int

    @classmethod
    def missing(cls) -> "TicketLookup":
        return cls(found=False, ticket=None, index=0)
