from ticketing.domain.models import Event, EventStatus, Ticket, TicketLookup
from ticketing.domain.value_objects import Capacity, EventId, Identity, Money

__all__ = [
    "Event",
    "EventStatus",
    "Ticket",
    "TicketLookup",
    "EventId",
    "Identity",
    "Money",
    "Capacity",
]
