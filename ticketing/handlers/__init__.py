from ticketing.handlers.views import (
    BalanceView,
    EventDetailView,
    EventListView,
    EventStatusView,
    MyTicketView,
    ParticipantListView,
    TicketPurchaseView,
    UnmatchedCallView,
)

__all__ = [
    "BalanceView",
    "EventDetailView",
    "EventListView",
    "EventStatusView",
    "MyTicketView",
    "ParticipantListView",
    "TicketPurchaseView",
    "UnmatchedCallView",
]
