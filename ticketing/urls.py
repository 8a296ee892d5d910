from django.urls import path, re_path

from ticketing.handlers import (
    BalanceView,
    EventDetailView,
    EventListView,
    EventStatusView,
    MyTicketView,
    ParticipantListView,
    TicketPurchaseView,
    UnmatchedCallView,
)

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/status", EventStatusView.as_view(), name="event-status"),
    path(
        "events/<str:event_id>/participants",
        ParticipantListView.as_view(),
        name="event-participants",
    ),
    path("events/<str:event_id>/tickets", TicketPurchaseView.as_view(), name="ticket-purchase"),
    path("events/<str:event_id>/tickets/me", MyTicketView.as_view(), name="my-ticket"),
    path("balance", BalanceView.as_view(), name="balance"),
    re_path(r"^.*$", UnmatchedCallView.as_view(), name="unmatched-call"),
]
