from ticketing.services.event_service import EventService, get_event_service
from ticketing.services.payments import InMemoryPaymentRail, LoggingPaymentRail, PaymentRail

__all__ = [
    "EventService",
    "get_event_service",
    "PaymentRail",
    "InMemoryPaymentRail",
    "LoggingPaymentRail",
]
