"""App settings, read from ``settings.TICKETING``."""

from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from ticketing.domain import Identity

DEFAULTS = {
    "ADMINISTRATOR": None,
    "REFUND_WINDOW": timedelta(days=1),
    "MINOR_UNITS_PER_MAJOR": 100,
    "PAYMENT_RAIL": "ticketing.services.payments.LoggingPaymentRail",
}


@dataclass(frozen=True)
class TicketingConfig:
    administrator: Identity
    refund_window: timedelta
    minor_units_per_major: int
    payment_rail: str


def get_config() -> TicketingConfig:
    """Merge ``settings.TICKETING`` over the defaults and validate it."""
    options = {**DEFAULTS, **getattr(settings, "TICKETING", {})}

    if not options["ADMINISTRATOR"]:
        raise ImproperlyConfigured("TICKETING['ADMINISTRATOR'] must be set")

    refund_window = options["REFUND_WINDOW"]
    if not isinstance(refund_window, timedelta):
        refund_window = timedelta(seconds=int(refund_window))

    minor_units = int(options["MINOR_UNITS_PER_MAJOR"])
    if minor_units < 1:
        raise ImproperlyConfigured("TICKETING['MINOR_UNITS_PER_MAJOR'] must be positive")

    return TicketingConfig(
        administrator=Identity(str(options["ADMINISTRATOR"])),
        refund_window=refund_window,
        minor_units_per_major=minor_units,
        payment_rail=options["PAYMENT_RAIL"],
    )
