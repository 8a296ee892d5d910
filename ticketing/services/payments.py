"""Payment rail: the collaborator that moves value back to callers.

The service only ever sends value out (refunds). A rail signals a failed
delivery by raising ``PaymentFailedError``; the service then rolls back.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ticketing.domain import Identity, Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transfer:
    recipient: Identity
    amount: Money


class PaymentRail(ABC):
    """Interface for outbound value transfers."""

    @abstractmethod
    def transfer(self, recipient: Identity, amount: Money) -> None:
        """Send ``amount`` to ``recipient``.

        Raises:
            PaymentFailedError: If the transfer could not be delivered.
        """
        ...


class LoggingPaymentRail(PaymentRail):
    """Rail that records transfers in the log for an external settlement job."""

    def transfer(self, recipient: Identity, amount: Money) -> None:
        logger.info(
            "Value transfer issued",
            extra={"recipient": recipient.value, "amount": amount.amount},
        )


class InMemoryPaymentRail(PaymentRail):
    """Rail that keeps every transfer in a list."""

    def __init__(self) -> None:
        self.transfers: list[Transfer] = []

    def transfer(self, recipient: Identity, amount: Money) -> None:
        self.transfers.append(Transfer(recipient=recipient, amount=amount))

    def total_sent_to(self, recipient: Identity) -> Money:
        total = Money.zero()
        for transfer in self.transfers:
            if transfer.recipient == recipient:
                total = total + transfer.amount
        return total
