"""Domain error codes for the ticketing module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    ACCESS_DENIED = "ACCESS_DENIED"
    INVALID_SCHEDULE = "INVALID_SCHEDULE"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    NO_STATUS_CHANGE = "NO_STATUS_CHANGE"
    EMPTY_IDENTIFIER = "EMPTY_IDENTIFIER"
    ORGANIZER_CANNOT_BUY_TICKET = "ORGANIZER_CANNOT_BUY_TICKET"
    TICKET_ALREADY_EXISTS = "TICKET_ALREADY_EXISTS"
    PASSED_EVENT_DATE = "PASSED_EVENT_DATE"
    EVENT_PAUSED = "EVENT_PAUSED"
    SOLD_OUT_TICKETS = "SOLD_OUT_TICKETS"
    NOT_ENOUGH_FUNDS = "NOT_ENOUGH_FUNDS"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    REFUND_WINDOW_CLOSED = "REFUND_WINDOW_CLOSED"
    REENTRANT_CALL = "REENTRANT_CALL"
    PAYMENT_FAILED = "PAYMENT_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AccessDeniedError(DomainError):
    """Raised when a non-administrator calls an administrator-only operation."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACCESS_DENIED,
            message="Access denied, administrator only",
        )


class InvalidScheduleError(DomainError):
    """Raised when an event date is not in the future."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SCHEDULE,
            message="Event date must be in the future",
        )


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class NoStatusChangeError(DomainError):
    """Raised when the requested status is already set."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NO_STATUS_CHANGE,
            message="That status is already set",
        )


class EmptyIdentifierError(DomainError):
    """Raised when an event ID is empty."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_IDENTIFIER,
            message="Event ID cannot be empty",
        )


class OrganizerCannotBuyTicketError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ORGANIZER_CANNOT_BUY_TICKET,
            message="The organizer cannot buy a ticket to their own event",
        )


class TicketAlreadyExistsError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_ALREADY_EXISTS,
            message="A ticket for this event is already owned",
        )


class PassedEventDateError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PASSED_EVENT_DATE,
            message="The event date has passed",
        )


class EventPausedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_PAUSED,
            message="Registration for this event is paused",
        )


class SoldOutTicketsError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SOLD_OUT_TICKETS,
            message="Tickets are sold out",
        )


class NotEnoughFundsError(DomainError):
    """Raised when the payment does not cover the ticket price."""

    def __init__(self, required: int, provided: int) -> None:
        super().__init__(
            code=ErrorCode.NOT_ENOUGH_FUNDS,
            message="Payment does not cover the ticket price",
        )
        self.required = required
        self.provided = provided


class TicketNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_NOT_FOUND,
            message="No ticket found for this event",
        )


class RefundWindowClosedError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REFUND_WINDOW_CLOSED,
            message="The last date for a refund has passed",
        )


class ReentrantCallError(DomainError):
    """Raised when a guarded operation is entered while another is running."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REENTRANT_CALL,
            message="Reentrant call rejected",
        )


class PaymentFailedError(DomainError):
    """Raised by a payment rail when a transfer could not be delivered."""

    def __init__(self, reason: str = "Value transfer failed") -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_FAILED,
            message=reason,
        )


class InvariantViolation(RuntimeError):
    """Internal consistency check failed. Signals a defect, not caller misuse."""
