"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Self

EVENT_ID_PREFIX = "ev"


@dataclass(frozen=True)
class EventId:
    """Identifier for an Event, derived from the catalog counter."""

    value: str

    @classmethod
    def from_counter(cls, counter: int) -> Self:
        if counter < 1:
            raise ValueError("Event counter starts at 1")
        return cls(value=f"{EVENT_ID_PREFIX}{counter}")

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=value)

    def is_empty(self) -> bool:
        return self.value == ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Identity:
    """The acting party of a call (buyer, organizer or administrator)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Identity cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Amount in the smallest currency unit."""

    amount: int

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("Money amount must be an integer number of minor units")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def zero(cls) -> Self:
        return cls(amount=0)

    @classmethod
    def from_major(cls, amount: Decimal | int | str, minor_units: int) -> Self:
        """Convert a major-unit amount, rounding half up to whole minor units."""
        minor = (Decimal(amount) * minor_units).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return cls(amount=int(minor))

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def __lt__(self, other: "Money") -> bool:
        return self.amount < other.amount

    def __gt__(self, other: "Money") -> bool:
        return self.amount > other.amount

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
