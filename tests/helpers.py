"""Shared identities and a controllable clock for tests."""

from datetime import datetime, timezone

from ticketing.domain import Identity

START = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
ADMIN = Identity("admin")
ALICE = Identity("alice")
BOB = Identity("bob")


class FakeClock:
    """Callable clock the tests move by hand."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now
