"""Call guards for service operations."""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps

from ticketing.domain import Identity
from ticketing.domain.errors import AccessDeniedError, ReentrantCallError

logger = logging.getLogger(__name__)


class ReentrancyGuard:
    """In-progress flag shared by every guarded operation it is handed to.

    Entering while the flag is held raises instead of blocking, so a payment
    rail calling back into the service fails fast. The flag is per thread:
    only a call nested inside a guarded operation is rejected.
    """

    def __init__(self) -> None:
        self._state = threading.local()

    @contextmanager
    def enter(self) -> Iterator[None]:
        if self.entered:
            raise ReentrantCallError()
        self._state.entered = True
        try:
            yield
        finally:
            self._state.entered = False

    @property
    def entered(self) -> bool:
        return getattr(self._state, "entered", False)


# Shared by every service built through ``get_event_service()``.
operation_guard = ReentrancyGuard()


class AccessGuard:
    """Compares callers against the single administrator identity."""

    def __init__(self, administrator: Identity) -> None:
        self._administrator = administrator

    @property
    def administrator(self) -> Identity:
        return self._administrator

    def is_administrator(self, caller: Identity) -> bool:
        return caller == self._administrator

    def require_administrator(self, caller: Identity) -> None:
        if not self.is_administrator(caller):
            logger.warning("Administrator-only call rejected", extra={"caller": caller.value})
            raise AccessDeniedError()


def non_reentrant(method: Callable) -> Callable:
    """Run the method under the instance's ``_reentrancy_guard``."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._reentrancy_guard.enter():
            return method(self, *args, **kwargs)

    return wrapper


def administrator_only(method: Callable) -> Callable:
    """Check the ``caller`` (first argument) before anything else runs."""

    @wraps(method)
    def wrapper(self, caller: Identity, *args, **kwargs):
        self._access.require_administrator(caller)
        return method(self, caller, *args, **kwargs)

    return wrapper
