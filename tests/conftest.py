"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta

import pytest
from rest_framework.test import APIClient

from tests.helpers import ADMIN, START, FakeClock
from ticketing.services import EventService, InMemoryPaymentRail
from ticketing.stores import InMemoryEventStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def rail() -> InMemoryPaymentRail:
    return InMemoryPaymentRail()


@pytest.fixture
def service(store, rail, clock) -> EventService:
    return EventService(store=store, payment_rail=rail, administrator=ADMIN, clock=clock)


@pytest.fixture
def event_date(clock) -> datetime:
    return clock.now + timedelta(days=30)


@pytest.fixture
def event_id(service, event_date) -> str:
    """An active event priced at 1.00 (100 minor units) with room for two."""
    return service.create_event(ADMIN, "Event-1", 2, 1, event_date).value
