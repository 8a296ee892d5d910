"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

from datetime import timedelta

import pytest
from django.core.cache import cache
from django.utils import timezone

from ticketing.cache import EVENT_LIST_KEY, event_detail_key
from ticketing.models import Event

ADMIN_HEADERS = {"HTTP_X_CALLER_ID": "admin"}


def create_event(client):
    payload = {
        "name": "Event-1",
        "ticket_limit": 1,
        "price": "1",
        "event_date": (timezone.now() + timedelta(days=30)).isoformat(),
    }
    client.post("/api/events", payload, format="json", **ADMIN_HEADERS)


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on catalog changes."""

    def test_list_response_is_cached(self, api_client):
        api_client.get("/api/events")
        assert cache.get(EVENT_LIST_KEY) == {"events": []}

    def test_event_creation_invalidates_list_cache(self, api_client):
        api_client.get("/api/events")
        create_event(api_client)
        assert cache.get(EVENT_LIST_KEY) is None
        assert api_client.get("/api/events").json() == {"events": ["ev1"]}

    def test_status_change_invalidates_detail_cache(self, api_client):
        create_event(api_client)
        api_client.get("/api/events/ev1")
        assert cache.get(event_detail_key("ev1"))["status"] == 0

        api_client.patch("/api/events/ev1/status", {"status": 1}, format="json", **ADMIN_HEADERS)

        assert cache.get(event_detail_key("ev1")) is None
        assert api_client.get("/api/events/ev1").json()["status"] == 1

    def test_event_save_invalidates_detail_cache(self, api_client):
        create_event(api_client)
        api_client.get("/api/events/ev1")

        row = Event.objects.get(pk="ev1")
        row.name = "Renamed"
        row.save()

        assert cache.get(event_detail_key("ev1")) is None
        assert api_client.get("/api/events/ev1").json()["name"] == "Renamed"

    def test_missing_event_is_not_cached(self, api_client):
        api_client.get("/api/events/ev9")
        assert cache.get(event_detail_key("ev9")) is None
