"""Cache keys for public event discovery responses."""

from django.core.cache import cache

CACHE_TIMEOUT = 300
EVENT_LIST_KEY = "events:list"


def event_detail_key(event_id: str) -> str:
    return f"events:{event_id}"


def invalidate_event(event_id: str) -> None:
    """Drop the list and the detail entry for one event."""
    cache.delete_many([EVENT_LIST_KEY, event_detail_key(event_id)])
