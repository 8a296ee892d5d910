from ticketing.stores.interfaces import EventStore
from ticketing.stores.memory_store import InMemoryEventStore

__all__ = ["EventStore", "InMemoryEventStore"]
