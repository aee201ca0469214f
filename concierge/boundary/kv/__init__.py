from concierge.boundary.kv.base import KeyValueStore
from concierge.boundary.kv.memory_store import InMemoryKeyValueStore

__all__ = ["KeyValueStore", "InMemoryKeyValueStore"]
