from .kv_store import InMemoryStore, JsonFileStore, KeyValueStore

__all__ = ["InMemoryStore", "JsonFileStore", "KeyValueStore"]
