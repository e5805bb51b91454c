"""Storage adapters implementing core ports."""

from memtss.adapters.storage.in_memory import InMemoryStorage, Series

__all__ = [
    "InMemoryStorage",
    "Series",
]
