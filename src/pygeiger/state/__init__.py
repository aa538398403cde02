"""State/store layer.

Persistence for the config singleton and per-identity counters, over any
ordered key-value backend.
"""

from pygeiger.state.backends import MemoryStorage, SqliteStorage, Storage
from pygeiger.state.store import StateStore

__all__ = ["MemoryStorage", "SqliteStorage", "StateStore", "Storage"]
