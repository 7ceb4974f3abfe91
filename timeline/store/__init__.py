"""Project store: read-only seed projects plus persisted imports.

Persistence is injected; the store never touches global state.
"""

from timeline.store.persistence import (
    KeyValueStore,
    MemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from timeline.store.projects import ProjectFilter, ProjectStore, open_store
from timeline.store.seed import load_seed_file, parse_seed_documents

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "ProjectFilter",
    "ProjectStore",
    "open_store",
    "load_seed_file",
    "parse_seed_documents",
]
