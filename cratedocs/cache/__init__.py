"""In-process caches for fetched and derived documentation."""

from .manager import (
    DocCache,
    CacheManager,
    crate_key,
    item_key,
    examples_key,
    relationships_key,
)

__all__ = [
    "DocCache",
    "CacheManager",
    "crate_key",
    "item_key",
    "examples_key",
    "relationships_key",
]
