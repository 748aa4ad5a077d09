"""In-memory caches for documentation lookups.

A ``CacheManager`` is created once when the service starts and is handed to
every operation. It lives for the whole process: there is no eviction, no
TTL and no teardown. Values are written whole under a lock, so readers never
see a partial value. Fetches happen outside the lock, so two concurrent
misses on the same key may both fetch; the second ``set`` stores an
equivalent value.
"""

import asyncio
import logging
from typing import Optional, Dict

logger = logging.getLogger(__name__)

EXAMPLES_PREFIX = "examples:"
RELATIONSHIPS_PREFIX = "relationships:"


class DocCache:
    """A single lock-guarded key -> text namespace."""

    def __init__(self, name: str = "documents"):
        self.name = name
        self._entries: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            value = self._entries.get(key)
        logger.debug(f"[{self.name}] {'hit' if value is not None else 'miss'}: {key}")
        return value

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            self._entries[key] = value
        logger.debug(f"[{self.name}] stored {len(value)} chars under {key}")

    def __len__(self) -> int:
        return len(self._entries)


class CacheManager:
    """Owns the two independently locked namespaces.

    ``documents`` holds converted crate and item pages; ``examples`` holds the
    derived artifacts (``examples:`` and ``relationships:`` keys).
    """

    def __init__(self):
        self.documents = DocCache("documents")
        self.examples = DocCache("examples")

    def stats(self) -> Dict[str, int]:
        return {
            "documents": len(self.documents),
            "examples": len(self.examples),
        }


def crate_key(crate_name: str, version: Optional[str] = None) -> str:
    """Format: crate[:version]"""
    if version:
        return f"{crate_name}:{version}"
    return crate_name


def item_key(crate_name: str, item_path: str, version: Optional[str] = None) -> str:
    """Format: crate[:version]:item_path

    ``item_path`` must already have its ``<crate>::`` prefix stripped.
    """
    return f"{crate_key(crate_name, version)}:{item_path}"


def examples_key(crate_name: str, item_path: str, version: Optional[str] = None) -> str:
    return EXAMPLES_PREFIX + item_key(crate_name, item_path, version)


def relationships_key(crate_name: str, item_path: str, version: Optional[str] = None) -> str:
    return RELATIONSHIPS_PREFIX + item_key(crate_name, item_path, version)
