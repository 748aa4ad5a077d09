"""
Item resolution against the documentation host.

Callers do not say what kind of item they want, so the resolver walks
``CANDIDATE_KINDS`` in order and returns the first page that answers 2xx.
The order is the tie-break: an item name that exists as both a struct and a
function resolves to the struct.
"""

import logging
from typing import Optional, Callable, List, Tuple

from cratedocs.cache import CacheManager, item_key
from cratedocs.docs.converter import html_to_markdown
from cratedocs.docs.transport import DocsTransport
from cratedocs.errors import TransportError, ItemNotFoundError
from cratedocs.schemas import CANDIDATE_KINDS, ItemKind, ItemLocator, ResolvedDocument

logger = logging.getLogger(__name__)


DEFAULT_DOCS_VERSION = "latest"


def item_url(
    docs_host: str,
    locator: ItemLocator,
    kind: ItemKind,
    default_version: Optional[str] = DEFAULT_DOCS_VERSION,
) -> str:
    """
    Build the page URL for one candidate kind.

    Format: {host}/{crate}[/{version}]/{crate_ident}/[{module_path}/]{prefix}.{name}.html

    docs.rs reads the segment after the crate as the version, so an
    unversioned locator falls back to ``default_version``. Passing None omits
    the segment entirely.
    """
    parts = [docs_host.rstrip("/"), locator.crate_name]
    version = locator.version or default_version
    if version:
        parts.append(version)
    parts.append(locator.crate_ident)
    if locator.module_path:
        parts.append(locator.module_path)
    parts.append(f"{kind.url_prefix}.{locator.item_name}.html")
    return "/".join(parts)


class ItemResolver:
    """Turns an ``ItemLocator`` into a converted documentation page."""

    def __init__(
        self,
        transport: DocsTransport,
        cache: CacheManager,
        docs_host: str,
        candidate_kinds: Tuple[ItemKind, ...] = CANDIDATE_KINDS,
        convert: Callable[[str], str] = html_to_markdown,
        default_version: Optional[str] = DEFAULT_DOCS_VERSION,
    ):
        self.transport = transport
        self.cache = cache
        self.docs_host = docs_host
        self.candidate_kinds = candidate_kinds
        self.convert = convert
        self.default_version = default_version

    def candidate_urls(self, locator: ItemLocator) -> List[Tuple[ItemKind, str]]:
        """All (kind, url) pairs in the order they are tried."""
        return [
            (kind, item_url(self.docs_host, locator, kind, self.default_version))
            for kind in self.candidate_kinds
        ]

    async def resolve(self, locator: ItemLocator) -> ResolvedDocument:
        """
        Fetch the documentation for ``locator``, using the cache when possible.

        Raises:
            InvalidItemPathError: the item path has no item name
            BodyReadError: a candidate answered 2xx but its body was unreadable
            ItemNotFoundError: every candidate failed; carries the last error
        """
        candidates = self.candidate_urls(locator)

        key = item_key(locator.crate_name, locator.item_path, locator.version)
        cached = await self.cache.documents.get(key)
        if cached is not None:
            return ResolvedDocument(locator=locator, markdown=cached, from_cache=True)

        last_error: Optional[str] = None
        for kind, url in candidates:
            try:
                response = await self.transport.get(url)
            except TransportError as e:
                logger.debug(f"{kind.value} candidate failed: {e}")
                last_error = str(e)
                continue

            if not response.is_success:
                logger.debug(f"{kind.value} candidate returned {response.status}: {url}")
                last_error = f"Status code: {response.status}"
                continue

            markdown = self.convert(response.body)
            await self.cache.documents.set(key, markdown)
            logger.info(f"Resolved {locator.crate_name}::{locator.item_path} as {kind.value}")
            return ResolvedDocument(locator=locator, markdown=markdown, kind=kind, url=url)

        logger.warning(f"No candidate kind matched {locator.crate_name}::{locator.item_path}: {last_error}")
        raise ItemNotFoundError(last_error)
