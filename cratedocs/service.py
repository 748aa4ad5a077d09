"""
The five documentation operations exposed to the MCP server and the CLI.

Every operation returns a single text payload and never raises: failures are
rendered into the returned text, so callers tell success from failure by
reading it.
"""

import logging
from typing import Optional

import httpx

from cratedocs.analysis import ExampleExtractor, RelationshipAnalyzer, render_report
from cratedocs.cache import CacheManager, crate_key, examples_key, relationships_key
from cratedocs.config import Settings
from cratedocs.docs import DocsTransport, ItemResolver, build_client, html_to_markdown
from cratedocs.errors import CrateDocsError, TransportError
from cratedocs.schemas import ItemLocator

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 100


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_SEARCH_LIMIT
    return max(1, min(limit, MAX_SEARCH_LIMIT))


class CrateDocsService:
    """
    Documentation lookups against docs.rs and crates.io.

    The cache and HTTP client are injected; one service instance (and its
    cache) is created when the server starts and lives until the process
    exits.
    """

    def __init__(
        self,
        settings: Settings,
        cache: Optional[CacheManager] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self.cache = cache or CacheManager()
        self.client = client or build_client(settings)
        self.transport = DocsTransport(self.client, settings.user_agent)
        self.resolver = ItemResolver(
            self.transport, self.cache, settings.docs_base(), default_version=settings.default_version
        )
        self.example_extractor = ExampleExtractor()
        self.relationship_analyzer = RelationshipAnalyzer()

    async def aclose(self) -> None:
        await self.client.aclose()

    # ========================================================================
    # OPERATIONS
    # ========================================================================

    async def lookup_crate(self, crate_name: str, version: Optional[str] = None) -> str:
        """Crate overview page from docs.rs, as Markdown."""
        key = crate_key(crate_name, version)
        cached = await self.cache.documents.get(key)
        if cached is not None:
            return cached

        url = f"{self.settings.docs_base()}/crate/{crate_name}/"
        if version:
            url = f"{self.settings.docs_base()}/crate/{crate_name}/{version}/"

        try:
            response = await self.transport.get(url)
        except TransportError as e:
            return f"Failed to fetch documentation: {e}"
        except CrateDocsError as e:
            return str(e)
        except Exception as e:
            return self._unexpected("lookup_crate", e)

        if not response.is_success:
            return f"Failed to fetch documentation. Status: {response.status}"

        markdown = html_to_markdown(response.body)
        await self.cache.documents.set(key, markdown)
        logger.info(f"Fetched crate docs for {key} ({len(markdown)} chars)")
        return markdown

    async def lookup_item(self, crate_name: str, item_path: str, version: Optional[str] = None) -> str:
        """Documentation for one item, trying each candidate kind in order."""
        try:
            document = await self.resolver.resolve(ItemLocator.parse(crate_name, item_path, version))
        except CrateDocsError as e:
            return str(e)
        except Exception as e:
            return self._unexpected("lookup_item", e)
        return document.markdown

    async def search_crates(self, query: str, limit: Optional[int] = None) -> str:
        """Search crates.io. JSON bodies pass through untouched; anything else is converted."""
        per_page = clamp_limit(limit)
        url = f"{self.settings.registry_base()}/api/v1/crates"

        try:
            response = await self.transport.get(url, params={"q": query, "per_page": per_page})
        except TransportError as e:
            return f"Failed to search crates.io: {e}"
        except CrateDocsError as e:
            return str(e)
        except Exception as e:
            return self._unexpected("search_crates", e)

        if not response.is_success:
            return f"Failed to search crates.io. Status: {response.status}"

        if response.body.strip().startswith("{"):
            return response.body
        return html_to_markdown(response.body)

    async def lookup_item_examples(self, crate_name: str, item_path: str, version: Optional[str] = None) -> str:
        """Usage examples for an item: documented, collected, or generated."""
        locator = ItemLocator.parse(crate_name, item_path, version)
        key = examples_key(locator.crate_name, locator.item_path, locator.version)

        cached = await self.cache.examples.get(key)
        if cached is not None:
            return cached

        try:
            document = await self.resolver.resolve(locator)
            examples = self.example_extractor.extract(document.markdown, locator)
        except CrateDocsError as e:
            return str(e)
        except Exception as e:
            return self._unexpected("lookup_item_examples", e)

        await self.cache.examples.set(key, examples.markdown)
        return examples.markdown

    async def analyze_item_relationships(
        self, crate_name: str, item_path: str, version: Optional[str] = None
    ) -> str:
        """Heuristic report of how an item relates to other types."""
        locator = ItemLocator.parse(crate_name, item_path, version)
        key = relationships_key(locator.crate_name, locator.item_path, locator.version)

        cached = await self.cache.examples.get(key)
        if cached is not None:
            return cached

        try:
            document = await self.resolver.resolve(locator)
            report = render_report(self.relationship_analyzer.analyze(document.markdown, locator))
        except CrateDocsError as e:
            return str(e)
        except Exception as e:
            return self._unexpected("analyze_item_relationships", e)

        await self.cache.examples.set(key, report)
        return report

    def _unexpected(self, operation: str, error: Exception) -> str:
        logger.error(f"Unexpected error in {operation}: {error}", exc_info=True)
        return f"Unexpected error: {error}"
