"""Fetching and normalizing pages from docs.rs and crates.io."""

from .converter import html_to_markdown
from .transport import DocsTransport, FetchResponse, build_client
from .resolver import ItemResolver, item_url

__all__ = [
    "html_to_markdown",
    "DocsTransport",
    "FetchResponse",
    "build_client",
    "ItemResolver",
    "item_url",
]
