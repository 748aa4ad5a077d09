"""
CrateDocs - Rust crate documentation lookups for LLM tooling.

Fetches crate and item documentation from docs.rs, searches crates.io,
converts pages to Markdown, caches everything in memory, and derives usage
examples and type-relationship reports from item pages.

Usage:
    from cratedocs import CrateDocsService, load_settings

    service = CrateDocsService(load_settings())
    markdown = await service.lookup_item("tokio", "io::AsyncRead", "1.28.0")
"""

from cratedocs.config import Settings, load_settings
from cratedocs.service import CrateDocsService

__version__ = "0.1.0"

__all__ = ["CrateDocsService", "Settings", "load_settings", "__version__"]
