"""MCP servers exposing cratedocs operations."""

from .docs_server import CrateDocsServer

__all__ = ["CrateDocsServer"]
