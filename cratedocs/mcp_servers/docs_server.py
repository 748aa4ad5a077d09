#!/usr/bin/env python3
"""
CrateDocs MCP Server

Gives LLM clients access to Rust crate documentation from docs.rs and
crates.io. Every tool returns a single text payload (Markdown, or raw JSON
for registry searches).

Tools:
1. lookup_crate - Crate overview documentation
2. lookup_item - Documentation for a struct, enum, trait, function or macro
3. search_crates - Keyword search on crates.io
4. lookup_item_examples - Usage examples for an item
5. analyze_item_relationships - How an item's methods relate to other types

Usage:
    # Start server (stdio mode)
    python -m cratedocs.mcp_servers.docs_server

    # Or via CLI
    cratedocs serve
"""

import sys
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent
from pydantic import BaseModel, Field

from cratedocs.config import Settings, load_settings
from cratedocs.service import CrateDocsService

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = "Rust Documentation MCP Server for accessing Rust crate documentation."


def configure_logging(settings: Settings) -> None:
    """Send logs to a file; stdout carries the JSON-RPC stream."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(settings.log_file)]
    )


# ============================================================================
# PYDANTIC MODELS FOR TOOL ARGUMENTS
# ============================================================================

class LookupCrateArgs(BaseModel):
    """Arguments for lookup_crate tool."""
    crate_name: str = Field(..., description="The name of the crate to look up")
    version: Optional[str] = Field(None, description="The version of the crate (optional, defaults to latest)")


class LookupItemArgs(BaseModel):
    """Arguments for the item-level tools."""
    crate_name: str = Field(..., description="The name of the crate")
    item_path: str = Field(
        ...,
        description=(
            "Path to the item (e.g., 'vec::Vec' or 'crate_name::vec::Vec' - "
            "crate prefix will be automatically stripped)"
        )
    )
    version: Optional[str] = Field(None, description="The version of the crate (optional, defaults to latest)")


class SearchCratesArgs(BaseModel):
    """Arguments for search_crates tool."""
    query: str = Field(..., description="The search query")
    limit: Optional[int] = Field(
        None,
        description="Maximum number of results to return (optional, defaults to 10, max 100)"
    )


# ============================================================================
# CRATEDOCS SERVER
# ============================================================================

class CrateDocsServer:
    """
    MCP Server for Rust crate documentation.

    Routes tool calls to a single ``CrateDocsService`` whose cache lives as
    long as the server process.
    """

    def __init__(self, service: CrateDocsService):
        self.service = service
        self.server = Server("cratedocs", instructions=SERVER_INSTRUCTIONS)
        self._register_tools()
        logger.info("CrateDocs server initialized")

    def tools(self) -> List[Tool]:
        return [
            Tool(
                name="lookup_crate",
                description="Look up documentation for a Rust crate (returns markdown)",
                inputSchema=LookupCrateArgs.model_json_schema()
            ),
            Tool(
                name="lookup_item",
                description="Look up documentation for a specific item in a Rust crate (returns markdown)",
                inputSchema=LookupItemArgs.model_json_schema()
            ),
            Tool(
                name="search_crates",
                description="Search for Rust crates on crates.io (returns JSON or markdown)",
                inputSchema=SearchCratesArgs.model_json_schema()
            ),
            Tool(
                name="lookup_item_examples",
                description=(
                    "Get usage examples for an item in a Rust crate. Uses the documentation's "
                    "Examples section, falls back to its code blocks, and otherwise generates "
                    "a clearly marked skeleton (returns markdown)"
                ),
                inputSchema=LookupItemArgs.model_json_schema()
            ),
            Tool(
                name="analyze_item_relationships",
                description=(
                    "Analyze how an item in a Rust crate relates to other types: return types, "
                    "parameter types, associated types and implemented traits (returns markdown)"
                ),
                inputSchema=LookupItemArgs.model_json_schema()
            ),
        ]

    def _register_tools(self):
        """Register all MCP tools."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            return self.tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Any) -> List[TextContent]:
            """Route tool calls to appropriate handlers."""
            logger.info(f"Tool called: {name} with args: {arguments}")
            text = await self.dispatch(name, arguments or {})
            return [TextContent(type="text", text=text)]

    async def dispatch(self, name: str, arguments: Dict[str, Any]) -> str:
        """Validate arguments and run the named tool. Always returns text."""
        try:
            if name == "lookup_crate":
                args = LookupCrateArgs(**arguments)
                return await self.service.lookup_crate(args.crate_name, args.version)
            if name == "lookup_item":
                args = LookupItemArgs(**arguments)
                return await self.service.lookup_item(args.crate_name, args.item_path, args.version)
            if name == "search_crates":
                args = SearchCratesArgs(**arguments)
                return await self.service.search_crates(args.query, args.limit)
            if name == "lookup_item_examples":
                args = LookupItemArgs(**arguments)
                return await self.service.lookup_item_examples(args.crate_name, args.item_path, args.version)
            if name == "analyze_item_relationships":
                args = LookupItemArgs(**arguments)
                return await self.service.analyze_item_relationships(
                    args.crate_name, args.item_path, args.version
                )
            return f"Unknown tool: {name}"

        except Exception as e:
            logger.error(f"Error in tool {name}: {e}", exc_info=True)
            return f"Error in tool {name}: {e}"

    # ========================================================================
    # SERVER LIFECYCLE
    # ========================================================================

    async def run(self):
        """Run the MCP server (stdio mode)."""
        logger.info("Starting CrateDocs MCP server (stdio mode)")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options()
                )
        finally:
            await self.service.aclose()


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

def main():
    """Main entry point for CrateDocs MCP server."""
    import asyncio

    settings = load_settings()
    configure_logging(settings)

    try:
        server = CrateDocsServer(CrateDocsService(settings))
        asyncio.run(server.run())
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
