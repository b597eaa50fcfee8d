#!/usr/bin/env python3
"""SteamID MCP Server - Steam ID conversion and lookup via Model Context Protocol.

Main entry point: initializes the MCP server, loads endpoint modules, and
handles tool calls.
"""

import asyncio
import importlib
import logging
import os
import pkgutil
import sys
from typing import Any

from dotenv import load_dotenv
from mcp.server import Server, NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent, ImageContent, EmbeddedResource

from steamid_mcp import __version__
from steamid_mcp.endpoints.base import EndpointManager
from steamid_mcp.lookup import LookupClient


# Log only to stderr; stdout carries the MCP protocol
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)
logger = logging.getLogger(__name__)

load_dotenv()

server = Server("steamid-mcp-server")

lookup_client: LookupClient | None = None
endpoint_manager: EndpointManager | None = None


def discover_endpoints() -> None:
    """Import every endpoint module so its tools get registered."""
    import steamid_mcp.endpoints as endpoints_package

    package_path = os.path.dirname(endpoints_package.__file__)

    for _, module_name, _ in pkgutil.iter_modules([package_path]):
        if module_name != "base":
            try:
                importlib.import_module(f"steamid_mcp.endpoints.{module_name}")
                logger.info(f"Loaded endpoint module: {module_name}")
            except Exception as e:
                logger.error(f"Failed to load endpoint module {module_name}: {e}")


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    """List all available tools."""
    if endpoint_manager is None:
        return []
    return endpoint_manager.get_all_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any] | None
) -> list[TextContent | ImageContent | EmbeddedResource]:
    """Handle tool execution requests."""
    if endpoint_manager is None:
        raise RuntimeError("Endpoint manager not initialized")

    try:
        return await endpoint_manager.call_tool(name, arguments)
    except ValueError as e:
        return [TextContent(type="text", text=f"Error: {e}")]
    except Exception as e:
        logger.exception(f"Unexpected error executing tool {name}")
        return [TextContent(type="text", text=f"Unexpected error: {e}")]


async def run_server() -> None:
    """Run the MCP server."""
    global lookup_client, endpoint_manager

    try:
        lookup_client = LookupClient()
    except ValueError as e:
        logger.error(f"Failed to initialize lookup client: {e}")
        sys.exit(1)

    if lookup_client.api_key:
        logger.info("STEAM_API_KEY set, vanity names resolve via the Steam Web API")
    logger.info(f"Lookup service: {lookup_client.lookup_url}")

    discover_endpoints()
    endpoint_manager = EndpointManager(lookup_client)
    logger.info(f"Loaded {len(endpoint_manager.get_all_tools())} tools")

    async with stdio_server() as (read_stream, write_stream):
        try:
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="steamid-mcp-server",
                    server_version=__version__,
                    capabilities=server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )
        finally:
            await lookup_client.close()


def main() -> None:
    """Main entry point."""
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
