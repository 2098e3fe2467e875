#!/usr/bin/env python3
"""Steam Mini MCP Server - Steam profile and playtime tools via Model Context Protocol.

Initializes the MCP server, loads endpoint modules, and handles tool calls.
"""

import asyncio
import importlib
import logging
import os
import pkgutil
import sys
from typing import Any

from mcp.server import Server, NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from steam_mini import __version__
from steam_mini.client import SteamClient
from steam_mini.config import get_settings
from steam_mini.endpoints.base import EndpointManager


logger = logging.getLogger(__name__)

server = Server("steam-mini")

# Global instances
steam_client: SteamClient | None = None
endpoint_manager: EndpointManager | None = None


def configure_logging(level: str) -> None:
    # stderr only; stdout carries the MCP protocol
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def discover_endpoints() -> None:
    """
    Import all endpoint modules so the metaclass registers their tools.
    """
    import steam_mini.endpoints as endpoints_package

    package_path = os.path.dirname(endpoints_package.__file__)

    for _, module_name, _ in pkgutil.iter_modules([package_path]):
        if module_name != "base":
            importlib.import_module(f"steam_mini.endpoints.{module_name}")
            logger.info(f"Loaded endpoint module: {module_name}")


def create_client() -> SteamClient:
    """
    Load settings, configure logging and build the Steam client.

    Exits with status 1 on invalid configuration or a missing API key.
    """
    try:
        settings = get_settings()
    except ValueError as e:
        configure_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        client = SteamClient.from_settings(settings)
    except ValueError as e:
        logger.error(f"Failed to initialize Steam client: {e} (set STEAM_API_KEY)")
        sys.exit(1)
    logger.info("Steam client initialized")
    return client


@server.list_tools()
async def handle_list_tools() -> list[Tool]:
    """List all available Steam tools."""
    if endpoint_manager is None:
        return []
    return endpoint_manager.get_all_tools()


@server.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any] | None
) -> list[TextContent]:
    """Handle tool execution requests."""
    if endpoint_manager is None:
        raise RuntimeError("Endpoint manager not initialized")

    try:
        return await endpoint_manager.call_tool(name, arguments)
    except ValueError as e:
        return [TextContent(type="text", text=f"Error: {e}")]


async def run_server() -> None:
    """Run the MCP server."""
    global steam_client, endpoint_manager

    steam_client = create_client()

    discover_endpoints()
    endpoint_manager = EndpointManager(steam_client)
    logger.info(f"Loaded {len(endpoint_manager.get_all_tools())} tools")

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="steam-mini",
                server_version=__version__,
                capabilities=server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main() -> None:
    """Main entry point."""
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")


if __name__ == "__main__":
    main()
