"""
Binelek MCP server entry point.

Wires the tool router into a low-level MCP server and serves it over stdio.
Usage:
    python -m binelek_mcp
    binelek-mcp
"""

import asyncio
import sys
from typing import Optional

import mcp.server.stdio
from mcp.server import Server
from mcp.types import CallToolResult, Tool

from binelek_mcp.config import Config, ServerConfig, load_config
from binelek_mcp.exceptions import GatewayError
from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.observability import configure_logging, get_logger
from binelek_mcp.tools.registry import ToolRouter


def create_server(router: ToolRouter, config: Optional[ServerConfig] = None) -> Server:
    """
    Build the MCP server and register the list-tools and call-tool handlers.

    Args:
        router: Tool router that owns the catalog and the gateway client
        config: Server identity; defaults to binelek-mcp-server
    """
    config = config or ServerConfig()
    app = Server(config.name, version=config.version)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List all Binelek tools."""
        return router.list_tools()

    @app.call_tool()
    async def call_tool(name: str, arguments: dict) -> CallToolResult:
        """Execute a tool and return its result."""
        return await router.call_tool(name, arguments)

    return app


async def probe_gateway(gateway: BinelekGatewayClient) -> bool:
    """
    Best-effort connectivity check run at startup.

    Returns:
        True if the gateway health endpoint answered, False otherwise
    """
    logger = get_logger("server")
    try:
        await gateway.health_check()
    except GatewayError as e:
        logger.warning(f"Failed to connect to API Gateway: {e}")
        logger.warning("Server will start but tools may not work correctly")
        return False

    logger.info("Successfully connected to Binelek API Gateway")
    return True


async def serve(config: Config) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    configure_logging(config.logging)
    logger = get_logger("server")

    logger.info("Starting Binelek MCP Server...")
    logger.info(f"Gateway URL: {config.gateway.base_url}")
    logger.info(f"Tenant ID: {config.gateway.tenant_id}")
    logger.info(
        "Authentication: "
        + ("Token provided" if config.gateway.auth_token else "No token (will use public endpoints only)")
    )

    async with BinelekGatewayClient(config.gateway) as gateway:
        await probe_gateway(gateway)

        router = ToolRouter(gateway)
        app = create_server(router, config.server)
        logger.info(f"Registered {len(router.catalog)} tools")

        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            logger.info("Binelek MCP server running on stdio")
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options(),
            )


def main() -> None:
    """Console entry point."""
    try:
        config = load_config()
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger = get_logger("server")
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
