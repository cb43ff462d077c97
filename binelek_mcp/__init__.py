"""
Binelek MCP Server

Exposes the Binelek platform API gateway as Model Context Protocol tools.
"""

__version__ = "1.0.0"

from binelek_mcp.config import Config, GatewayConfig, load_config
from binelek_mcp.exceptions import (
    BinelekMCPError,
    ConfigurationError,
    EntityNotFoundError,
    GatewayError,
    RequestError,
    ToolError,
    UnknownToolError,
    UnreachableError,
    UpstreamError,
)

__all__ = [
    "Config",
    "GatewayConfig",
    "load_config",
    "BinelekMCPError",
    "ConfigurationError",
    "EntityNotFoundError",
    "GatewayError",
    "RequestError",
    "ToolError",
    "UnknownToolError",
    "UnreachableError",
    "UpstreamError",
]
