"""
MCP tool groups exposing the Binelek platform services.
"""

from binelek_mcp.tools.base import ToolArguments, ToolGroup, ToolSpec
from binelek_mcp.tools.registry import (
    DEFAULT_TOOL_GROUPS,
    ToolCatalog,
    ToolRouter,
    build_tool_catalog,
)

__all__ = [
    "ToolArguments",
    "ToolGroup",
    "ToolSpec",
    "DEFAULT_TOOL_GROUPS",
    "ToolCatalog",
    "ToolRouter",
    "build_tool_catalog",
]
