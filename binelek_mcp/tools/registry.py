"""
Tool registry: composes tool groups into one immutable catalog and routes
calls to the group that owns each tool name.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from mcp.types import CallToolResult, Tool

from binelek_mcp.exceptions import ConfigurationError, UnknownToolError
from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.observability import get_logger
from binelek_mcp.tools.admin import ADMIN_TOOLS
from binelek_mcp.tools.ai import AI_TOOLS
from binelek_mcp.tools.base import ToolGroup, error_result
from binelek_mcp.tools.ontology import ONTOLOGY_TOOLS
from binelek_mcp.tools.pipeline import PIPELINE_TOOLS
from binelek_mcp.tools.search import SEARCH_TOOLS

DEFAULT_TOOL_GROUPS: Tuple[ToolGroup, ...] = (
    ONTOLOGY_TOOLS,
    SEARCH_TOOLS,
    AI_TOOLS,
    PIPELINE_TOOLS,
    ADMIN_TOOLS,
)


@dataclass(frozen=True)
class ToolCatalog:
    """Read-only union of all tool descriptors, built once at startup."""

    tools: Tuple[Tool, ...]
    owners: Mapping[str, ToolGroup]

    def __len__(self) -> int:
        return len(self.tools)

    def owner_of(self, tool_name: str) -> Optional[ToolGroup]:
        return self.owners.get(tool_name)


def build_tool_catalog(groups: Sequence[ToolGroup] = DEFAULT_TOOL_GROUPS) -> ToolCatalog:
    """
    Build the tool catalog from a set of groups.

    Args:
        groups: Tool groups, in listing order

    Returns:
        Immutable catalog

    Raises:
        ConfigurationError: If two tools share a name
    """
    tools: List[Tool] = []
    owners: Dict[str, ToolGroup] = {}

    for group in groups:
        for tool in group.descriptors():
            if tool.name in owners:
                raise ConfigurationError(
                    f"Duplicate tool name '{tool.name}' in groups "
                    f"'{owners[tool.name].name}' and '{group.name}'"
                )
            owners[tool.name] = group
            tools.append(tool)

    return ToolCatalog(tools=tuple(tools), owners=MappingProxyType(owners))


class ToolRouter:
    """
    Routes tool calls to their owning group.

    Args:
        gateway: The gateway client shared by every group
        catalog: Tool catalog; built from the default groups if omitted
    """

    def __init__(self, gateway: BinelekGatewayClient, catalog: Optional[ToolCatalog] = None):
        self.gateway = gateway
        self.catalog = catalog if catalog is not None else build_tool_catalog()
        self.logger = get_logger("tools.router")
        self.metrics = {
            "requests_total": 0,
            "requests_success": 0,
            "requests_error": 0,
        }

    def list_tools(self) -> List[Tool]:
        return list(self.catalog.tools)

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> CallToolResult:
        """Dispatch a tool call. Always returns a result, never raises."""
        self.metrics["requests_total"] += 1

        group = self.catalog.owner_of(name)
        if group is None:
            error = UnknownToolError(name)
            self.logger.warning(str(error))
            result = error_result(str(error))
        else:
            result = await group.dispatch(self.gateway, name, arguments)

        if result.isError:
            self.metrics["requests_error"] += 1
        else:
            self.metrics["requests_success"] += 1
        return result
