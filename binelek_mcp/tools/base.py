"""
Building blocks shared by all tool groups.

A tool group is pure data plus a pure dispatch function: it declares a fixed
set of ToolSpecs and maps an incoming tool name to exactly one gateway call.
Nothing here touches the MCP server object; the registry composes groups and
the server wires the composed router into the protocol.
"""

import json
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Tuple, Type

from mcp.types import CallToolResult, TextContent, Tool
from pydantic import BaseModel, ConfigDict, ValidationError

from binelek_mcp.exceptions import RequestError, UnknownToolError
from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.observability import get_logger, log_tool_execution


class ToolArguments(BaseModel):
    """Base model for validated tool arguments.

    Fields are declared in snake_case with the camelCase wire name as alias.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class NoArguments(ToolArguments):
    """Arguments model for tools that take no input."""

    pass


ToolHandler = Callable[[BinelekGatewayClient, Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    """Static declaration of one tool."""

    name: str
    description: str
    input_schema: Mapping[str, Any]
    arguments: Type[ToolArguments]
    handler: ToolHandler

    def to_tool(self) -> Tool:
        """Build the MCP tool descriptor."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=dict(self.input_schema),
        )

    def parse_arguments(self, arguments: Optional[Dict[str, Any]]) -> ToolArguments:
        """
        Validate raw call arguments into this tool's arguments model.

        Raises:
            RequestError: If the arguments do not match the model
        """
        try:
            return self.arguments.model_validate(arguments or {})
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise RequestError(f"Invalid arguments for {self.name}: {problems}") from e


def to_json(value: Any) -> str:
    """Render a gateway result as indented JSON text."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def text_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def error_result(text: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=True)


class ToolGroup:
    """
    A closed set of tools served by one dispatch function.

    Args:
        name: Group name (ontology, search, ai, pipeline, admin)
        specs: Tool declarations, in the order they are listed to clients
    """

    def __init__(self, name: str, specs: Tuple[ToolSpec, ...]):
        self.name = name
        self.specs = tuple(specs)
        self._by_name = {spec.name: spec for spec in self.specs}
        self.logger = get_logger(f"tools.{name}")

    @property
    def tool_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.specs)

    def descriptors(self) -> Tuple[Tool, ...]:
        return tuple(spec.to_tool() for spec in self.specs)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._by_name

    async def dispatch(
        self,
        gateway: BinelekGatewayClient,
        name: str,
        arguments: Optional[Dict[str, Any]] = None,
    ) -> CallToolResult:
        """
        Run one tool call against the gateway.

        Never raises: unknown names, invalid arguments and gateway failures
        all come back as results with isError set.
        """
        spec = self._by_name.get(name)
        if spec is None:
            error = UnknownToolError(name)
            self.logger.warning(str(error), group=self.name)
            return error_result(str(error))

        start = time.perf_counter()
        try:
            parsed = spec.parse_arguments(arguments)
            text = await spec.handler(gateway, parsed)
        except Exception as e:
            log_tool_execution(
                name,
                arguments,
                duration_ms=(time.perf_counter() - start) * 1000,
                success=False,
                error=str(e),
                group=self.name,
                error_type=type(e).__name__,
            )
            return error_result(f"Error: {e}")

        log_tool_execution(
            name,
            arguments,
            duration_ms=(time.perf_counter() - start) * 1000,
            group=self.name,
        )
        return text_result(text)
