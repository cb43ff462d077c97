"""
Core exceptions for the Binelek MCP server.
"""

import json
from typing import Any, Optional


class BinelekMCPError(Exception):
    """Base exception for all Binelek MCP server errors."""

    pass


class ConfigurationError(BinelekMCPError):
    """Raised when there's an error in configuration."""

    pass


class GatewayError(BinelekMCPError):
    """Raised when there's an error communicating with the API gateway."""

    pass


class UpstreamError(GatewayError):
    """Raised when the gateway answered with a failing status."""

    def __init__(self, status_code: int, body: Any = None, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        if message is None:
            message = f"API Error ({status_code}): {_serialize_body(body)}"
        super().__init__(message)


class UnreachableError(GatewayError):
    """Raised when a request was sent but no response arrived."""

    pass


class RequestError(GatewayError):
    """Raised when a request could not be built or sent."""

    pass


class EntityNotFoundError(GatewayError):
    """Raised when the knowledge graph has no entity with the given id."""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Entity not found: {entity_id}")


class ToolError(BinelekMCPError):
    """Raised when there's an error with tool dispatch."""

    pass


class UnknownToolError(ToolError):
    """Raised when a tool name is not declared by any tool group."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


def _serialize_body(body: Any) -> str:
    try:
        return json.dumps(body, default=str)
    except (TypeError, ValueError):
        return repr(body)
