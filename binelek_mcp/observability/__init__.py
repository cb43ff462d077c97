"""
Observability components for the Binelek MCP server.
"""

from binelek_mcp.observability.logger import (
    configure_logging,
    get_logger,
    log_tool_execution,
    sanitize_log_data,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_tool_execution",
    "sanitize_log_data",
]
