"""
Gateway integration for the Binelek platform API.
"""

from binelek_mcp.gateway.client import BinelekGatewayClient

__all__ = [
    "BinelekGatewayClient",
]
