"""
Search tools: semantic (vector), keyword (Elasticsearch) and hybrid search.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.tools.base import ToolArguments, ToolGroup, ToolSpec, to_json

DEFAULT_LIMIT = 10


class SemanticSearchArguments(ToolArguments):
    query: str
    entity_types: Optional[List[str]] = Field(default=None, alias="entityTypes")
    limit: int = DEFAULT_LIMIT


class KeywordSearchArguments(ToolArguments):
    query: str
    filters: Optional[Dict[str, Any]] = None
    limit: int = DEFAULT_LIMIT


class HybridSearchArguments(ToolArguments):
    query: str
    semantic_weight: float = Field(default=0.5, alias="semanticWeight", ge=0, le=1)
    keyword_weight: float = Field(default=0.5, alias="keywordWeight", ge=0, le=1)
    entity_types: Optional[List[str]] = Field(default=None, alias="entityTypes")
    filters: Optional[Dict[str, Any]] = None
    limit: int = DEFAULT_LIMIT


async def _semantic_search(gateway: BinelekGatewayClient, args: SemanticSearchArguments) -> str:
    return to_json(await gateway.semantic_search(args.query, args.entity_types, args.limit))


async def _keyword_search(gateway: BinelekGatewayClient, args: KeywordSearchArguments) -> str:
    return to_json(await gateway.keyword_search(args.query, args.filters, args.limit))


async def _hybrid_search(gateway: BinelekGatewayClient, args: HybridSearchArguments) -> str:
    options = args.model_dump(by_alias=True, exclude={"query"}, exclude_none=True)
    return to_json(await gateway.hybrid_search(args.query, **options))


SEARCH_TOOLS = ToolGroup(
    "search",
    (
        ToolSpec(
            name="binelek_semantic_search",
            description="Perform semantic search across the knowledge graph using vector embeddings. This finds entities based on meaning rather than exact keyword matches. Great for natural language queries.",
            input_schema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The search query in natural language (e.g., \"luxury waterfront properties with modern amenities\")"
                    },
                    "entityTypes": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Optional: Limit search to specific entity types (e.g., [\"Property\", \"Owner\"])"
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum number of results to return (default: 10)",
                        "default": DEFAULT_LIMIT
                    }
                },
                "required": ["query"]
            },
            arguments=SemanticSearchArguments,
            handler=_semantic_search,
        ),
        ToolSpec(
            name="binelek_keyword_search",
            description="Perform keyword-based search using Elasticsearch. This provides exact matches and supports filters for structured queries.",
            input_schema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The keyword search query"
                    },
                    "filters": {
                        "type": "object",
                        "description": "Optional filters (e.g., {\"propertyType\": \"residential\", \"minPrice\": 500000})",
                        "additionalProperties": True
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum number of results to return (default: 10)",
                        "default": DEFAULT_LIMIT
                    }
                },
                "required": ["query"]
            },
            arguments=KeywordSearchArguments,
            handler=_keyword_search,
        ),
        ToolSpec(
            name="binelek_hybrid_search",
            description="Combine semantic and keyword search for best results. This uses both vector similarity and keyword matching with configurable weights.",
            input_schema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The search query"
                    },
                    "semanticWeight": {
                        "type": "number",
                        "minimum": 0,
                        "maximum": 1,
                        "description": "Weight for semantic search (0-1, default: 0.5)",
                        "default": 0.5
                    },
                    "keywordWeight": {
                        "type": "number",
                        "minimum": 0,
                        "maximum": 1,
                        "description": "Weight for keyword search (0-1, default: 0.5)",
                        "default": 0.5
                    },
                    "entityTypes": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Optional: Limit to specific entity types"
                    },
                    "filters": {
                        "type": "object",
                        "description": "Optional filters for keyword component",
                        "additionalProperties": True
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum number of results (default: 10)",
                        "default": DEFAULT_LIMIT
                    }
                },
                "required": ["query"]
            },
            arguments=HybridSearchArguments,
            handler=_hybrid_search,
        ),
    ),
)
