"""
Knowledge graph tools: entity and relationship CRUD plus Cypher queries.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.tools.base import ToolArguments, ToolGroup, ToolSpec, to_json


class EntityIdArguments(ToolArguments):
    entity_id: str = Field(alias="entityId")


class QueryEntitiesArguments(ToolArguments):
    cypher_query: str = Field(alias="cypherQuery")
    parameters: Optional[Dict[str, Any]] = None


class CreateEntityArguments(ToolArguments):
    entity_type: str = Field(alias="entityType")
    attributes: Dict[str, Any]


class UpdateEntityArguments(ToolArguments):
    entity_id: str = Field(alias="entityId")
    attributes: Dict[str, Any]


class CreateRelationshipArguments(ToolArguments):
    source_id: str = Field(alias="sourceId")
    target_id: str = Field(alias="targetId")
    relationship_type: str = Field(alias="relationshipType")
    properties: Optional[Dict[str, Any]] = None


async def _get_entity(gateway: BinelekGatewayClient, args: EntityIdArguments) -> str:
    return to_json(await gateway.get_entity(args.entity_id))


async def _query_entities(gateway: BinelekGatewayClient, args: QueryEntitiesArguments) -> str:
    return to_json(await gateway.query_entities(args.cypher_query, args.parameters))


async def _create_entity(gateway: BinelekGatewayClient, args: CreateEntityArguments) -> str:
    result = await gateway.create_entity(args.entity_type, args.attributes)
    return f"Entity created successfully:\n{to_json(result)}"


async def _update_entity(gateway: BinelekGatewayClient, args: UpdateEntityArguments) -> str:
    result = await gateway.update_entity(args.entity_id, args.attributes)
    return f"Entity updated successfully:\n{to_json(result)}"


async def _delete_entity(gateway: BinelekGatewayClient, args: EntityIdArguments) -> str:
    # Response body is intentionally not echoed back.
    await gateway.delete_entity(args.entity_id)
    return f"Entity {args.entity_id} deleted successfully"


async def _get_relationships(gateway: BinelekGatewayClient, args: EntityIdArguments) -> str:
    return to_json(await gateway.get_relationships(args.entity_id))


async def _create_relationship(
    gateway: BinelekGatewayClient, args: CreateRelationshipArguments
) -> str:
    result = await gateway.create_relationship(
        args.source_id,
        args.target_id,
        args.relationship_type,
        args.properties,
    )
    return f"Relationship created successfully:\n{to_json(result)}"


ONTOLOGY_TOOLS = ToolGroup(
    "ontology",
    (
        ToolSpec(
            name="binelek_get_entity",
            description="Get a specific entity from the Binelek knowledge graph by its ID. Returns all properties and metadata for the entity.",
            input_schema={
                "type": "object",
                "properties": {
                    "entityId": {
                        "type": "string",
                        "description": "The unique identifier of the entity to retrieve"
                    }
                },
                "required": ["entityId"]
            },
            arguments=EntityIdArguments,
            handler=_get_entity,
        ),
        ToolSpec(
            name="binelek_query_entities",
            description="Execute a Cypher query against the Binelek Neo4j knowledge graph. Use this for complex graph traversals, pattern matching, and analytical queries. Returns query results as JSON.",
            input_schema={
                "type": "object",
                "properties": {
                    "cypherQuery": {
                        "type": "string",
                        "description": "The Cypher query to execute (e.g., \"MATCH (p:Property) WHERE p.price > $minPrice RETURN p LIMIT 10\")"
                    },
                    "parameters": {
                        "type": "object",
                        "description": "Optional parameters for the Cypher query (e.g., {\"minPrice\": 500000})",
                        "additionalProperties": True
                    }
                },
                "required": ["cypherQuery"]
            },
            arguments=QueryEntitiesArguments,
            handler=_query_entities,
        ),
        ToolSpec(
            name="binelek_create_entity",
            description="Create a new entity in the Binelek knowledge graph. The entity will be validated against the ontology schema and relationships can be created to existing entities.",
            input_schema={
                "type": "object",
                "properties": {
                    "entityType": {
                        "type": "string",
                        "description": "The type of entity to create (e.g., \"Property\", \"Owner\", \"Transaction\")"
                    },
                    "attributes": {
                        "type": "object",
                        "description": "The attributes of the entity as key-value pairs",
                        "additionalProperties": True
                    }
                },
                "required": ["entityType", "attributes"]
            },
            arguments=CreateEntityArguments,
            handler=_create_entity,
        ),
        ToolSpec(
            name="binelek_update_entity",
            description="Update an existing entity in the knowledge graph. Only provided attributes will be updated, others remain unchanged.",
            input_schema={
                "type": "object",
                "properties": {
                    "entityId": {
                        "type": "string",
                        "description": "The ID of the entity to update"
                    },
                    "attributes": {
                        "type": "object",
                        "description": "The attributes to update",
                        "additionalProperties": True
                    }
                },
                "required": ["entityId", "attributes"]
            },
            arguments=UpdateEntityArguments,
            handler=_update_entity,
        ),
        ToolSpec(
            name="binelek_delete_entity",
            description="Delete an entity from the knowledge graph. This will also remove all relationships connected to this entity.",
            input_schema={
                "type": "object",
                "properties": {
                    "entityId": {
                        "type": "string",
                        "description": "The ID of the entity to delete"
                    }
                },
                "required": ["entityId"]
            },
            arguments=EntityIdArguments,
            handler=_delete_entity,
        ),
        ToolSpec(
            name="binelek_get_relationships",
            description="Get all relationships connected to a specific entity. Returns both incoming and outgoing relationships with their types and properties.",
            input_schema={
                "type": "object",
                "properties": {
                    "entityId": {
                        "type": "string",
                        "description": "The ID of the entity whose relationships to retrieve"
                    }
                },
                "required": ["entityId"]
            },
            arguments=EntityIdArguments,
            handler=_get_relationships,
        ),
        ToolSpec(
            name="binelek_create_relationship",
            description="Create a relationship between two entities in the knowledge graph.",
            input_schema={
                "type": "object",
                "properties": {
                    "sourceId": {
                        "type": "string",
                        "description": "The ID of the source entity"
                    },
                    "targetId": {
                        "type": "string",
                        "description": "The ID of the target entity"
                    },
                    "relationshipType": {
                        "type": "string",
                        "description": "The type of relationship (e.g., \"OWNS\", \"LOCATED_IN\", \"MANAGES\")"
                    },
                    "properties": {
                        "type": "object",
                        "description": "Optional properties for the relationship",
                        "additionalProperties": True
                    }
                },
                "required": ["sourceId", "targetId", "relationshipType"]
            },
            arguments=CreateRelationshipArguments,
            handler=_create_relationship,
        ),
    ),
)
