"""
Admin tools: domain configuration, ontology schemas and the Regen code
generator (YAML validation and code generation).
"""

from typing import Literal

from pydantic import Field

from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.tools.base import NoArguments, ToolArguments, ToolGroup, ToolSpec, to_json

TargetLanguage = Literal["csharp", "typescript", "python", "cypher"]


class DomainArguments(ToolArguments):
    domain_name: str = Field(alias="domainName")


class ValidateYamlArguments(ToolArguments):
    yaml_content: str = Field(alias="yamlContent")


class GenerateCodeArguments(ToolArguments):
    yaml_content: str = Field(alias="yamlContent")
    target_language: TargetLanguage = Field(alias="targetLanguage")


async def _list_domains(gateway: BinelekGatewayClient, args: NoArguments) -> str:
    return to_json(await gateway.list_domains())


async def _get_domain(gateway: BinelekGatewayClient, args: DomainArguments) -> str:
    return to_json(await gateway.get_domain_config(args.domain_name))


async def _get_ontology_schema(gateway: BinelekGatewayClient, args: DomainArguments) -> str:
    return to_json(await gateway.get_ontology_schema(args.domain_name))


def format_validation(result) -> str:
    """
    Render a Regen validation response.

    A body with a truthy ``valid`` flag is echoed in full after a check mark;
    anything else reports only its ``errors`` list after a cross mark.
    """
    if isinstance(result, dict) and result.get("valid"):
        return f"✓ YAML is valid\n{to_json(result)}"
    errors = result.get("errors") if isinstance(result, dict) else None
    return f"✗ YAML validation failed:\n{to_json(errors)}"


async def _validate_yaml(gateway: BinelekGatewayClient, args: ValidateYamlArguments) -> str:
    return format_validation(await gateway.validate_yaml(args.yaml_content))


async def _generate_code(gateway: BinelekGatewayClient, args: GenerateCodeArguments) -> str:
    result = await gateway.generate_code(args.yaml_content, args.target_language)
    return f"Code generated successfully:\n{to_json(result)}"


ADMIN_TOOLS = ToolGroup(
    "admin",
    (
        ToolSpec(
            name="binelek_list_domains",
            description="List all available domain configurations. Binelek supports multiple industry verticals (Real Estate, Healthcare, Finance, Smart Cities, Logistics).",
            input_schema={
                "type": "object",
                "properties": {},
                "additionalProperties": False
            },
            arguments=NoArguments,
            handler=_list_domains,
        ),
        ToolSpec(
            name="binelek_get_domain",
            description="Get detailed configuration for a specific domain including metadata, pricing, and market analysis.",
            input_schema={
                "type": "object",
                "properties": {
                    "domainName": {
                        "type": "string",
                        "description": "The name of the domain (e.g., \"real-estate\", \"healthcare\")"
                    }
                },
                "required": ["domainName"]
            },
            arguments=DomainArguments,
            handler=_get_domain,
        ),
        ToolSpec(
            name="binelek_get_ontology_schema",
            description="Get the complete ontology schema for a domain. This includes all entity types, relationships, properties, and validation rules defined in the YAML configuration.",
            input_schema={
                "type": "object",
                "properties": {
                    "domainName": {
                        "type": "string",
                        "description": "The name of the domain whose ontology to retrieve"
                    }
                },
                "required": ["domainName"]
            },
            arguments=DomainArguments,
            handler=_get_ontology_schema,
        ),
        ToolSpec(
            name="binelek_validate_yaml",
            description="Validate an ontology YAML configuration file against the Binelek schema. This checks syntax, structure, and business rules.",
            input_schema={
                "type": "object",
                "properties": {
                    "yamlContent": {
                        "type": "string",
                        "description": "The YAML content to validate"
                    }
                },
                "required": ["yamlContent"]
            },
            arguments=ValidateYamlArguments,
            handler=_validate_yaml,
        ),
        ToolSpec(
            name="binelek_generate_code",
            description="Generate code from an ontology YAML file. The Binah.Regen service generates DTOs, validators, repositories, GraphQL schemas, and more.",
            input_schema={
                "type": "object",
                "properties": {
                    "yamlContent": {
                        "type": "string",
                        "description": "The ontology YAML content"
                    },
                    "targetLanguage": {
                        "type": "string",
                        "description": "Target language for code generation",
                        "enum": ["csharp", "typescript", "python", "cypher"]
                    }
                },
                "required": ["yamlContent", "targetLanguage"]
            },
            arguments=GenerateCodeArguments,
            handler=_generate_code,
        ),
    ),
)
