"""
Pipeline tools: list, inspect, trigger and audit data pipelines.
"""

from typing import Any, Dict, Optional

from pydantic import Field

from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.tools.base import NoArguments, ToolArguments, ToolGroup, ToolSpec, to_json


class PipelineIdArguments(ToolArguments):
    pipeline_id: str = Field(alias="pipelineId")


class TriggerPipelineArguments(ToolArguments):
    pipeline_id: str = Field(alias="pipelineId")
    parameters: Optional[Dict[str, Any]] = None


async def _list_pipelines(gateway: BinelekGatewayClient, args: NoArguments) -> str:
    return to_json(await gateway.list_pipelines())


async def _get_pipeline(gateway: BinelekGatewayClient, args: PipelineIdArguments) -> str:
    return to_json(await gateway.get_pipeline(args.pipeline_id))


async def _trigger_pipeline(gateway: BinelekGatewayClient, args: TriggerPipelineArguments) -> str:
    result = await gateway.trigger_pipeline(args.pipeline_id, args.parameters)
    return f"Pipeline triggered successfully:\n{to_json(result)}"


async def _get_pipeline_runs(gateway: BinelekGatewayClient, args: PipelineIdArguments) -> str:
    return to_json(await gateway.get_pipeline_runs(args.pipeline_id))


PIPELINE_TOOLS = ToolGroup(
    "pipeline",
    (
        ToolSpec(
            name="binelek_list_pipelines",
            description="List all available data pipelines in the Binelek platform. Pipelines handle ETL operations, data ingestion from various sources, and automated data processing.",
            input_schema={
                "type": "object",
                "properties": {},
                "additionalProperties": False
            },
            arguments=NoArguments,
            handler=_list_pipelines,
        ),
        ToolSpec(
            name="binelek_get_pipeline",
            description="Get details about a specific pipeline including its configuration, schedule, and status.",
            input_schema={
                "type": "object",
                "properties": {
                    "pipelineId": {
                        "type": "string",
                        "description": "The ID of the pipeline to retrieve"
                    }
                },
                "required": ["pipelineId"]
            },
            arguments=PipelineIdArguments,
            handler=_get_pipeline,
        ),
        ToolSpec(
            name="binelek_trigger_pipeline",
            description="Manually trigger a pipeline execution. This will start an immediate run of the pipeline with optional parameters.",
            input_schema={
                "type": "object",
                "properties": {
                    "pipelineId": {
                        "type": "string",
                        "description": "The ID of the pipeline to trigger"
                    },
                    "parameters": {
                        "type": "object",
                        "description": "Optional parameters to pass to the pipeline",
                        "additionalProperties": True
                    }
                },
                "required": ["pipelineId"]
            },
            arguments=TriggerPipelineArguments,
            handler=_trigger_pipeline,
        ),
        ToolSpec(
            name="binelek_get_pipeline_runs",
            description="Get the execution history for a specific pipeline. Shows all runs with their status, duration, and results.",
            input_schema={
                "type": "object",
                "properties": {
                    "pipelineId": {
                        "type": "string",
                        "description": "The ID of the pipeline whose runs to retrieve"
                    }
                },
                "required": ["pipelineId"]
            },
            arguments=PipelineIdArguments,
            handler=_get_pipeline_runs,
        ),
    ),
)
