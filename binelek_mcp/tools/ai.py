"""
AI platform tools: assistant chat, model predictions and entity analysis.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import ConfigDict, Field

from binelek_mcp.gateway.client import BinelekGatewayClient
from binelek_mcp.tools.base import ToolArguments, ToolGroup, ToolSpec, to_json

ModelType = Literal["cost_forecasting", "property_valuation", "market_trends", "risk_assessment"]
AnalysisType = Literal["insights", "anomalies", "recommendations", "risk", "comprehensive"]


class ChatMessage(ToolArguments):
    """One prior turn of a multi-turn conversation."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    role: Optional[str] = None
    content: Optional[str] = None


class ChatArguments(ToolArguments):
    message: str
    context: Optional[List[ChatMessage]] = None


class PredictArguments(ToolArguments):
    prediction_model: ModelType = Field(alias="modelType")
    input: Dict[str, Any]


class AnalyzeEntityArguments(ToolArguments):
    entity_id: str = Field(alias="entityId")
    analysis_type: AnalysisType = Field(alias="analysisType")


async def _chat(gateway: BinelekGatewayClient, args: ChatArguments) -> str:
    context: Optional[List[Dict[str, Any]]] = None
    if args.context is not None:
        context = [turn.model_dump(exclude_none=True) for turn in args.context]
    result = await gateway.chat(args.message, context)
    if isinstance(result, str):
        return result
    return to_json(result)


async def _predict(gateway: BinelekGatewayClient, args: PredictArguments) -> str:
    return to_json(await gateway.predict(args.prediction_model, args.input))


async def _analyze_entity(gateway: BinelekGatewayClient, args: AnalyzeEntityArguments) -> str:
    return to_json(await gateway.analyze_entity(args.entity_id, args.analysis_type))


AI_TOOLS = ToolGroup(
    "ai",
    (
        ToolSpec(
            name="binelek_ai_chat",
            description="Chat with the Binelek AI assistant. The AI has access to the knowledge graph and can answer questions, provide insights, and help with data analysis.",
            input_schema={
                "type": "object",
                "properties": {
                    "message": {
                        "type": "string",
                        "description": "Your message or question to the AI"
                    },
                    "context": {
                        "type": "array",
                        "description": "Optional: Previous conversation context for multi-turn conversations",
                        "items": {
                            "type": "object",
                            "properties": {
                                "role": {"type": "string"},
                                "content": {"type": "string"}
                            }
                        }
                    }
                },
                "required": ["message"]
            },
            arguments=ChatArguments,
            handler=_chat,
        ),
        ToolSpec(
            name="binelek_ai_predict",
            description="Make predictions using trained ML models. Available models include: cost_forecasting, property_valuation, market_trends, risk_assessment.",
            input_schema={
                "type": "object",
                "properties": {
                    "modelType": {
                        "type": "string",
                        "description": "The type of model to use (e.g., \"cost_forecasting\", \"property_valuation\")",
                        "enum": ["cost_forecasting", "property_valuation", "market_trends", "risk_assessment"]
                    },
                    "input": {
                        "type": "object",
                        "description": "Input data for the prediction",
                        "additionalProperties": True
                    }
                },
                "required": ["modelType", "input"]
            },
            arguments=PredictArguments,
            handler=_predict,
        ),
        ToolSpec(
            name="binelek_ai_analyze_entity",
            description="Analyze a specific entity using AI. Provides insights, anomaly detection, recommendations, and risk assessment.",
            input_schema={
                "type": "object",
                "properties": {
                    "entityId": {
                        "type": "string",
                        "description": "The ID of the entity to analyze"
                    },
                    "analysisType": {
                        "type": "string",
                        "description": "Type of analysis to perform",
                        "enum": ["insights", "anomalies", "recommendations", "risk", "comprehensive"]
                    }
                },
                "required": ["entityId", "analysisType"]
            },
            arguments=AnalyzeEntityArguments,
            handler=_analyze_entity,
        ),
    ),
)
