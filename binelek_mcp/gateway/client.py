"""
Binelek API gateway client.

Provides a typed async wrapper around the platform's REST gateway. All
requests share one pooled HTTP channel carrying the tenant and bearer
headers, and every failure leaves this module as a GatewayError subclass.
"""

import json
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from binelek_mcp.config import GatewayConfig
from binelek_mcp.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    RequestError,
    UnreachableError,
    UpstreamError,
)
from binelek_mcp.observability import get_logger


def _segment(value: Any) -> str:
    """Quote a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None from a request body."""
    return {k: v for k, v in data.items() if v is not None}


class BinelekGatewayClient:
    """
    Client for the Binelek API gateway.

    Statuses below 500 are returned to the caller as successful exchanges so
    that 4xx bodies reach the tool caller; statuses of 500 and above raise
    UpstreamError. No retries are performed.
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize gateway client.

        Args:
            config: Gateway connection settings
            transport: Optional httpx transport override (used by tests)

        Raises:
            ConfigurationError: If the base URL or tenant id is missing
        """
        if config is None:
            raise ConfigurationError("Gateway configuration is required")
        if not config.base_url:
            raise ConfigurationError("Gateway base URL is required")
        if not config.tenant_id:
            raise ConfigurationError("Gateway tenant id is required")

        self.config = config
        self.logger = get_logger("gateway.client")

        headers = {
            "X-Tenant-Id": config.tenant_id,
            "Content-Type": "application/json",
        }
        if config.auth_token:
            headers["Authorization"] = f"Bearer {config.auth_token}"

        self._http_client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=httpx.Timeout(config.timeout_seconds),
            transport=transport,
        )

    @property
    def tenant_id(self) -> str:
        return self.config.tenant_id

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def close(self) -> None:
        """Close the HTTP channel."""
        await self._http_client.aclose()
        self.logger.debug("Gateway client closed")

    async def __aenter__(self) -> "BinelekGatewayClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ============= Transport =============

    async def _send(
        self,
        method: str,
        path: str,
        json_data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request and normalize transport failures.

        The body is read separately from the send so that a response whose
        body cannot be decoded is still reported with its status code.

        Returns:
            The response for any status below 500

        Raises:
            UpstreamError: If the gateway answered with status >= 500 or with
                a body that could not be decoded
            UnreachableError: If no response arrived
            RequestError: If the request could not be sent
        """
        try:
            request = self._http_client.build_request(
                method,
                path,
                json=json_data,
                params=params,
            )
            response = await self._http_client.send(request, stream=True)
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise self._unreachable(e, method, path) from e
        except Exception as e:
            self.logger.error(f"API Error: {e}", method=method, path=path)
            raise RequestError(f"Request failed: {e}") from e

        try:
            await response.aread()
        except httpx.DecodingError as e:
            self.logger.error(
                f"API Error: {response.status_code} - undecodable response body",
                method=method,
                path=path,
                error=str(e),
            )
            raise UpstreamError(
                response.status_code,
                message=f"API Error ({response.status_code}): undecodable response body: {e}",
            ) from e
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise self._unreachable(e, method, path) from e
        finally:
            await response.aclose()

        if response.status_code >= 500:
            body = self._decode_error_body(response)
            self.logger.error(
                f"API Error: {response.status_code} - {json.dumps(body, default=str)}",
                method=method,
                path=path,
            )
            raise UpstreamError(response.status_code, body)

        return response

    def _unreachable(self, error: Exception, method: str, path: str) -> UnreachableError:
        self.logger.error(
            "API Error: No response received",
            method=method,
            path=path,
            error=f"{type(error).__name__}: {error}",
        )
        return UnreachableError(
            f"No response from API Gateway at {self.base_url}. Is it running? ({type(error).__name__})"
        )

    def _decode(self, response: httpx.Response, method: str, path: str) -> Any:
        """Decode a response body: JSON when declared as such, text otherwise."""
        if not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if "json" not in content_type.lower():
            return response.text

        try:
            return response.json()
        except ValueError as e:
            self.logger.error(
                f"API Error: invalid JSON in response ({response.status_code})",
                method=method,
                path=path,
            )
            raise UpstreamError(
                response.status_code,
                response.text,
                message=f"API Error ({response.status_code}): invalid JSON response body: {response.text[:200]}",
            ) from e

    @staticmethod
    def _decode_error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        response = await self._send(method, path, json_data=json_data, params=params)
        return self._decode(response, method, path)

    # Health check
    async def health_check(self) -> Any:
        return await self._request("GET", "/health")

    # ============= Ontology Service =============

    async def get_entity(self, entity_id: str) -> Any:
        """
        Get a single entity from the knowledge graph.

        Raises:
            EntityNotFoundError: If the gateway answers 404
        """
        path = f"/api/ontology/entities/{_segment(entity_id)}"
        response = await self._send("GET", path)
        if response.status_code == 404:
            self.logger.error(f"Entity not found: {entity_id}", path=path)
            raise EntityNotFoundError(entity_id)
        return self._decode(response, "GET", path)

    async def query_entities(
        self, cypher_query: str, parameters: Optional[Dict[str, Any]] = None
    ) -> Any:
        return await self._request(
            "POST",
            "/api/ontology/query",
            json_data={"query": cypher_query, "parameters": parameters or {}},
        )

    async def create_entity(self, entity_type: str, attributes: Dict[str, Any]) -> Any:
        return await self._request(
            "POST",
            "/api/ontology/entities",
            json_data={
                "type": entity_type,
                "attributes": attributes,
                "tenantId": self.tenant_id,
            },
        )

    async def update_entity(self, entity_id: str, attributes: Dict[str, Any]) -> Any:
        return await self._request(
            "PUT",
            f"/api/ontology/entities/{_segment(entity_id)}",
            json_data={"attributes": attributes},
        )

    async def delete_entity(self, entity_id: str) -> Any:
        return await self._request("DELETE", f"/api/ontology/entities/{_segment(entity_id)}")

    async def get_relationships(self, entity_id: str) -> Any:
        return await self._request(
            "GET", f"/api/ontology/entities/{_segment(entity_id)}/relationships"
        )

    async def create_relationship(
        self,
        source_id: str,
        target_id: str,
        relationship_type: str,
        properties: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return await self._request(
            "POST",
            "/api/ontology/relationships",
            json_data={
                "sourceId": source_id,
                "targetId": target_id,
                "type": relationship_type,
                "properties": properties or {},
            },
        )

    # ============= Search Service =============

    async def semantic_search(
        self, query: str, entity_types: Optional[List[str]] = None, limit: int = 10
    ) -> Any:
        return await self._request(
            "POST",
            "/api/search/semantic",
            json_data=_compact({"query": query, "entityTypes": entity_types, "limit": limit}),
        )

    async def keyword_search(
        self, query: str, filters: Optional[Dict[str, Any]] = None, limit: int = 10
    ) -> Any:
        return await self._request(
            "POST",
            "/api/search/keyword",
            json_data=_compact({"query": query, "filters": filters, "limit": limit}),
        )

    async def hybrid_search(self, query: str, **options: Any) -> Any:
        """
        Combined semantic and keyword search.

        Args:
            query: Search query
            **options: Extra body fields (semanticWeight, keywordWeight,
                entityTypes, filters, limit), sent as given
        """
        return await self._request(
            "POST",
            "/api/search/hybrid",
            json_data=_compact({**options, "query": query}),
        )

    # ============= AI Platform =============

    async def predict(self, model_type: str, input_data: Dict[str, Any]) -> Any:
        return await self._request(
            "POST",
            "/api/ai/predict",
            json_data={"modelType": model_type, "input": input_data},
        )

    async def chat(self, message: str, context: Optional[List[Dict[str, Any]]] = None) -> Any:
        return await self._request(
            "POST",
            "/api/ai/chat",
            json_data={"message": message, "context": context or []},
        )

    async def analyze_entity(self, entity_id: str, analysis_type: str) -> Any:
        return await self._request(
            "POST",
            "/api/ai/analyze",
            json_data={"entityId": entity_id, "analysisType": analysis_type},
        )

    # ============= Pipeline Service =============

    async def list_pipelines(self) -> Any:
        return await self._request("GET", "/api/pipeline/pipelines")

    async def get_pipeline(self, pipeline_id: str) -> Any:
        return await self._request("GET", f"/api/pipeline/pipelines/{_segment(pipeline_id)}")

    async def trigger_pipeline(
        self, pipeline_id: str, parameters: Optional[Dict[str, Any]] = None
    ) -> Any:
        return await self._request(
            "POST",
            f"/api/pipeline/pipelines/{_segment(pipeline_id)}/trigger",
            json_data=parameters or {},
        )

    async def get_pipeline_runs(self, pipeline_id: str) -> Any:
        return await self._request(
            "GET", f"/api/pipeline/pipelines/{_segment(pipeline_id)}/runs"
        )

    # ============= Domain Configuration =============

    async def list_domains(self) -> Any:
        return await self._request("GET", "/api/domains")

    async def get_domain_config(self, domain_name: str) -> Any:
        return await self._request("GET", f"/api/domains/{_segment(domain_name)}")

    async def get_ontology_schema(self, domain_name: str) -> Any:
        return await self._request("GET", f"/api/domains/{_segment(domain_name)}/ontology")

    # ============= Code Generation =============

    async def validate_yaml(self, yaml_content: str) -> Any:
        return await self._request(
            "POST", "/api/regen/validate", json_data={"yaml": yaml_content}
        )

    async def generate_code(self, yaml_content: str, target_language: str) -> Any:
        return await self._request(
            "POST",
            "/api/regen/generate",
            json_data={"yaml": yaml_content, "language": target_language},
        )

