"""HTTP JSON-RPC client for a chain node."""

import itertools
from typing import Any

import httpx
from pydantic import ValidationError

from cbcbootstrap import config
from cbcbootstrap.chain.types import convert_ws_to_http
from cbcbootstrap.errors import RPCError, TransportError
from cbcbootstrap.telemetry import get_logger, metrics

from .models import RPCRequest, RPCResponse

logger = get_logger(__name__)


class NodeRPCClient:
    """Client for one-shot JSON-RPC calls over HTTP.

    Metadata payloads are large, so every call is a plain POST round trip
    instead of a message on a long-lived WebSocket. Each call opens its own
    httpx client; there is no pooling and no retry at this level.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = config.RPC_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize NodeRPCClient.

        Args:
            endpoint: Node endpoint; ws:// and wss:// are translated to HTTP(S)
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.endpoint = convert_ws_to_http(endpoint)
        self.timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Call an RPC method and return its result payload.

        Raises:
            TransportError: HTTP failure or unparsable response
            RPCError: The node returned an error object
        """
        request = RPCRequest(id=next(self._ids), method=method, params=params or [])
        response = await self.send(request)
        return response.result

    async def send(self, request: RPCRequest) -> RPCResponse:
        """Perform one request/response round trip."""
        if config.METRICS_ENABLED:
            metrics.inc("rpc.calls", {"method": request.method})
        try:
            return await self._send(request)
        except TransportError:
            self._count_error(request.method, "transport")
            raise
        except RPCError:
            self._count_error(request.method, "rpc")
            raise

    async def _send(self, request: RPCRequest) -> RPCResponse:
        logger.debug(f"[RPC] -> {request.method} (id={request.id})")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                http_resp = await client.post(
                    self.endpoint,
                    json=request.model_dump(),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.TimeoutException as e:
            raise TransportError(f"request timed out after {self.timeout}s: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"failed to make request: {e}") from e

        if not http_resp.is_success:
            raise TransportError(f"unexpected status code: {http_resp.status_code}")

        try:
            response = RPCResponse.model_validate(http_resp.json())
        except (ValueError, ValidationError) as e:
            # ValueError 覆盖 JSONDecodeError 与非 UTF-8 响应体的 UnicodeDecodeError
            raise TransportError(f"failed to unmarshal response: {e}") from e

        if response.error is not None:
            raise RPCError(response.error.code, response.error.message)

        return response

    def _count_error(self, method: str, kind: str) -> None:
        if config.METRICS_ENABLED:
            metrics.inc("rpc.errors", {"method": method, "kind": kind})
