"""
Sui JSON-RPC client: one POST per call, uniform error classification.

- TransportError when httpx fails (connect, read, timeout, aborted), when the
  HTTP status is outside 2xx, or when the body is not JSON.
- EndpointError when httpx refuses the endpoint URL (malformed, unsupported scheme).
- RpcError when the body carries an `error` member, whatever the HTTP status.
- Otherwise the `result` member is returned verbatim.

No retry here; retry policy lives in the callers (see fetcher).
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx

from txlens.core.exceptions import EndpointError, RpcError, TransportError
from txlens.txlens_logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 30.0

# JSON-RPC request id counter
_request_ids = itertools.count(1)


def _next_id() -> int:
    return next(_request_ids)


def build_headers(api_key: str | None = None) -> dict[str, str]:
    """Request headers for the endpoint; x-api-key only when a non-blank key is supplied."""
    headers = {
        "accept": "application/json",
        "content-type": "application/json",
    }
    if api_key and api_key.strip():
        headers["x-api-key"] = api_key.strip()
    return headers


def _build_rpc_body(method: str, params: list[Any]) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": _next_id(),
        "method": method,
        "params": params,
    }


async def _post(
    client: httpx.AsyncClient,
    endpoint: str,
    headers: dict[str, str],
    method: str,
    params: list[Any],
) -> Any:
    body = _build_rpc_body(method, params)
    logger.debug("rpc_call", method=method, request_id=body["id"])
    try:
        resp = await client.post(endpoint, json=body, headers=headers)
    except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
        # Rejected before anything is sent; every candidate would fail the same way.
        raise EndpointError(f"Invalid RPC endpoint URL: {e}") from e
    except httpx.HTTPError as e:
        raise TransportError(f"RPC transport failed: {e}") from e

    # An error object wins over the HTTP status: some gateways answer 4xx/5xx with it.
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        raise RpcError.from_error_object(data["error"])

    if not resp.is_success:
        raise TransportError(
            f"RPC request failed with status {resp.status_code}",
            status_code=resp.status_code,
        )
    if not isinstance(data, dict):
        raise TransportError(
            "RPC response body is not a JSON object", status_code=resp.status_code
        )
    return data.get("result")


async def call(
    endpoint: str,
    headers: dict[str, str],
    method: str,
    params: list[Any],
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_TIMEOUT_SEC,
) -> Any:
    """
    Perform a single JSON-RPC call and return its `result`.

    Uses the given httpx client when supplied, otherwise a short-lived one.
    """
    if client is not None:
        return await _post(client, endpoint, headers, method, params)
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as own_client:
        return await _post(own_client, endpoint, headers, method, params)


class SuiRpcClient:
    """
    JSON-RPC client bound to one endpoint and one header set.

    Use as an async context manager; an injected httpx.AsyncClient is never
    closed by this class.

        async with SuiRpcClient(url, build_headers(key)) as rpc:
            result = await rpc.call("sui_getCheckpoint", ["1000"])
    """

    def __init__(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        if not endpoint.strip():
            raise ValueError("endpoint must be non-empty")
        self._endpoint = endpoint.strip()
        self._headers = dict(headers) if headers is not None else build_headers()
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def __aenter__(self) -> "SuiRpcClient":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def call(self, method: str, params: list[Any]) -> Any:
        """Call `method` with positional `params`; see module docstring for errors."""
        return await call(
            self._endpoint,
            self._headers,
            method,
            params,
            client=self._client,
            timeout=self._timeout,
        )
