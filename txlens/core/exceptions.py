"""
Application-level exceptions.

- TransportError: the HTTP exchange itself failed (network, timeout, non-2xx status, non-JSON body).
- RpcError: the endpoint answered with a JSON-RPC error object.
- EndpointError: the endpoint URL itself is unusable (malformed, unsupported scheme).
- ValidationError: user input rejected before any network call.
- LookupInProgressError: a second lookup was submitted on a busy context.
"""

from __future__ import annotations

from typing import Any


class TxLensError(Exception):
    """Base class for every error raised by txlens."""

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.__class__.__name__


class TransportError(TxLensError):
    """Network or HTTP-layer failure. status_code is None when no response arrived."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RpcError(TxLensError):
    """Upstream JSON-RPC error; carries the upstream code and message."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.data = data

    @classmethod
    def from_error_object(cls, error: Any) -> "RpcError":
        """Build from the `error` member of a JSON-RPC response body."""
        if isinstance(error, dict):
            return cls(
                str(error.get("message") or "RPC returned an error"),
                code=error.get("code"),
                data=error.get("data"),
            )
        return cls(str(error) if error else "RPC returned an error")


class EndpointError(TxLensError):
    """The endpoint URL cannot be requested at all; never retried."""


class ValidationError(TxLensError):
    """Input rejected before any network call (e.g. empty digest)."""


class LookupInProgressError(TxLensError):
    """A lookup is already running on this application context."""
