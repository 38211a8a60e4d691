"""
Fallback transaction fetcher.

Public endpoints reject some option combinations for sui_getTransactionBlock
(most often showEvents on gateways backed by pruned nodes). The fetcher asks
for the richest field set first and steps down through OPTION_CANDIDATES while
the failure looks like an endpoint limitation; any other error stops the
sequence immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from txlens.core.exceptions import (
    EndpointError,
    TransportError,
    TxLensError,
    ValidationError,
)
from txlens.txlens_logging import get_logger

logger = get_logger(__name__)

GET_TRANSACTION_METHOD = "sui_getTransactionBlock"

DEGRADED_DATA_WARNING = (
    "Some RPC fields are unavailable on this endpoint. "
    "Showing the most complete data we could fetch."
)

# Most to least detailed; None sends no options object (server default shape).
OPTION_CANDIDATES: tuple[dict[str, bool] | None, ...] = (
    {
        "showInput": True,
        "showEffects": True,
        "showEvents": True,
        "showObjectChanges": True,
        "showBalanceChanges": True,
    },
    {
        "showInput": True,
        "showEffects": True,
        "showObjectChanges": True,
        "showBalanceChanges": True,
    },
    {
        "showEffects": True,
        "showObjectChanges": True,
        "showBalanceChanges": True,
    },
    {
        "showEffects": True,
        "showBalanceChanges": True,
    },
    {
        "showEffects": True,
    },
    None,
)

# Substrings (lower-case) that mark an error as an endpoint limitation.
# "unsupported" and "not ready" may also come from a permanently incompatible
# endpoint; they still step down to a leaner request.
RETRYABLE_MESSAGE_MARKERS = (
    "invalid response from upstream",
    "timeout",
    "timed out",
    "unavailable",
    "unsupported",
    "not ready",
)


class RpcCaller(Protocol):
    async def call(self, method: str, params: list[Any]) -> Any: ...


@dataclass(frozen=True)
class FetchOutcome:
    result: Any
    warning: str | None = None
    candidate_index: int = 0
    """Index into the candidate sequence that succeeded."""


def is_retryable_error(error: BaseException | None) -> bool:
    """
    True for network-level transport failures (no HTTP response) and for errors
    whose message mentions one of RETRYABLE_MESSAGE_MARKERS, case-insensitively.
    An unusable endpoint URL is never retryable.
    """
    if error is None or isinstance(error, EndpointError):
        return False
    if isinstance(error, TransportError) and error.status_code is None:
        return True
    if isinstance(error, TxLensError):
        message = error.message
    else:
        message = str(error)
    message = (message or "").lower()
    if not message:
        return False
    return any(marker in message for marker in RETRYABLE_MESSAGE_MARKERS)


def build_params(digest: str, options: dict[str, bool] | None) -> list[Any]:
    return [digest, dict(options)] if options else [digest]


async def fetch_transaction(
    rpc: RpcCaller,
    digest: str,
    candidates: Sequence[dict[str, bool] | None] = OPTION_CANDIDATES,
) -> FetchOutcome:
    """
    Fetch a transaction block, degrading the requested fields on retryable errors.

    Raises ValidationError for a blank digest (no network call), the first
    non-retryable error as soon as it occurs, or the last error once every
    candidate has been rejected.
    """
    digest = (digest or "").strip()
    if not digest:
        raise ValidationError("Please enter a transaction digest.")

    last_index = len(candidates) - 1
    for index, options in enumerate(candidates):
        try:
            result = await rpc.call(GET_TRANSACTION_METHOD, build_params(digest, options))
        except Exception as e:
            if not is_retryable_error(e):
                raise
            if index == last_index:
                logger.error("rpc_candidates_exhausted", digest=digest, error=str(e))
                raise
            logger.warning(
                "rpc_options_rejected",
                digest=digest,
                attempt=index + 1,
                candidates=len(candidates),
                error=str(e),
            )
            continue
        warning = DEGRADED_DATA_WARNING if index > 0 else None
        if warning:
            logger.info("rpc_degraded_fetch", digest=digest, candidate_index=index)
        return FetchOutcome(result=result, warning=warning, candidate_index=index)

    raise ValueError("candidates must be non-empty")
