"""
Lookup controller: digest in, status line plus presentation model out.

AppContext holds what a lookup surface needs (endpoint, timeout, optional
shared httpx client) and the busy flag that stands in for the disabled
submit button; a second submission while one is in flight is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from txlens.config import Settings
from txlens.config.env import mask_rpc_url
from txlens.core.exceptions import LookupInProgressError, TxLensError, ValidationError
from txlens.display.presentation import PresentationModel, build_presentation
from txlens.sui_rpc.client import DEFAULT_TIMEOUT_SEC, SuiRpcClient, build_headers
from txlens.sui_rpc.enrichment import enrich
from txlens.sui_rpc.fetcher import fetch_transaction
from txlens.sui_rpc.models import EnrichedResult
from txlens.txlens_logging import bind_digest, get_logger, lookup_context

logger = get_logger(__name__)

EMPTY_DIGEST_STATUS = "Please enter a transaction digest."
SUCCESS_STATUS = "Success — see the breakdown below."
NO_RESULT_STATUS = "No result returned from RPC."

TONE_SUCCESS = "success"
TONE_WARNING = "warning"
TONE_ERROR = "error"


@dataclass
class AppContext:
    endpoint: str
    timeout: float = DEFAULT_TIMEOUT_SEC
    client: httpx.AsyncClient | None = None
    busy: bool = field(default=False, init=False)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AppContext":
        return cls(endpoint=settings.rpc_url, timeout=settings.request_timeout_sec, **kwargs)


@dataclass(frozen=True)
class LookupOutcome:
    status: str
    tone: str
    model: PresentationModel | None = None
    enriched: EnrichedResult | None = None
    warning: str | None = None
    error: TxLensError | None = None

    @property
    def ok(self) -> bool:
        return self.model is not None


def failure_status(error: BaseException) -> str:
    message = error.message if isinstance(error, TxLensError) else str(error)
    return f"Unable to fetch transaction: {message}"


async def run_lookup(ctx: AppContext, digest: str, api_key: str | None = None) -> LookupOutcome:
    """
    Fetch, enrich and present one transaction.

    Lookup errors never escape: they become an error outcome with no model
    (results hidden). LookupInProgressError is raised when ctx is busy.
    """
    digest = (digest or "").strip()
    if not digest:
        return LookupOutcome(
            status=EMPTY_DIGEST_STATUS,
            tone=TONE_ERROR,
            error=ValidationError(EMPTY_DIGEST_STATUS),
        )
    if ctx.busy:
        raise LookupInProgressError("A lookup is already in progress.")

    log = bind_digest(digest)
    ctx.busy = True
    try:
        with lookup_context(digest, endpoint=mask_rpc_url(ctx.endpoint)):
            outcome = await _fetch_and_present(ctx, digest, api_key)
    except TxLensError as e:
        log.warning("lookup_failed", error=str(e), error_type=type(e).__name__)
        return LookupOutcome(status=failure_status(e), tone=TONE_ERROR, error=e)
    finally:
        ctx.busy = False
    return outcome


async def _fetch_and_present(ctx: AppContext, digest: str, api_key: str | None) -> LookupOutcome:
    async with SuiRpcClient(
        ctx.endpoint,
        build_headers(api_key),
        client=ctx.client,
        timeout=ctx.timeout,
    ) as rpc:
        fetched = await fetch_transaction(rpc, digest)
        if not fetched.result:
            return LookupOutcome(status=NO_RESULT_STATUS, tone=TONE_ERROR)
        enriched = await enrich(rpc, fetched.result)
    model = build_presentation(enriched)

    # digest and endpoint come from lookup_context
    logger.info(
        "lookup_completed",
        degraded=fetched.warning is not None,
        candidate_index=fetched.candidate_index,
    )
    if fetched.warning:
        return LookupOutcome(
            status=fetched.warning,
            tone=TONE_WARNING,
            model=model,
            enriched=enriched,
            warning=fetched.warning,
        )
    return LookupOutcome(status=SUCCESS_STATUS, tone=TONE_SUCCESS, model=model, enriched=enriched)
