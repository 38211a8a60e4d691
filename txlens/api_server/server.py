"""
FastAPI server: lookup page and JSON API over the lookup controller.

GET  /                          lookup form
POST /lookup                    form submission; page with status and results
GET  /api/transactions/{digest} presentation model as JSON (x-api-key header forwarded)
GET  /health                    liveness

Nothing is stored; every request builds its own AppContext. The endpoint is
the configured default (TXLENS_RPC_URL).
"""

from __future__ import annotations

import random
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, Form, Header, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from txlens.config import get_settings
from txlens.config.env import API_KEY_HINTS, mask_rpc_url
from txlens.core.exceptions import LookupInProgressError, ValidationError
from txlens.lookup import AppContext, LookupOutcome, run_lookup
from txlens.render.html import render_page
from txlens.txlens_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class SectionResponse(BaseModel):
    """One presentation section."""

    title: str = Field(..., description="Section title, e.g. 'Transaction'")
    callout: str | None = Field(None, description="One-line summary; absent for the raw response")
    blocks: list[dict[str, Any]] = Field(default_factory=list, description="Sink-neutral body blocks")


class TransactionLookupResponse(BaseModel):
    """GET /api/transactions/{digest} response."""

    digest: str = Field(..., description="Digest that was looked up")
    status: str = Field(..., description="Status line shown to the user")
    warning: str | None = Field(None, description="Set when only a reduced field set could be fetched")
    sections: list[SectionResponse] = Field(default_factory=list)
    raw: dict[str, Any] = Field(default_factory=dict, description="Enriched RPC result")


# -----------------------------------------------------------------------------
# Lifespan: one pooled httpx client shared by all lookups
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_sec)
    ) as client:
        app.state.http_client = client
        logger.info("api_started", rpc_url=mask_rpc_url(settings.rpc_url))
        yield
    logger.info("api_stopped")


app = FastAPI(
    title="txlens",
    description="Sui transaction lookup: fetch, enrich and explain a transaction by digest.",
    version="0.1.0",
    lifespan=lifespan,
)


def _context(request: Request) -> AppContext:
    return AppContext.from_settings(
        get_settings(),
        client=getattr(request.app.state, "http_client", None),
    )


def _page(outcome: LookupOutcome | None, digest: str = "", api_key: str | None = None) -> str:
    return render_page(
        status=outcome.status if outcome else "",
        tone=outcome.tone if outcome else "",
        model=outcome.model if outcome else None,
        digest=digest,
        api_key=api_key,
        api_key_hint=random.choice(API_KEY_HINTS),
    )


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    return HTMLResponse(_page(None))


@app.post("/lookup", response_class=HTMLResponse)
async def lookup_form(
    request: Request,
    digest: str = Form(""),
    api_key: str = Form(""),
) -> HTMLResponse:
    outcome = await run_lookup(_context(request), digest, api_key or None)
    return HTMLResponse(_page(outcome, digest=digest.strip(), api_key=api_key.strip() or None))


@app.get("/api/transactions/{digest}", response_model=TransactionLookupResponse)
async def lookup_json(
    request: Request,
    digest: str,
    x_api_key: str | None = Header(None),
) -> TransactionLookupResponse:
    """
    Look up a transaction and return the presentation model.

    400 for a blank digest, 409 when the context is busy, 502 for upstream failures.
    """
    try:
        outcome = await run_lookup(_context(request), digest, x_api_key)
    except LookupInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message) from e
    if outcome.model is None or outcome.enriched is None:
        status_code = 400 if isinstance(outcome.error, ValidationError) else 502
        raise HTTPException(status_code=status_code, detail=outcome.status)
    return TransactionLookupResponse(
        digest=digest.strip(),
        status=outcome.status,
        warning=outcome.warning,
        sections=[SectionResponse(**s.to_dict()) for s in outcome.model.sections],
        raw=outcome.enriched.to_dict(),
    )
