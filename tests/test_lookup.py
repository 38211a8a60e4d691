"""
Tests for the lookup controller: status lines, tones, busy guard.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import DIGEST, ENDPOINT, install_happy_node, rpc_error
from txlens.core.exceptions import (
    EndpointError,
    LookupInProgressError,
    RpcError,
    ValidationError,
)
from txlens.lookup import (
    EMPTY_DIGEST_STATUS,
    NO_RESULT_STATUS,
    SUCCESS_STATUS,
    AppContext,
    failure_status,
    run_lookup,
)
from txlens.sui_rpc.fetcher import DEGRADED_DATA_WARNING


def _lookup(node, digest=DIGEST, api_key=None, ctx=None):
    async def go():
        async with node.client() as client:
            context = ctx or AppContext(ENDPOINT, client=client)
            if context.client is None:
                context.client = client
            return context, await run_lookup(context, digest, api_key)

    return asyncio.run(go())


def test_successful_lookup(sui_node):
    install_happy_node(sui_node)
    ctx, outcome = _lookup(sui_node)
    assert outcome.ok
    assert outcome.status == SUCCESS_STATUS
    assert outcome.tone == "success"
    assert outcome.warning is None
    assert outcome.error is None
    assert [s.title for s in outcome.model.sections][0] == "Transaction"
    assert outcome.enriched.checkpoint_info["proposer"] == "0xvalidator"
    assert ctx.busy is False


def test_degraded_lookup_shows_warning(sui_node):
    tx = install_happy_node(sui_node)

    def get_tx(params):
        if len(params) > 1 and params[1].get("showEvents"):
            return rpc_error("showEvents unsupported")
        return tx

    sui_node.on("sui_getTransactionBlock", get_tx)
    _, outcome = _lookup(sui_node)
    assert outcome.ok
    assert outcome.status == DEGRADED_DATA_WARNING
    assert outcome.tone == "warning"
    assert outcome.warning == DEGRADED_DATA_WARNING


def test_fatal_error_hides_results_and_releases_busy(sui_node):
    sui_node.on(
        "sui_getTransactionBlock",
        lambda params: rpc_error("Could not find the referenced transaction"),
    )
    ctx, outcome = _lookup(sui_node)
    assert not outcome.ok
    assert outcome.model is None
    assert outcome.tone == "error"
    assert outcome.status == (
        "Unable to fetch transaction: Could not find the referenced transaction"
    )
    assert isinstance(outcome.error, RpcError)
    assert ctx.busy is False
    assert len(sui_node.calls("sui_getTransactionBlock")) == 1


@pytest.mark.parametrize("digest", ["", "   ", None])
def test_empty_digest(sui_node, digest):
    _, outcome = _lookup(sui_node, digest=digest)
    assert outcome.status == EMPTY_DIGEST_STATUS
    assert outcome.tone == "error"
    assert isinstance(outcome.error, ValidationError)
    assert sui_node.requests == []


def test_busy_context_rejects_second_lookup(sui_node):
    install_happy_node(sui_node)
    ctx = AppContext(ENDPOINT)
    ctx.busy = True
    with pytest.raises(LookupInProgressError):
        _lookup(sui_node, ctx=ctx)
    assert sui_node.requests == []


def test_busy_while_in_flight():
    """A second submission on the same context is refused until the first settles."""

    async def go():
        release = asyncio.Event()

        async def handler(request):
            await release.wait()
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": None})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            ctx = AppContext(ENDPOINT, client=client)
            first = asyncio.create_task(run_lookup(ctx, DIGEST))
            await asyncio.sleep(0.01)
            assert ctx.busy is True
            with pytest.raises(LookupInProgressError):
                await run_lookup(ctx, DIGEST)
            release.set()
            outcome = await first
            return ctx, outcome

    ctx, outcome = asyncio.run(go())
    assert outcome.status == NO_RESULT_STATUS
    assert ctx.busy is False


def test_api_key_is_forwarded(sui_node):
    install_happy_node(sui_node)
    _lookup(sui_node, api_key="secret-key")
    assert all(h["x-api-key"] == "secret-key" for h in sui_node.headers)
    assert len(sui_node.headers) > 1


def test_null_result(sui_node):
    sui_node.on("sui_getTransactionBlock", lambda params: None)
    _, outcome = _lookup(sui_node)
    assert outcome.status == NO_RESULT_STATUS
    assert outcome.tone == "error"
    assert outcome.model is None
    assert sui_node.calls("sui_getCheckpoint") == []


def test_enrichment_failures_do_not_fail_lookup(sui_node):
    install_happy_node(sui_node)
    sui_node.on("sui_getCheckpoint", lambda params: rpc_error("pruned"))
    sui_node.on("sui_multiGetObjects", lambda params: rpc_error("pruned"))
    sui_node.on("sui_getBalance", lambda params: rpc_error("pruned"))
    _, outcome = _lookup(sui_node)
    assert outcome.ok
    assert outcome.status == SUCCESS_STATUS
    assert len(outcome.enriched.lookup_errors) == 4


def test_failure_status():
    assert failure_status(RpcError("boom")) == "Unable to fetch transaction: boom"
    assert failure_status(RuntimeError("x")) == "Unable to fetch transaction: x"


def test_malformed_endpoint_becomes_error_outcome(sui_node):
    ctx = AppContext("http://[::1/")
    ctx, outcome = _lookup(sui_node, ctx=ctx)
    assert not outcome.ok
    assert outcome.tone == "error"
    assert outcome.status.startswith("Unable to fetch transaction: Invalid RPC endpoint URL")
    assert isinstance(outcome.error, EndpointError)
    assert ctx.busy is False
    assert sui_node.requests == []
