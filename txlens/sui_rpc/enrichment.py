"""
Enrichment orchestrator: checkpoint, object details and live balances.

Three independent lookups run concurrently. Each returns a LookupResult
instead of raising, so a broken auxiliary lookup degrades to an empty value
and never prevents the base transaction from being displayed. enrich()
returns only after all three have settled.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar

from txlens.sui_rpc.fetcher import RpcCaller
from txlens.sui_rpc.models import (
    AddressOwner,
    BalanceChange,
    BalanceSnapshot,
    EnrichedResult,
    ObjectChange,
    TransactionView,
)
from txlens.txlens_logging import get_logger

logger = get_logger(__name__)

CHECKPOINT_METHOD = "sui_getCheckpoint"
MULTI_GET_OBJECTS_METHOD = "sui_multiGetObjects"
BALANCE_METHOD = "sui_getBalance"

# Type and owner only; content/display/bcs are never rendered.
OBJECT_DETAIL_OPTIONS = {
    "showType": True,
    "showOwner": True,
    "showContent": False,
    "showDisplay": False,
    "showBcs": False,
}

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Outcome of one enrichment lookup: the (possibly degraded) value plus any recovered errors."""

    value: T
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


async def fetch_checkpoint_info(
    rpc: RpcCaller, checkpoint: str | None
) -> LookupResult[dict[str, Any] | None]:
    if not checkpoint:
        return LookupResult(None)
    try:
        info = await rpc.call(CHECKPOINT_METHOD, [checkpoint])
    except Exception as e:
        logger.warning("checkpoint_lookup_failed", checkpoint=checkpoint, error=str(e))
        return LookupResult(None, (f"checkpoint {checkpoint}: {e}",))
    return LookupResult(info if isinstance(info, dict) else None)


def unique_object_ids(object_changes: Iterable[ObjectChange]) -> list[str]:
    """Distinct non-empty object ids in first-seen order."""
    return list(dict.fromkeys(c.object_id for c in object_changes if c.object_id))


async def fetch_object_details(
    rpc: RpcCaller, object_changes: Iterable[ObjectChange]
) -> LookupResult[dict[str, dict[str, Any]]]:
    ids = unique_object_ids(object_changes)
    if not ids:
        return LookupResult({})
    try:
        response = await rpc.call(MULTI_GET_OBJECTS_METHOD, [ids, dict(OBJECT_DETAIL_OPTIONS)])
    except Exception as e:
        logger.warning("object_details_lookup_failed", object_count=len(ids), error=str(e))
        return LookupResult({}, (f"object details: {e}",))
    if not isinstance(response, list):
        logger.warning("object_details_unexpected_shape", result_type=type(response).__name__)
        return LookupResult({}, ("object details: unexpected response shape",))

    details: dict[str, dict[str, Any]] = {}
    for entry in response:
        # Per-object errors (deleted, not found) are skipped silently.
        if not isinstance(entry, dict) or entry.get("error"):
            continue
        data = entry.get("data")
        if isinstance(data, dict) and data.get("objectId"):
            details[data["objectId"]] = data
    return LookupResult(details)


def balance_targets(balance_changes: Iterable[BalanceChange]) -> list[tuple[str, str]]:
    """Distinct (address owner, coin type) pairs in first-seen order."""
    targets: dict[tuple[str, str], None] = {}
    for change in balance_changes:
        if not isinstance(change.owner, AddressOwner) or not change.coin_type:
            continue
        targets[(change.owner.address, change.coin_type)] = None
    return list(targets)


async def fetch_balance_snapshots(
    rpc: RpcCaller, balance_changes: Iterable[BalanceChange]
) -> LookupResult[list[BalanceSnapshot]]:
    """
    Current balance for each (owner, coin type) touched by the transaction.

    Pairs are queried one after another; a failing pair is logged and left
    out, the remaining pairs are still returned.
    """
    snapshots: list[BalanceSnapshot] = []
    errors: list[str] = []
    for owner, coin_type in balance_targets(balance_changes):
        try:
            balance = await rpc.call(BALANCE_METHOD, [owner, coin_type])
        except Exception as e:
            logger.warning(
                "balance_lookup_failed",
                owner=owner,
                coin_type=coin_type,
                error=str(e),
            )
            errors.append(f"balance {owner} {coin_type}: {e}")
            continue
        total = balance.get("totalBalance") if isinstance(balance, dict) else None
        snapshots.append(BalanceSnapshot(owner=owner, coin_type=coin_type, total_balance=total))
    return LookupResult(snapshots, tuple(errors))


async def enrich(rpc: RpcCaller, base_result: Any) -> EnrichedResult:
    """Run the three lookups concurrently and merge them into an EnrichedResult."""
    base = base_result if isinstance(base_result, dict) else {}
    view = TransactionView.from_rpc_result(base)

    checkpoint, objects, balances = await asyncio.gather(
        fetch_checkpoint_info(rpc, view.checkpoint),
        fetch_object_details(rpc, view.object_changes),
        fetch_balance_snapshots(rpc, view.balance_changes),
    )

    errors = [*checkpoint.errors, *objects.errors, *balances.errors]
    logger.info(
        "enrichment_completed",
        digest=view.digest,
        checkpoint_ok=checkpoint.ok,
        object_detail_count=len(objects.value),
        balance_snapshot_count=len(balances.value),
        recovered_errors=len(errors),
    )
    return EnrichedResult(
        base=base,
        checkpoint_info=checkpoint.value,
        object_details=objects.value,
        balance_snapshots=balances.value,
        lookup_errors=errors,
    )
