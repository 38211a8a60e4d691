"""
Data models for Sui transaction lookups.

Typed, read-only views over the untyped JSON returned by sui_getTransactionBlock
and the enrichment lookups. Parsing is tolerant: any field may be absent
depending on which option set the endpoint accepted, so every accessor has a
defined fallback and nothing here raises on missing data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


# -----------------------------------------------------------------------------
# Owner descriptor (tagged variant)
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class AddressOwner:
    address: str


@dataclass(frozen=True)
class ObjectOwner:
    object_id: str


@dataclass(frozen=True)
class SharedOwner:
    initial_version: str | None = None


@dataclass(frozen=True)
class ImmutableOwner:
    pass


@dataclass(frozen=True)
class UnknownOwner:
    pass


Owner = Union[AddressOwner, ObjectOwner, SharedOwner, ImmutableOwner, UnknownOwner]


def parse_owner(raw: Any) -> Owner:
    """
    Parse an RPC owner value.

    Accepts {"AddressOwner": addr}, {"ObjectOwner": id},
    {"Shared": {"initial_shared_version": v}} (camelCase also accepted),
    the bare string "Immutable" and {"Immutable": ...}.
    """
    if isinstance(raw, str):
        return ImmutableOwner() if raw == "Immutable" else UnknownOwner()
    if not isinstance(raw, dict):
        return UnknownOwner()
    if raw.get("AddressOwner"):
        return AddressOwner(str(raw["AddressOwner"]))
    if raw.get("ObjectOwner"):
        return ObjectOwner(str(raw["ObjectOwner"]))
    if "Shared" in raw:
        shared = raw["Shared"]
        version = None
        if isinstance(shared, dict):
            version = shared.get("initial_shared_version") or shared.get(
                "initialSharedVersion"
            )
        return SharedOwner(str(version) if version else None)
    if "Immutable" in raw:
        return ImmutableOwner()
    return UnknownOwner()


# -----------------------------------------------------------------------------
# Transaction parts
# -----------------------------------------------------------------------------


class ObjectChangeKind(Enum):
    CREATED = "created"
    MUTATED = "mutated"
    TRANSFERRED = "transferred"
    DELETED = "deleted"
    WRAPPED = "wrapped"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: Any) -> "ObjectChangeKind":
        for kind in cls:
            if kind is not cls.OTHER and kind.value == value:
                return kind
        return cls.OTHER


@dataclass(frozen=True)
class ObjectChange:
    """One entry of objectChanges[]."""

    kind: ObjectChangeKind
    raw_type: str | None
    """Type string as sent by the RPC (kept for kinds we do not model, e.g. published)."""
    object_id: str | None
    object_type: str | None = None
    owner: Owner = field(default_factory=UnknownOwner)

    @classmethod
    def from_rpc_item(cls, item: Any) -> "ObjectChange":
        if not isinstance(item, dict):
            return cls(kind=ObjectChangeKind.OTHER, raw_type=None, object_id=None)
        raw_type = item.get("type")
        return cls(
            kind=ObjectChangeKind.from_raw(raw_type),
            raw_type=str(raw_type) if raw_type else None,
            object_id=item.get("objectId") or None,
            object_type=item.get("objectType") or None,
            owner=parse_owner(item.get("owner")),
        )


@dataclass(frozen=True)
class BalanceChange:
    """One entry of balanceChanges[]; amount stays the signed integer string from the wire."""

    owner: Owner
    coin_type: str | None
    amount: Any

    @classmethod
    def from_rpc_item(cls, item: Any) -> "BalanceChange":
        if not isinstance(item, dict):
            return cls(owner=UnknownOwner(), coin_type=None, amount=None)
        return cls(
            owner=parse_owner(item.get("owner")),
            coin_type=item.get("coinType") or None,
            amount=item.get("amount"),
        )


@dataclass(frozen=True)
class EventRecord:
    type: str | None
    sender: str | None = None

    @classmethod
    def from_rpc_item(cls, item: Any) -> "EventRecord":
        if not isinstance(item, dict):
            return cls(type=None)
        return cls(type=item.get("type") or None, sender=item.get("sender") or None)


@dataclass(frozen=True)
class MoveType:
    """Decomposed Move type tag address::module::name."""

    address: str
    module: str
    name: str


@dataclass(frozen=True)
class GasUsed:
    """effects.gasUsed; each field is the raw integer string (or None when absent)."""

    computation_cost: Any = None
    storage_cost: Any = None
    storage_rebate: Any = None
    non_refundable_storage_fee: Any = None

    @classmethod
    def from_rpc(cls, raw: Any) -> "GasUsed | None":
        if not isinstance(raw, dict):
            return None
        return cls(
            computation_cost=raw.get("computationCost"),
            storage_cost=raw.get("storageCost"),
            storage_rebate=raw.get("storageRebate"),
            non_refundable_storage_fee=raw.get("nonRefundableStorageFee"),
        )


def _dig(raw: Any, *path: str) -> Any:
    """Follow nested dict keys; None as soon as a level is missing or not a dict."""
    current = raw
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


@dataclass(frozen=True)
class TransactionView:
    """
    Structured view of a BaseTransactionResult.

    Built once per lookup from the raw RPC result; every field is optional.
    """

    digest: str | None = None
    checkpoint: str | None = None
    timestamp_ms: Any = None
    sender: str | None = None
    status: str | None = None
    status_error: str | None = None
    gas_used: GasUsed | None = None
    object_changes: tuple[ObjectChange, ...] = ()
    balance_changes: tuple[BalanceChange, ...] = ()
    events: tuple[EventRecord, ...] = ()

    @classmethod
    def from_rpc_result(cls, raw: Any) -> "TransactionView":
        if not isinstance(raw, dict):
            return cls()
        checkpoint = raw.get("checkpoint")
        balance_items = raw.get("balanceChanges")
        if not isinstance(balance_items, list):
            balance_items = _dig(raw, "effects", "balanceChanges")
        return cls(
            digest=raw.get("digest") or None,
            checkpoint=str(checkpoint) if checkpoint not in (None, "") else None,
            timestamp_ms=raw.get("timestampMs"),
            sender=_dig(raw, "transaction", "data", "sender") or None,
            status=_dig(raw, "effects", "status", "status") or None,
            status_error=_dig(raw, "effects", "status", "error") or None,
            gas_used=GasUsed.from_rpc(_dig(raw, "effects", "gasUsed")),
            object_changes=tuple(
                ObjectChange.from_rpc_item(i) for i in _as_list(raw.get("objectChanges"))
            ),
            balance_changes=tuple(
                BalanceChange.from_rpc_item(i) for i in _as_list(balance_items)
            ),
            events=tuple(EventRecord.from_rpc_item(i) for i in _as_list(raw.get("events"))),
        )


# -----------------------------------------------------------------------------
# Enrichment output
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class BalanceSnapshot:
    owner: str
    coin_type: str
    total_balance: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner": self.owner,
            "coinType": self.coin_type,
            "totalBalance": self.total_balance,
        }


@dataclass
class EnrichedResult:
    """
    Base transaction result plus checkpoint info, object details and live balances.

    `base` is the untouched RPC result; `to_dict()` merges the enrichment
    into it under checkpointInfo / objectDetails / balanceSnapshots.
    """

    base: dict[str, Any]
    checkpoint_info: dict[str, Any] | None = None
    object_details: dict[str, dict[str, Any]] = field(default_factory=dict)
    balance_snapshots: list[BalanceSnapshot] = field(default_factory=list)
    lookup_errors: list[str] = field(default_factory=list)
    """Errors recovered during enrichment; informational, not part of to_dict()."""

    @property
    def view(self) -> TransactionView:
        return TransactionView.from_rpc_result(self.base)

    def to_dict(self) -> dict[str, Any]:
        out = dict(self.base)
        out["checkpointInfo"] = self.checkpoint_info
        out["objectDetails"] = dict(self.object_details)
        out["balanceSnapshots"] = [s.to_dict() for s in self.balance_snapshots]
        return out
