"""
Presentation model builder.

Turns an EnrichedResult into five named sections (Transaction, Gas + balance,
Object changes, Events, Raw response), each made of sink-neutral blocks plus
a one-line callout. Rendering sinks (txlens.render) own markup and escaping;
nothing here produces HTML.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

from txlens.display.decoders import (
    describe_event_type,
    describe_object_change,
    describe_owner,
    get_event_description,
    parse_move_type,
    shorten_value,
)
from txlens.display.formatting import (
    calc_net_gas_cost,
    format_coin_amount,
    format_sui,
    format_timestamp_ms,
    to_int,
)
from txlens.sui_rpc.models import (
    BalanceChange,
    BalanceSnapshot,
    EnrichedResult,
    EventRecord,
    GasUsed,
    ObjectChange,
    ObjectChangeKind,
    TransactionView,
)

TONE_SUCCESS = "success"
TONE_FAIL = "fail"

RAW_JSON_SUMMARY = "Toggle raw JSON"

# -----------------------------------------------------------------------------
# Model
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Tag:
    text: str
    tone: str = ""


@dataclass(frozen=True)
class TagRow:
    tags: tuple[Tag, ...]


@dataclass(frozen=True)
class Paragraph:
    text: str
    tone: str = ""


@dataclass(frozen=True)
class ItemList:
    items: tuple[str, ...]
    heading: str | None = None


@dataclass(frozen=True)
class RawJson:
    text: str
    summary: str = RAW_JSON_SUMMARY


Block = Union[TagRow, Paragraph, ItemList, RawJson]


def _block_to_dict(block: Block) -> dict[str, Any]:
    if isinstance(block, TagRow):
        return {"kind": "tags", "tags": [{"text": t.text, "tone": t.tone} for t in block.tags]}
    if isinstance(block, Paragraph):
        return {"kind": "paragraph", "text": block.text, "tone": block.tone}
    if isinstance(block, ItemList):
        return {"kind": "list", "heading": block.heading, "items": list(block.items)}
    return {"kind": "raw_json", "summary": block.summary, "text": block.text}


@dataclass(frozen=True)
class Section:
    title: str
    blocks: tuple[Block, ...]
    callout: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "callout": self.callout,
            "blocks": [_block_to_dict(b) for b in self.blocks],
        }


@dataclass(frozen=True)
class PresentationModel:
    sections: tuple[Section, ...]

    def section(self, title: str) -> Section | None:
        for section in self.sections:
            if section.title == title:
                return section
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"sections": [s.to_dict() for s in self.sections]}


# -----------------------------------------------------------------------------
# Transaction
# -----------------------------------------------------------------------------


def _normalized_status(status: str | None) -> str:
    return (status or "").lower()


def status_badge(status: str | None) -> Tag:
    normalized = _normalized_status(status)
    if normalized == "success":
        return Tag("✔ Success", TONE_SUCCESS)
    if normalized in ("failure", "failed"):
        return Tag("✖ Failed", TONE_FAIL)
    return Tag(f"Status: {status or 'Unknown'}")


def checkpoint_details(checkpoint_info: dict[str, Any] | None) -> str | None:
    if not checkpoint_info:
        return None
    parts = [f"Proposer: {checkpoint_info.get('proposer') or 'Unknown proposer'}"]
    checkpoint_time = format_timestamp_ms(checkpoint_info.get("timestampMs"))
    if checkpoint_time:
        parts.append(f"Checkpoint time: {checkpoint_time}")
    return " — ".join(parts)


def transaction_blocks(view: TransactionView, checkpoint_info: dict[str, Any] | None) -> tuple[Block, ...]:
    blocks: list[Block] = [
        TagRow((
            Tag(f"Digest: {view.digest or '—'}"),
            Tag(f"Sender: {view.sender or 'Unknown sender'}"),
        )),
        TagRow((
            status_badge(view.status),
            Tag(f"Timestamp: {format_timestamp_ms(view.timestamp_ms) or 'Not available'}"),
            Tag(f"Checkpoint: {view.checkpoint or 'Unknown'}"),
        )),
    ]
    details = checkpoint_details(checkpoint_info)
    if details:
        blocks.append(Paragraph(details))
    if view.status_error:
        blocks.append(Paragraph(f"Error: {view.status_error}", TONE_FAIL))
    return tuple(blocks)


def transaction_callout(view: TransactionView) -> str:
    sender = shorten_value(view.sender) or "an unknown sender"
    digest = shorten_value(view.digest) or "—"
    status = _normalized_status(view.status) or "unknown"
    if status == "success":
        return f"Transaction {digest} succeeded for {sender}."
    if status in ("failure", "failed"):
        reason = view.status_error or "the chain returned an error"
        return f"Transaction {digest} failed for {sender} because {reason}."
    return f"Status for transaction {digest} from {sender} is {status}."


# -----------------------------------------------------------------------------
# Gas + balance
# -----------------------------------------------------------------------------


def _net_gas_text(gas_used: GasUsed) -> str:
    try:
        return format_sui(calc_net_gas_cost(gas_used))
    except (TypeError, ValueError):
        return "—"


def _balance_verb(amount: Any) -> str:
    try:
        value = to_int(amount if amount not in (None, "") else "0")
    except (TypeError, ValueError):
        return "Changed"
    return "Received" if value >= 0 else "Spent"


def gas_blocks(
    view: TransactionView, balance_snapshots: list[BalanceSnapshot]
) -> tuple[Block, ...]:
    blocks: list[Block] = []
    gas = view.gas_used
    if gas is not None:
        items = [
            f"Computation: {format_sui(gas.computation_cost)}",
            f"Storage: {format_sui(gas.storage_cost)}",
            f"Rebate: {format_sui(gas.storage_rebate)}",
        ]
        if gas.non_refundable_storage_fee not in (None, "", 0, "0"):
            items.append(f"Non-refundable storage fee: {format_sui(gas.non_refundable_storage_fee)}")
        items.append(f"Net gas cost: {_net_gas_text(gas)}")
        blocks.append(ItemList(tuple(items), heading="Gas breakdown"))

    if view.balance_changes:
        blocks.append(ItemList(
            tuple(_balance_line(change) for change in view.balance_changes),
            heading="Balance changes",
        ))
    else:
        blocks.append(Paragraph("No balance changes reported."))

    if balance_snapshots:
        blocks.append(ItemList(
            tuple(
                f"{s.owner} currently holds "
                f"{format_coin_amount(s.coin_type, s.total_balance if s.total_balance is not None else '—')} "
                f"({s.coin_type})"
                for s in balance_snapshots
            ),
            heading="Live balances",
        ))
    return tuple(blocks)


def _balance_line(change: BalanceChange) -> str:
    amount = format_coin_amount(change.coin_type, change.amount)
    return (
        f"{_balance_verb(change.amount)} {amount} ({change.coin_type}) "
        f"for {describe_owner(change.owner)}"
    )


def gas_callout(view: TransactionView) -> str:
    if view.gas_used is None:
        return "Gas information was not returned by the RPC."
    net = _net_gas_text(view.gas_used)
    count = len(view.balance_changes)
    if count == 0:
        return f"Net gas cost: {net}. No explicit balance deltas were returned."
    return f"Net gas cost: {net}. There were {count} recorded balance change{'' if count == 1 else 's'}."


# -----------------------------------------------------------------------------
# Object changes
# -----------------------------------------------------------------------------


def object_blocks(
    changes: tuple[ObjectChange, ...], object_details: dict[str, dict[str, Any]]
) -> tuple[Block, ...]:
    if not changes:
        return (Paragraph("No object changes returned."),)
    return (ItemList(tuple(
        describe_object_change(c, object_details.get(c.object_id) if c.object_id else None)
        for c in changes
    )),)


def object_callout(changes: tuple[ObjectChange, ...]) -> str:
    if not changes:
        return "No objects were reported as created, mutated, or transferred."
    created = sum(1 for c in changes if c.kind is ObjectChangeKind.CREATED)
    mutated = sum(1 for c in changes if c.kind is ObjectChangeKind.MUTATED)
    transferred = sum(1 for c in changes if c.kind is ObjectChangeKind.TRANSFERRED)
    return (
        f"{created} created, {mutated} mutated, and {transferred} "
        f"transferred object{'' if transferred == 1 else 's'}."
    )


# -----------------------------------------------------------------------------
# Events
# -----------------------------------------------------------------------------


def event_blocks(events: tuple[EventRecord, ...]) -> tuple[Block, ...]:
    if not events:
        return (Paragraph("No events."),)
    lines = []
    for index, event in enumerate(events, start=1):
        sender = f" — sender: {shorten_value(event.sender)}" if event.sender else ""
        lines.append(f"Event {index}: {describe_event_type(event.type)}{sender}")
    return (ItemList(tuple(lines)),)


def events_callout(events: tuple[EventRecord, ...]) -> str:
    count = len(events)
    if count == 0:
        return "No events were emitted."

    modules = list(dict.fromkeys(
        parsed.module for parsed in (parse_move_type(e.type) for e in events)
        if parsed is not None and parsed.module
    ))
    senders = list(dict.fromkeys(shorten_value(e.sender) for e in events if e.sender))
    descriptions = [d for d in (get_event_description(e.type) for e in events) if d]
    details = f" Detail: {descriptions[0]}" if descriptions else ""

    if count == 1:
        module_detail = f" from {modules[0]}" if modules else ""
        sender_detail = f" by {senders[0]}" if senders else ""
        return f"One event{module_detail}{sender_detail}.{details}".strip()

    module_text = ", ".join(modules) if modules else "various modules"
    actors = len(senders) or "several"
    return (
        f"{count} events lit up {module_text}, triggered by {actors} "
        f"actor{'' if len(senders) == 1 else 's'}.{details}"
    )


# -----------------------------------------------------------------------------
# Assembly
# -----------------------------------------------------------------------------


def raw_json_text(enriched: EnrichedResult) -> str:
    return json.dumps(enriched.to_dict(), indent=2, ensure_ascii=False, default=str)


def build_presentation(enriched: EnrichedResult) -> PresentationModel:
    """Derive the five display sections from an enriched transaction result."""
    view = enriched.view
    return PresentationModel(sections=(
        Section(
            "Transaction",
            transaction_blocks(view, enriched.checkpoint_info),
            transaction_callout(view),
        ),
        Section(
            "Gas + balance",
            gas_blocks(view, enriched.balance_snapshots),
            gas_callout(view),
        ),
        Section(
            "Object changes",
            object_blocks(view.object_changes, enriched.object_details),
            object_callout(view.object_changes),
        ),
        Section(
            "Events",
            event_blocks(view.events),
            events_callout(view.events),
        ),
        Section("Raw response", (RawJson(raw_json_text(enriched)),)),
    ))
