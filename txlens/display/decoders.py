"""
Semantic decoders: ownership, object changes and Move event types to text.

Pure functions, no I/O. Inputs may be parsed models (txlens.sui_rpc.models)
or the raw JSON fragments they are parsed from.
"""

from __future__ import annotations

from typing import Any

from txlens.display.event_catalog import EVENT_DESCRIPTIONS
from txlens.sui_rpc.models import (
    AddressOwner,
    ImmutableOwner,
    MoveType,
    ObjectChange,
    ObjectChangeKind,
    ObjectOwner,
    SharedOwner,
    UnknownOwner,
    parse_owner,
)

DEFAULT_VISIBLE_CHARS = 6
ELLIPSIS = "…"


def shorten_value(value: Any, visible: int = DEFAULT_VISIBLE_CHARS) -> Any:
    """
    "0xabcdef…123456" for strings longer than 2 * visible + 3; everything else unchanged.

    Narrative text only; structured and raw output keeps full values.
    """
    if not value or not isinstance(value, str):
        return value
    if len(value) <= visible * 2 + 3:
        return value
    return f"{value[:visible]}{ELLIPSIS}{value[-visible:]}"


def describe_owner(owner: Any) -> str:
    if owner is None:
        return "unknown owner"
    if not isinstance(
        owner, (AddressOwner, ObjectOwner, SharedOwner, ImmutableOwner, UnknownOwner)
    ):
        owner = parse_owner(owner)

    if isinstance(owner, AddressOwner):
        return f"address {owner.address}"
    if isinstance(owner, ObjectOwner):
        return f"object {owner.object_id}"
    if isinstance(owner, SharedOwner):
        if owner.initial_version:
            return f"shared object (initial v{owner.initial_version})"
        return "shared object"
    if isinstance(owner, ImmutableOwner):
        return "immutable"
    return "unknown owner"


def _detail_type(detail: dict[str, Any] | None) -> str | None:
    if not isinstance(detail, dict):
        return None
    content = detail.get("content")
    content_type = content.get("type") if isinstance(content, dict) else None
    return detail.get("type") or content_type


def describe_object_change(change: Any, detail: dict[str, Any] | None = None) -> str:
    """One sentence per object change, e.g. "Created 0x2::coin::Coin (v12) 0xab… owned by address 0x1."."""
    if change is None:
        return "Unknown change"
    if not isinstance(change, ObjectChange):
        change = ObjectChange.from_rpc_item(change)

    owner = describe_owner(change.owner)
    type_name = change.object_type or _detail_type(detail) or "object"
    version = detail.get("version") if isinstance(detail, dict) else None
    version_text = f" (v{version})" if version else ""
    object_id = change.object_id or ""
    subject = f"{type_name}{version_text} {object_id}"

    kind = change.kind
    if kind is ObjectChangeKind.CREATED:
        return f"Created {subject} owned by {owner}."
    if kind is ObjectChangeKind.MUTATED:
        return f"Mutated {subject} now owned by {owner}."
    if kind is ObjectChangeKind.TRANSFERRED:
        return f"Transferred {subject} to {owner}."
    if kind is ObjectChangeKind.DELETED:
        return f"Deleted {subject}."
    if kind is ObjectChangeKind.WRAPPED:
        return f"Wrapped {subject} into another object."
    return f"{change.raw_type or 'Change'} on {type_name} {object_id} ({owner})."


def parse_move_type(move_type: str | None) -> MoveType | None:
    """
    Split "address::module::Name<T>" into its parts.

    Tags with fewer than three segments give a degenerate MoveType whose
    fields all equal the input; generic parameters stay inside `name`.
    """
    if not move_type:
        return None
    parts = move_type.split("::")
    if len(parts) < 3:
        return MoveType(address=move_type, module=move_type, name=move_type)
    address, module, *rest = parts
    return MoveType(address=address, module=module, name="::".join(rest))


def describe_event_type(event_type: str | None) -> str:
    if not event_type:
        return "Unknown event"
    parsed = parse_move_type(event_type)
    if parsed is None:
        return event_type
    return (
        f"{parsed.module or 'module'}::{parsed.name or 'event'} "
        f"(package {shorten_value(parsed.address)})"
    )


def get_event_description(event_type: str | None) -> str:
    """Plain-English meaning of a well-known event; "" when the event is not catalogued."""
    parsed = parse_move_type(event_type)
    if parsed is None:
        return ""
    struct = parsed.name
    base_struct = struct.split("<", 1)[0]
    return (
        EVENT_DESCRIPTIONS.get(f"{parsed.module}::{struct}")
        or EVENT_DESCRIPTIONS.get(f"{parsed.module}::{base_struct}")
        or ""
    )
