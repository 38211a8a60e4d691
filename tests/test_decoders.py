"""
Tests for owner, object-change and Move event decoding.
"""

from __future__ import annotations

import pytest

from txlens.display.decoders import (
    describe_event_type,
    describe_object_change,
    describe_owner,
    get_event_description,
    parse_move_type,
    shorten_value,
)
from txlens.display.event_catalog import EVENT_DESCRIPTIONS
from txlens.sui_rpc.models import (
    AddressOwner,
    ImmutableOwner,
    MoveType,
    ObjectChange,
    ObjectChangeKind,
    SharedOwner,
    UnknownOwner,
    parse_owner,
)


# --- shorten_value ---


def test_shorten_value_long_address():
    value = "0x" + "a" * 64
    short = shorten_value(value, 6)
    assert short == "0xaaaa…aaaaaa"
    assert len(short) < len(value)
    assert short.startswith(value[:6])
    assert short.endswith(value[-6:])


def test_shorten_value_boundary():
    """Strings up to 2 * visible + 3 characters are left alone."""
    assert shorten_value("x" * 15) == "x" * 15
    assert shorten_value("x" * 16) == "xxxxxx…xxxxxx"
    assert shorten_value("abcdefgh", 2) == "ab…gh"


def test_shorten_value_passthrough():
    assert shorten_value(None) is None
    assert shorten_value("") == ""
    assert shorten_value(12345) == 12345


# --- owners ---


@pytest.mark.parametrize(
    "raw, expected",
    [
        ({"AddressOwner": "0x1"}, "address 0x1"),
        ({"ObjectOwner": "0x9"}, "object 0x9"),
        ({"Shared": {"initial_shared_version": 5}}, "shared object (initial v5)"),
        ({"Shared": {"initialSharedVersion": "12"}}, "shared object (initial v12)"),
        ({"Shared": {}}, "shared object"),
        ("Immutable", "immutable"),
        ({"Immutable": None}, "immutable"),
        (None, "unknown owner"),
        ({"ConsensusV9": {}}, "unknown owner"),
        ("Somebody", "unknown owner"),
    ],
)
def test_describe_owner_raw(raw, expected):
    assert describe_owner(raw) == expected


def test_describe_owner_parsed_variants():
    assert describe_owner(AddressOwner("0xabc")) == "address 0xabc"
    assert describe_owner(SharedOwner()) == "shared object"
    assert describe_owner(ImmutableOwner()) == "immutable"
    assert describe_owner(UnknownOwner()) == "unknown owner"


def test_parse_owner_variants():
    assert parse_owner({"AddressOwner": "0x1"}) == AddressOwner("0x1")
    assert parse_owner({"Shared": {"initial_shared_version": 3}}) == SharedOwner("3")
    assert parse_owner("Immutable") == ImmutableOwner()
    assert parse_owner(42) == UnknownOwner()


# --- object changes ---


def test_describe_created_with_detail_version():
    change = {
        "type": "created",
        "objectId": "0x11",
        "objectType": "0x2::coin::Coin<0x2::sui::SUI>",
        "owner": {"AddressOwner": "0x1"},
    }
    assert describe_object_change(change, {"version": "3"}) == (
        "Created 0x2::coin::Coin<0x2::sui::SUI> (v3) 0x11 owned by address 0x1."
    )


def test_describe_mutated_takes_type_from_detail():
    change = {"type": "mutated", "objectId": "0x22", "owner": {"AddressOwner": "0x1"}}
    assert describe_object_change(change, {"type": "0x3::pool::Pool"}) == (
        "Mutated 0x3::pool::Pool 0x22 now owned by address 0x1."
    )


def test_describe_detail_content_type_fallback():
    change = {"type": "mutated", "objectId": "0x22", "owner": "Immutable"}
    detail = {"content": {"type": "0x3::cfg::Config"}, "version": 9}
    assert describe_object_change(change, detail) == (
        "Mutated 0x3::cfg::Config (v9) 0x22 now owned by immutable."
    )


@pytest.mark.parametrize(
    "change, expected",
    [
        (
            {"type": "transferred", "objectId": "0x33", "owner": {"ObjectOwner": "0x9"}},
            "Transferred object 0x33 to object 0x9.",
        ),
        ({"type": "deleted", "objectId": "0x44"}, "Deleted object 0x44."),
        ({"type": "wrapped", "objectId": "0x55"}, "Wrapped object 0x55 into another object."),
        (
            {"type": "unwrapped", "objectId": "0x66", "objectType": "T", "owner": "Immutable"},
            "unwrapped on T 0x66 (immutable).",
        ),
        ({"objectId": "0x77"}, "Change on object 0x77 (unknown owner)."),
    ],
)
def test_describe_other_kinds(change, expected):
    assert describe_object_change(change) == expected


def test_describe_object_change_none():
    assert describe_object_change(None) == "Unknown change"


def test_object_change_kind_from_raw():
    assert ObjectChange.from_rpc_item({"type": "created"}).kind is ObjectChangeKind.CREATED
    assert ObjectChange.from_rpc_item({"type": "published"}).kind is ObjectChangeKind.OTHER
    assert ObjectChange.from_rpc_item({"type": "other"}).kind is ObjectChangeKind.OTHER
    assert ObjectChange.from_rpc_item("garbage").kind is ObjectChangeKind.OTHER


# --- Move types and events ---


def test_parse_move_type():
    assert parse_move_type("0x2::coin::MintEvent") == MoveType("0x2", "coin", "MintEvent")
    generic = parse_move_type("0x2::coin::CoinMetadata<0x2::sui::SUI>")
    assert generic == MoveType("0x2", "coin", "CoinMetadata<0x2::sui::SUI>")


def test_parse_move_type_degenerate():
    assert parse_move_type("foo::bar") == MoveType("foo::bar", "foo::bar", "foo::bar")
    assert parse_move_type("") is None
    assert parse_move_type(None) is None


def test_event_description_known():
    assert get_event_description("0xabc::coin::MintEvent") != ""
    assert get_event_description("0xabc::coin::MintEvent") == EVENT_DESCRIPTIONS["coin::MintEvent"]


def test_event_description_strips_generics():
    assert get_event_description("0x2::coin::MintEvent<0x2::sui::SUI>") == (
        EVENT_DESCRIPTIONS["coin::MintEvent"]
    )


def test_event_description_unknown():
    assert get_event_description("0xabc::nothing::Here") == ""
    assert get_event_description("not-a-type") == ""
    assert get_event_description(None) == ""


def test_event_table_is_immutable():
    with pytest.raises(TypeError):
        EVENT_DESCRIPTIONS["coin::MintEvent"] = "changed"  # type: ignore[index]
    assert len(EVENT_DESCRIPTIONS) >= 20


def test_describe_event_type():
    tag = "0x" + "c" * 64 + "::vault::DepositEvent"
    assert describe_event_type(tag) == "vault::DepositEvent (package 0xcccc…cccccc)"
    assert describe_event_type(None) == "Unknown event"
