"""
Display package — formatting, semantic decoding and the presentation model.

Pure functions only; no network access and no markup.
"""

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
)
from txlens.display.presentation import PresentationModel, Section, build_presentation

__all__ = [
    "PresentationModel",
    "Section",
    "build_presentation",
    "calc_net_gas_cost",
    "describe_event_type",
    "describe_object_change",
    "describe_owner",
    "format_coin_amount",
    "format_sui",
    "get_event_description",
    "parse_move_type",
    "shorten_value",
]
