"""
Formatting helpers for amounts, gas and timestamps.

All monetary arithmetic uses Python ints (arbitrary precision); floats never
touch an amount. 1 SUI = 1_000_000_000 MIST.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from txlens.sui_rpc.models import GasUsed

MIST_PER_SUI = 1_000_000_000
SUI_DECIMALS = 9
SUI_COIN_TYPE_SUFFIX = "::sui::SUI"
PLACEHOLDER = "—"


def to_int(value: Any) -> int:
    """
    Parse an integer amount from an int or an integer string.

    bool and float are rejected so a precision loss upstream cannot slip in.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"not an integer amount: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"not an integer amount: {value!r}")


def format_sui(value: Any) -> str:
    """Render a MIST amount as SUI, e.g. 1_500_000_000 -> "1.5 SUI"; None -> em dash."""
    if value is None:
        return PLACEHOLDER
    try:
        amount = to_int(value)
    except (TypeError, ValueError):
        return str(value)
    negative = amount < 0
    whole, fractional = divmod(abs(amount), MIST_PER_SUI)
    fraction = str(fractional).rjust(SUI_DECIMALS, "0").rstrip("0")
    text = f"{whole}.{fraction}" if fraction else str(whole)
    return f"{'-' if negative else ''}{text} SUI"


def is_sui_coin_type(coin_type: str | None) -> bool:
    return bool(coin_type) and coin_type.endswith(SUI_COIN_TYPE_SUFFIX)


def format_coin_amount(coin_type: str | None, amount: Any) -> str:
    """SUI amounts via format_sui; other coins as signed raw units ("+42 units")."""
    if is_sui_coin_type(coin_type):
        return format_sui(amount)
    try:
        value = to_int(amount)
    except (TypeError, ValueError):
        return str(amount)
    return f"{'+' if value >= 0 else '-'}{abs(value)} units"


def _gas_field(gas_used: GasUsed | dict[str, Any] | None, attr: str, key: str) -> int:
    if gas_used is None:
        return 0
    raw = gas_used.get(key) if isinstance(gas_used, dict) else getattr(gas_used, attr)
    return 0 if raw is None else to_int(raw)


def calc_net_gas_cost(gas_used: GasUsed | dict[str, Any] | None) -> int:
    """computation + storage + non-refundable fee - rebate; missing fields count as zero."""
    computation = _gas_field(gas_used, "computation_cost", "computationCost")
    storage = _gas_field(gas_used, "storage_cost", "storageCost")
    rebate = _gas_field(gas_used, "storage_rebate", "storageRebate")
    non_refundable = _gas_field(
        gas_used, "non_refundable_storage_fee", "nonRefundableStorageFee"
    )
    return computation + storage + non_refundable - rebate


def format_timestamp_ms(value: Any) -> str | None:
    """Epoch milliseconds -> "YYYY-MM-DD HH:MM:SS UTC"; None when missing or unparseable."""
    if value is None or value == "":
        return None
    try:
        millis = to_int(value)
        moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")
