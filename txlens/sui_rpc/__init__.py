"""
Sui JSON-RPC package.

Calls the endpoint, fetches a transaction with progressively leaner field
sets when the endpoint rejects richer requests, and enriches the result with
checkpoint, object and balance lookups.
"""

from txlens.sui_rpc.client import SuiRpcClient, build_headers, call
from txlens.sui_rpc.enrichment import LookupResult, enrich
from txlens.sui_rpc.fetcher import (
    DEGRADED_DATA_WARNING,
    OPTION_CANDIDATES,
    FetchOutcome,
    fetch_transaction,
    is_retryable_error,
)
from txlens.sui_rpc.models import EnrichedResult, TransactionView

__all__ = [
    "DEGRADED_DATA_WARNING",
    "EnrichedResult",
    "FetchOutcome",
    "LookupResult",
    "OPTION_CANDIDATES",
    "SuiRpcClient",
    "TransactionView",
    "build_headers",
    "call",
    "enrich",
    "fetch_transaction",
    "is_retryable_error",
]
