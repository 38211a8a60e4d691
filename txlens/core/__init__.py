"""
Core utilities: the exception taxonomy shared by the RPC layer, the lookup
controller and the web/CLI surfaces.
"""

from txlens.core.exceptions import (
    EndpointError,
    LookupInProgressError,
    RpcError,
    TransportError,
    TxLensError,
    ValidationError,
)

__all__ = [
    "EndpointError",
    "LookupInProgressError",
    "RpcError",
    "TransportError",
    "TxLensError",
    "ValidationError",
]
