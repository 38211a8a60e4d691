"""
txlens — Sui transaction lookup.

Fetches a transaction by digest over JSON-RPC (degrading the requested field
set when the endpoint rejects it), enriches it with checkpoint, object and
live balance lookups, and renders a human-readable breakdown.
"""

__version__ = "0.1.0"
