"""
Structured logging for txlens.

JSON logs with timestamp, level and event_type.
Use get_logger() in all modules for aggregation-friendly output.
"""

from txlens.txlens_logging.logger import bind_digest, get_logger, lookup_context

__all__ = ["bind_digest", "get_logger", "lookup_context"]
