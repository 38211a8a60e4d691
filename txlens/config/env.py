"""
Environment variable loading and validation for txlens.

- TXLENS_RPC_URL: Sui JSON-RPC endpoint (default: Tatum mainnet gateway)
- TXLENS_API_KEY: optional credential forwarded as the x-api-key header
- TXLENS_REQUEST_TIMEOUT_SEC: per-request HTTP timeout in seconds (default: 30)
- API_HOST / API_PORT: bind address for the web server
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is txlens/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_RPC_URL = "https://sui-mainnet.gateway.tatum.io/"
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0
DEFAULT_API_HOST = "127.0.0.1"
DEFAULT_API_PORT = 8000

# Placeholder hints for the API key field; never real credentials.
API_KEY_HINTS = (
    "t-646356f5xxxxxx001c17dc64-xxxxxxxxxxxxxxxxxxxxxx",
    "t-88392fd1xxxxxx99a5edc74-xxxxxxxxxxxxxxxxxxxxxx",
    "t-4e3c4afexxxxxx7485d2c01-xxxxxxxxxxxxxxxxxxxxxx",
)


def load_txlens_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def get_rpc_url() -> str:
    """Return TXLENS_RPC_URL from env, or the default mainnet gateway."""
    load_txlens_env()
    url = (os.getenv("TXLENS_RPC_URL") or "").strip()
    return url or DEFAULT_RPC_URL


def get_api_key() -> str | None:
    """Return TXLENS_API_KEY from env; None when unset or blank."""
    load_txlens_env()
    key = (os.getenv("TXLENS_API_KEY") or "").strip()
    return key or None


def get_request_timeout() -> float:
    """
    Return TXLENS_REQUEST_TIMEOUT_SEC as a positive float.
    Falls back to the default on missing, malformed or non-positive values.
    """
    load_txlens_env()
    raw = (os.getenv("TXLENS_REQUEST_TIMEOUT_SEC") or "").strip()
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT_SEC
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT_SEC
    return value if value > 0 else DEFAULT_REQUEST_TIMEOUT_SEC


def get_api_host() -> str:
    load_txlens_env()
    return (os.getenv("API_HOST") or "").strip() or DEFAULT_API_HOST


def get_api_port() -> int:
    load_txlens_env()
    raw = (os.getenv("API_PORT") or "").strip()
    try:
        return int(raw) if raw else DEFAULT_API_PORT
    except ValueError:
        return DEFAULT_API_PORT


def mask_rpc_url(url: str) -> str:
    """Mask an api-key query parameter so endpoints can be logged safely."""
    if "api-key=" in url:
        return url.split("api-key=")[0] + "api-key=***"
    return url
