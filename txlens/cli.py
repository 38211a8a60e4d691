"""
Command-line lookup (simplified mode): explicit endpoint, plain-text output.

    txlens <digest> [--endpoint URL] [--api-key KEY] [--timeout SEC] [--json] [--raw]

Exit codes: 0 success, 1 lookup failed, 2 usage error (argparse).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from txlens.config import get_settings
from txlens.config.env import mask_rpc_url
from txlens.lookup import AppContext, LookupOutcome, run_lookup
from txlens.render.text import render_text
from txlens.txlens_logging import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="txlens",
        description="Fetch a Sui transaction by digest and explain what it did",
    )
    ap.add_argument("digest", help="Transaction digest")
    ap.add_argument(
        "--endpoint",
        default=None,
        help="Sui JSON-RPC endpoint URL (default: TXLENS_RPC_URL or the mainnet gateway)",
    )
    ap.add_argument(
        "--api-key",
        default=None,
        help="Value for the x-api-key header (default: TXLENS_API_KEY)",
    )
    ap.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds")
    ap.add_argument("--json", action="store_true", help="Print the presentation model as JSON")
    ap.add_argument("--raw", action="store_true", help="Include the raw JSON section in text output")
    return ap


def _print_outcome(outcome: LookupOutcome, *, as_json: bool, include_raw: bool) -> None:
    if as_json:
        payload = {
            "status": outcome.status,
            "warning": outcome.warning,
            "sections": outcome.model.to_dict()["sections"] if outcome.model else [],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    print(outcome.status)
    if outcome.model is not None:
        print()
        print(render_text(outcome.model, include_raw=include_raw), end="")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    ctx = AppContext(
        endpoint=(args.endpoint or settings.rpc_url).strip(),
        timeout=args.timeout if args.timeout and args.timeout > 0 else settings.request_timeout_sec,
    )
    api_key = args.api_key if args.api_key is not None else settings.api_key

    logger.debug("cli_lookup_started", endpoint=mask_rpc_url(ctx.endpoint))
    outcome = asyncio.run(run_lookup(ctx, args.digest, api_key))
    if not outcome.ok:
        print(outcome.status, file=sys.stderr)
        return 1
    _print_outcome(outcome, as_json=args.json, include_raw=args.raw)
    return 0


if __name__ == "__main__":
    sys.exit(main())
