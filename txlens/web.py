"""
Web server runner: txlens lookup page + JSON API under uvicorn.

Env: TXLENS_RPC_URL, TXLENS_REQUEST_TIMEOUT_SEC, API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn txlens.api_server.app:app --host 127.0.0.1 --port 8000
Terminal lookups: txlens <digest> (see txlens/cli.py)
"""

import os

# Configure structured logging before other imports that may log
from txlens.txlens_logging import get_logger

logger = get_logger("txlens.web")


def main() -> None:
    """Run the FastAPI app with uvicorn in the main thread."""
    from txlens.config import get_settings
    from txlens.config.env import mask_rpc_url

    settings = get_settings()

    from txlens.api_server.app import app
    import uvicorn

    logger.info(
        "web_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        rpc_url=mask_rpc_url(settings.rpc_url),
    )
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
