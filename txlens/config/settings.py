"""
Application settings.

Typed, immutable view over the environment getters in config.env, used by
the web server, the CLI and the lookup controller.
"""

from __future__ import annotations

from dataclasses import dataclass

from txlens.config import env


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    api_key: str | None
    request_timeout_sec: float
    api_host: str
    api_port: int


def get_settings() -> Settings:
    """
    Return the current application settings.

    Read fresh from the environment on every call; nothing is cached so
    tests can monkeypatch variables freely.
    """
    return Settings(
        rpc_url=env.get_rpc_url(),
        api_key=env.get_api_key(),
        request_timeout_sec=env.get_request_timeout(),
        api_host=env.get_api_host(),
        api_port=env.get_api_port(),
    )
