"""
Pytest fixtures for txlens tests. A fake Sui JSON-RPC node served through
httpx.MockTransport; no test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

ENDPOINT = "https://rpc.test/"

SUI = "0x2::sui::SUI"
USDC = "0xdba3::usdc::USDC"
SENDER = "0x" + "a" * 64
RECIPIENT = "0x" + "b" * 64
DIGEST = "9XbqEUfvRvyS4wZbyVAvDGvF8gSzQbmrmpZzKuiYHjGg"


def rpc_result(result: Any, request_id: int = 1) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": request_id, "result": result})


def rpc_error(message: str, code: int = -32000, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"jsonrpc": "2.0", "id": 1, "error": {"code": code, "message": message}},
    )


class FakeSuiNode:
    """
    Records every JSON-RPC request and answers per method.

    Handlers receive the params list and return an httpx.Response (see
    rpc_result / rpc_error), a plain value (wrapped as a result), or raise an
    httpx exception to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self.headers: list[httpx.Headers] = []
        self._handlers: dict[str, Callable[[list[Any]], Any]] = {}

    def on(self, method: str, handler: Callable[[list[Any]], Any]) -> None:
        self._handlers[method] = handler

    def calls(self, method: str) -> list[list[Any]]:
        return [r["params"] for r in self.requests if r["method"] == method]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        self.headers.append(request.headers)
        handler = self._handlers.get(body["method"])
        if handler is None:
            return rpc_error(f"Method not found: {body['method']}", code=-32601)
        answer = handler(body["params"])
        if isinstance(answer, httpx.Response):
            return answer
        return rpc_result(answer, body["id"])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))


@pytest.fixture
def sui_node() -> FakeSuiNode:
    return FakeSuiNode()


def full_transaction(**overrides: Any) -> dict[str, Any]:
    """A realistic sui_getTransactionBlock result with every optional field present."""
    tx: dict[str, Any] = {
        "digest": DIGEST,
        "checkpoint": "1000",
        "timestampMs": "1700000000000",
        "transaction": {"data": {"sender": SENDER}},
        "effects": {
            "status": {"status": "success"},
            "gasUsed": {
                "computationCost": "1000000",
                "storageCost": "2000000",
                "storageRebate": "500000",
                "nonRefundableStorageFee": "5000",
            },
        },
        "objectChanges": [
            {
                "type": "created",
                "objectId": "0x11",
                "objectType": "0x2::coin::Coin<0x2::sui::SUI>",
                "owner": {"AddressOwner": RECIPIENT},
            },
            {
                "type": "mutated",
                "objectId": "0x22",
                "owner": {"AddressOwner": SENDER},
            },
            {
                "type": "mutated",
                "objectId": "0x22",
                "owner": {"AddressOwner": SENDER},
            },
        ],
        "balanceChanges": [
            {"owner": {"AddressOwner": SENDER}, "coinType": SUI, "amount": "-1500000000"},
            {"owner": {"AddressOwner": RECIPIENT}, "coinType": SUI, "amount": "1000000000"},
            {"owner": {"AddressOwner": SENDER}, "coinType": SUI, "amount": "-1"},
        ],
        "events": [
            {"type": "0x2::coin::MintEvent<0x2::sui::SUI>", "sender": SENDER},
        ],
    }
    tx.update(overrides)
    return tx


def install_happy_node(node: FakeSuiNode, tx: dict[str, Any] | None = None) -> dict[str, Any]:
    """Answer every method the lookup pipeline uses."""
    tx = tx if tx is not None else full_transaction()
    node.on("sui_getTransactionBlock", lambda params: tx)
    node.on("sui_getCheckpoint", lambda params: {
        "sequenceNumber": params[0],
        "proposer": "0xvalidator",
        "timestampMs": "1700000000500",
    })
    node.on("sui_multiGetObjects", lambda params: [
        {"data": {"objectId": oid, "version": "7", "type": "0x2::coin::Coin<0x2::sui::SUI>"}}
        for oid in params[0]
    ])
    node.on("sui_getBalance", lambda params: {
        "coinType": params[1],
        "totalBalance": "2500000000",
    })
    return tx
