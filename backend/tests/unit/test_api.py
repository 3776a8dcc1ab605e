"""Tests for the HTTP API."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from arena.api.server import create_app
from arena.oracle import MoveOracle
from arena.runtime import create_arena


@pytest.fixture
def client(settings, ai1_wins, clock):
    arena = create_arena(settings, oracle=MoveOracle(source=ai1_wins), clock=clock)
    with TestClient(create_app(arena)) as test_client:
        yield test_client


def _open(client: TestClient, address: str = "alice", **body) -> dict:
    response = client.post("/api/accounts", json={"address": address, **body})
    assert response.status_code == 201
    return response.json()


def test_health_check(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_open_and_get_account(client) -> None:
    opened = _open(client, initial_balance="250")
    assert Decimal(opened["balance"]) == Decimal("250")

    response = client.get("/api/accounts/alice")
    assert response.status_code == 200
    assert response.json()["active_bet"] is None


def test_unknown_account_is_404(client) -> None:
    response = client.get("/api/accounts/nobody")
    assert response.status_code == 404
    assert response.json()["error"] == "UnknownAccount"


def test_negative_initial_balance_is_400(client) -> None:
    response = client.post("/api/accounts", json={"address": "bob", "initial_balance": "-1"})
    assert response.status_code == 400


def test_wager_error_status_codes(client) -> None:
    _open(client)

    assert client.post("/api/bets", json={"address": "alice", "amount": "10"}).status_code == 400
    assert client.post(
        "/api/bets", json={"address": "alice", "player": "AI-1", "amount": "0"}
    ).status_code == 400
    assert client.post(
        "/api/bets", json={"address": "alice", "player": "AI-1", "amount": "5000"}
    ).status_code == 402
    assert client.post(
        "/api/bets", json={"address": "nobody", "player": "AI-1", "amount": "10"}
    ).status_code == 404

    assert client.post(
        "/api/bets", json={"address": "alice", "player": "AI-1", "amount": "10"}
    ).status_code == 201
    conflict = client.post("/api/bets", json={"address": "alice", "player": "AI-2", "amount": "10"})
    assert conflict.status_code == 409
    assert conflict.json()["error"] == "ActiveBetExists"


def test_pool_and_odds(client) -> None:
    for address in ("a", "b"):
        _open(client, address)
    client.post("/api/bets", json={"address": "a", "player": "AI-1", "amount": "100"})
    client.post("/api/bets", json={"address": "b", "player": "AI-2", "amount": "300"})

    pool = client.get("/api/pool").json()
    assert Decimal(pool["total"]) == Decimal("400")
    assert pool["ai1"]["bettor_count"] == 1
    assert [b["address"] for b in pool["recent_bettors"]] == ["b", "a"]

    odds = client.get("/api/odds/AI-1").json()
    assert Decimal(odds["odds"]) == Decimal("4.00")
    assert client.get("/api/odds/AI-3").status_code == 422


def test_play_match_settles_wagers(client) -> None:
    _open(client)
    client.post("/api/bets", json={"address": "alice", "player": "AI-1", "amount": "100"})

    response = client.post("/api/matches")
    assert response.status_code == 201
    record = response.json()
    assert record["outcome"] == "AI-1"
    assert record["round_number"] == 1

    account = client.get("/api/accounts/alice").json()
    assert Decimal(account["balance"]) == Decimal("1100")
    assert account["bet_history"][0]["won"] is True
    assert Decimal(client.get("/api/pool").json()["total"]) == Decimal("0")

    history = client.get("/api/history").json()
    assert [r["id"] for r in history] == [record["id"]]

    engine = client.get("/api/engine").json()
    assert engine["state"] == "result"
    assert engine["round_number"] == 2


def test_open_account_from_paper_wallet(client) -> None:
    opened = _open(client, "wallet-1", from_wallet=True)
    assert Decimal(opened["balance"]) == Decimal("10.0")


def test_open_account_from_disconnected_wallet_is_400(client) -> None:
    response = client.post("/api/accounts", json={"address": "", "from_wallet": True})
    assert response.status_code == 400
    assert response.json()["error"] == "WalletDisconnectedError"


def test_negative_limits_are_rejected(client) -> None:
    assert client.get("/api/pool", params={"limit": -1}).status_code == 422
    assert client.get("/api/history", params={"limit": -1}).status_code == 422
    assert client.get("/api/pool", params={"limit": 0}).json()["recent_bettors"] == []


def test_oversized_opening_balance_is_400(client) -> None:
    response = client.post("/api/accounts", json={"address": "whale", "initial_balance": "1e25"})
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidAccount"
