from __future__ import annotations

from app.services.result_fetcher import ResultFetcher
from tests.helpers import FakeSource, make_result

LOW = list(range(1, 16))
HIGH = list(range(11, 26))


def _place(client, numbers, strategy="weighted", kind="auto", placed="2026-10-14"):
    resp = client.post(
        "/api/bets",
        json={"strategy": strategy, "numbers": numbers, "placedDate": placed, "kind": kind},
    )
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def _use_sources(app, *sources):
    app.extensions["result_fetcher"] = ResultFetcher(list(sources))


def test_health_lists_configured_sources(client):
    body = client.get("/health").get_json()

    assert body["success"] is True
    assert body["data"] == {"status": "ok", "sources": ["api_caixa", "loterias_api"]}


def test_create_bet_stores_sorted_numbers(client):
    bet = _place(client, list(reversed(LOW)))

    assert bet["numbers"] == LOW
    assert bet["settlement"] is None
    assert bet["kind"] == "auto"


def test_create_bet_rejects_invalid_numbers(client):
    resp = client.post("/api/bets", json={"strategy": "random", "numbers": LOW[:14] + [1]})

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "validation_error"


def test_check_bets_settles_against_fetched_result(app, client):
    _place(client, LOW)
    _place(client, HIGH, strategy="balanced")
    down = FakeSource("google")
    up = FakeSource("api_caixa", make_result())
    never = FakeSource("loterias_api", make_result(source="loterias_api"))
    _use_sources(app, down, up, never)

    resp = client.post("/api/check-bets")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "contest_number": 3200,
        "checked": 2,
        "total_prize": "1500.00",
        "already_processed": False,
    }
    assert never.calls == 0

    again = client.post("/api/force-check").get_json()["data"]
    assert again["already_processed"] is True
    assert again["checked"] == 0

    bets = client.get("/api/bets").get_json()["data"]
    settled = {b["strategy"]: b["settlement"] for b in bets}
    assert settled["weighted"]["match_count"] == 14
    assert settled["weighted"]["prize"] == "1500.00"
    assert settled["balanced"]["match_count"] == 5

    result = client.get("/api/results/3200").get_json()["data"]
    assert result["bets_checked"] == 2
    assert result["total_cost"] == "7.00"
    assert result["balance"] == "1493.00"


def test_check_bets_when_every_source_fails(app, client):
    _place(client, LOW)
    _use_sources(app, FakeSource("google"), FakeSource("api_caixa"), FakeSource("loterias_api"))

    resp = client.post("/api/check-bets")

    assert resp.status_code == 503
    assert resp.get_json()["error"]["code"] == "no_result_available"
    assert client.get("/api/results").get_json()["data"] == []
    assert client.get("/api/status").get_json()["data"]["pending_bets"] == 1


def test_test_fetch_does_not_settle(app, client):
    _place(client, LOW)
    _use_sources(app, FakeSource("api_caixa", make_result()))

    data = client.get("/api/test-fetch").get_json()["data"]

    assert data["contest_number"] == 3200
    assert data["prize_table"]["14"] == "1500.00"
    assert client.get("/api/status").get_json()["data"]["pending_bets"] == 1


def test_insert_result_manual_fallback(client):
    _place(client, LOW, kind="manual")

    resp = client.post(
        "/api/insert-result",
        json={"contestNumber": 3200, "numbers": [16, *range(1, 15)], "date": "2026-10-15"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"]["total_prize"] == "1500.00"
    result = client.get("/api/results/3200").get_json()["data"]
    assert result["source"] == "manual"
    assert result["draw_date"] == "2026-10-15"


def test_insert_result_rejects_26(client):
    resp = client.post("/api/insert-result", json={"contestNumber": 3200, "numbers": [26, *range(1, 15)]})

    assert resp.status_code == 400
    assert client.get("/api/results").get_json()["data"] == []


def test_unknown_contest_is_404(client):
    resp = client.get("/api/results/1")

    assert resp.status_code == 404
    assert resp.get_json()["error"]["code"] == "not_found"


def test_stats_and_status_after_settlement(app, client):
    _place(client, LOW, strategy="weighted", kind="auto")
    _place(client, HIGH, strategy="weighted", kind="manual")
    _place(client, HIGH, strategy="random", kind="auto", placed="2026-10-15")
    _use_sources(app, FakeSource("api_caixa", make_result()))
    client.post("/api/check-bets")

    stats = client.get("/api/stats").get_json()["data"]
    weighted = stats["all"]["weighted"]
    assert weighted["total_bets"] == 2
    assert weighted["total_prize"] == "1500.00"
    assert weighted["total_cost"] == "7.00"
    assert weighted["net_profit"] == "1493.00"
    assert weighted["roi"] == "21328.57"
    assert weighted["avg_matches"] == "9.50"
    assert stats["manual"]["weighted"]["total_bets"] == 1
    assert "random" not in stats["manual"]

    status = client.get("/api/status").get_json()["data"]
    assert status["pending_bets"] == 0
    assert status["last_contest"] == 3200
    assert status["status"] == "active"


def test_pricing_reports_configuration(client):
    data = client.get("/api/pricing").get_json()["data"]

    assert data["bet_cost"] == "3.50"
    assert data["prize_table"]["11"] == "6.00"


def test_bad_limit_is_rejected(client):
    assert client.get("/api/bets?limit=abc").status_code == 400
