from __future__ import annotations

from datetime import date

import pytest
import requests

from app.sources import CaixaSource, GoogleSearchSource, LoteriasApiSource, build_sources, parse_source_order
from tests.helpers import PRIZES, FakeHttp, FakeResponse

VALID = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 16]

CAIXA_PAYLOAD = {
    "numero": 3200,
    "dataApuracao": "15/10/2026",
    "listaDezenas": [f"{n:02d}" for n in VALID],
    "listaRateioPremio": [{"faixa": 2, "valorPremio": 1500.0}],
}


def _google(http) -> GoogleSearchSource:
    return GoogleSearchSource(http, default_prizes=PRIZES, today=lambda: date(2026, 10, 15), timeout_seconds=10.0)


def test_caixa_source_returns_result_and_passes_timeout():
    http = FakeHttp(FakeResponse(payload=CAIXA_PAYLOAD))

    result = CaixaSource(http, timeout_seconds=7.5).fetch()

    assert result is not None
    assert result.contest_number == 3200
    assert result.source == "api_caixa"
    assert http.calls[0]["timeout"] == 7.5


@pytest.mark.parametrize(
    "http",
    [
        FakeHttp(error=requests.Timeout("read timed out")),
        FakeHttp(error=requests.ConnectionError("connection refused")),
        FakeHttp(FakeResponse(status_code=503, payload=CAIXA_PAYLOAD)),
        FakeHttp(FakeResponse(status_code=200, payload=None, text="<html>maintenance</html>")),
        FakeHttp(FakeResponse(payload={"numero": 3200, "listaDezenas": ["01", "02"]})),
        FakeHttp(FakeResponse(payload=[{"unexpected": "shape"}])),
    ],
    ids=["timeout", "connection", "status-503", "not-json", "fourteen-short", "drifted-shape"],
)
def test_caixa_source_failures_become_no_result(http):
    assert CaixaSource(http).fetch() is None
    assert len(http.calls) == 1


def test_loterias_source_applies_default_prizes():
    payload = {"concurso": 3201, "data": "16/10/2026", "dezenas": [f"{n:02d}" for n in VALID]}
    http = FakeHttp(FakeResponse(payload=payload))

    result = LoteriasApiSource(http, default_prizes=PRIZES).fetch()

    assert result is not None
    assert result.contest_number == 3201
    assert result.prize_table == PRIZES


def test_loterias_source_rejects_number_26():
    payload = {"concurso": 3201, "data": "16/10/2026", "dezenas": [f"{n:02d}" for n in VALID[:14]] + ["26"]}

    assert LoteriasApiSource(FakeHttp(FakeResponse(payload=payload)), default_prizes=PRIZES).fetch() is None


def test_google_source_scrapes_page_with_browser_headers():
    balls = " ".join(f"<b>{n:02d}</b>" for n in VALID)
    html = f"<html><body><div>Lotofácil concurso 3200</div>{balls}</body></html>"
    http = FakeHttp(FakeResponse(text=html))

    result = _google(http).fetch()

    assert result is not None
    assert result.source == "google"
    assert result.draw_date == date(2026, 10, 15)
    assert "Mozilla" in http.calls[0]["headers"]["User-Agent"]


def test_google_source_partial_extraction_is_no_result():
    balls = " ".join(f"<b>{n:02d}</b>" for n in VALID[:10])
    http = FakeHttp(FakeResponse(text=f"<div>concurso 3200</div>{balls}"))

    assert _google(http).fetch() is None


def test_google_source_duplicate_extraction_is_no_result():
    balls = " ".join(f"<b>{n:02d}</b>" for n in VALID[:14] + [1])
    http = FakeHttp(FakeResponse(text=f"<div>concurso 3200</div>{balls}"))

    assert _google(http).fetch() is None


def test_parse_source_order_keeps_configured_priority():
    assert parse_source_order("loterias_api, api_caixa") == ["loterias_api", "api_caixa"]


@pytest.mark.parametrize("raw", ["", "api_caixa,bogus", "api_caixa,api_caixa"])
def test_parse_source_order_rejects_bad_config(raw):
    with pytest.raises(ValueError):
        parse_source_order(raw)


def test_build_sources_follows_config():
    sources = build_sources(
        {
            "RESULT_SOURCES": "loterias_api,google,api_caixa",
            "SOURCE_TIMEOUT_SECONDS": 5,
            "PRIZE_TABLE": "11:6,12:12,13:30,14:1500,15:1000000",
            "TIMEZONE": "America/Sao_Paulo",
        }
    )

    assert [s.name for s in sources] == ["loterias_api", "google", "api_caixa"]
