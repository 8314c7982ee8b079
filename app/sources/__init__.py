"""Draw result sources and the registry that wires them from configuration."""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any, Protocol

from app.domain import DrawResult, parse_prize_table, today_in
from app.sources.caixa import DEFAULT_URL as CAIXA_URL, CaixaSource
from app.sources.google import DEFAULT_URL as GOOGLE_URL, GoogleSearchSource
from app.sources.http import build_http_session
from app.sources.loterias_api import DEFAULT_URL as LOTERIAS_URL, LoteriasApiSource


class SourceAdapter(Protocol):
    """Anything with a ``name`` and a ``fetch()`` that never raises."""

    name: str

    def fetch(self) -> DrawResult | None: ...


SOURCE_NAMES = (GoogleSearchSource.name, CaixaSource.name, LoteriasApiSource.name)


def parse_source_order(raw: str) -> list[str]:
    names = [n.strip() for n in str(raw).split(",") if n.strip()]
    unknown = [n for n in names if n not in SOURCE_NAMES]
    if unknown:
        raise ValueError(f"Unknown result sources: {', '.join(unknown)} (known: {', '.join(SOURCE_NAMES)})")
    if len(set(names)) != len(names):
        raise ValueError("Result sources must not repeat")
    if not names:
        raise ValueError("At least one result source is required")
    return names


def build_sources(config: Mapping[str, Any]) -> list[SourceAdapter]:
    """Instantiate the configured sources in priority order."""

    order = parse_source_order(config.get("RESULT_SOURCES", ",".join(SOURCE_NAMES)))
    timeout = float(config.get("SOURCE_TIMEOUT_SECONDS", 10.0))
    default_prizes = parse_prize_table(config.get("PRIZE_TABLE", ""))
    http = build_http_session()

    factories = {
        GoogleSearchSource.name: lambda: GoogleSearchSource(
            http,
            default_prizes=default_prizes,
            today=partial(today_in, str(config.get("TIMEZONE", "America/Sao_Paulo"))),
            url=str(config.get("GOOGLE_SEARCH_URL") or GOOGLE_URL),
            timeout_seconds=timeout,
        ),
        CaixaSource.name: lambda: CaixaSource(
            http,
            url=str(config.get("CAIXA_API_URL") or CAIXA_URL),
            timeout_seconds=timeout,
        ),
        LoteriasApiSource.name: lambda: LoteriasApiSource(
            http,
            default_prizes=default_prizes,
            url=str(config.get("LOTERIAS_API_URL") or LOTERIAS_URL),
            timeout_seconds=timeout,
        ),
    }
    return [factories[name]() for name in order]


__all__ = [
    "CaixaSource",
    "GoogleSearchSource",
    "LoteriasApiSource",
    "SOURCE_NAMES",
    "SourceAdapter",
    "build_sources",
    "parse_source_order",
]
