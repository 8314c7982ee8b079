"""Turn raw source payloads into ``DrawResult`` values.

Pure functions, no I/O. Every source-specific field name lives here; the
rest of the application only sees ``DrawResult``. Anything implausible
raises ``NormalizationError``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from bs4 import BeautifulSoup

from app.domain import (
    MAX_NUMBER,
    MIN_NUMBER,
    NUMBERS_PER_DRAW,
    PRIZE_TIERS,
    ZERO,
    DrawResult,
    parse_prize_table,
)
from app.errors import NormalizationError

# Caixa "faixa" 1 is the 15-hit tier, 5 is the 11-hit tier.
_TIER_BY_FAIXA = {1: 15, 2: 14, 3: 13, 4: 12, 5: 11}

_NUMBER_TOKEN = re.compile(r"\b(0[1-9]|1[0-9]|2[0-5])\b")
_CONTEST_TOKEN = re.compile(r"concurso[^\d]*(\d{4})", re.IGNORECASE)

_DATE_FORMATS = ("%d/%m/%Y", "%Y-%m-%d")


def _to_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise NormalizationError(f"Invalid {field}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise NormalizationError(f"Invalid {field}: {value!r}")


def _maybe_int(value: Any) -> int | None:
    try:
        return _to_int(value, "value")
    except NormalizationError:
        return None


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
    raise NormalizationError(f"Invalid draw date: {value!r}")


def normalize_numbers(values: Any) -> tuple[int, ...]:
    """Validate 15 distinct numbers in 1..25 and return them sorted."""

    if not isinstance(values, (list, tuple)):
        raise NormalizationError("Numbers must be a list", details={"numbers": values})

    numbers = [_to_int(v, "number") for v in values]
    if len(numbers) != NUMBERS_PER_DRAW:
        raise NormalizationError(
            f"Expected {NUMBERS_PER_DRAW} numbers, got {len(numbers)}",
            details={"numbers": numbers},
        )

    out_of_range = sorted(n for n in numbers if n < MIN_NUMBER or n > MAX_NUMBER)
    if out_of_range:
        raise NormalizationError(
            f"Numbers must be within {MIN_NUMBER}..{MAX_NUMBER}",
            details={"out_of_range": out_of_range},
        )

    if len(set(numbers)) != len(numbers):
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        raise NormalizationError("Duplicate numbers", details={"duplicates": duplicates})

    return tuple(sorted(numbers))


def _normalize_prizes(prizes: Any, default_prizes: Mapping[int, Decimal] | None) -> dict[int, Decimal]:
    if prizes is None:
        if default_prizes is None:
            return {tier: ZERO for tier in PRIZE_TIERS}
        prizes = default_prizes
    if not isinstance(prizes, Mapping):
        raise NormalizationError("Prize table must be a mapping")
    try:
        return parse_prize_table(prizes)
    except ValueError as exc:
        raise NormalizationError(str(exc)) from exc


def normalize(
    raw: Mapping[str, Any],
    source_id: str,
    *,
    default_prizes: Mapping[int, Decimal] | None = None,
) -> DrawResult:
    """Validate a source-neutral mapping and build a ``DrawResult``.

    ``raw`` keys: ``contest_number``, ``numbers``, ``date``, ``prizes``.
    ``prizes=None`` falls back to ``default_prizes``; missing tiers are zero.
    """

    if not isinstance(raw, Mapping):
        raise NormalizationError("Unexpected payload shape")

    contest_raw = raw.get("contest_number")
    if contest_raw is None or contest_raw == "":
        raise NormalizationError("Missing contest number")
    contest_number = _to_int(contest_raw, "contest number")
    if contest_number <= 0:
        raise NormalizationError(f"Invalid contest number: {contest_number}")

    return DrawResult(
        contest_number=contest_number,
        numbers=normalize_numbers(raw.get("numbers")),
        draw_date=_parse_date(raw.get("date")),
        source=source_id,
        prize_table=_normalize_prizes(raw.get("prizes"), default_prizes),
    )


def _prizes_from_faixa_list(items: Any) -> dict[int, Any] | None:
    if not isinstance(items, list) or not items:
        return None
    prizes: dict[int, Any] = {}
    for item in items:
        if not isinstance(item, Mapping):
            continue
        tier = _TIER_BY_FAIXA.get(_maybe_int(item.get("faixa")))  # type: ignore[arg-type]
        if tier is None:
            continue
        prizes[tier] = item.get("valorPremio") or 0
    return prizes


def normalize_caixa(payload: Any, *, source_id: str = "api_caixa") -> DrawResult:
    """Official Caixa portal JSON (``/portaldeloterias/api/lotofacil``)."""

    if not isinstance(payload, Mapping):
        raise NormalizationError("Unexpected Caixa payload shape")

    numbers = payload.get("listaDezenas") or payload.get("dezenasSorteadasOrdemSorteio")
    prizes = _prizes_from_faixa_list(payload.get("listaRateioPremio"))

    return normalize(
        {
            "contest_number": payload.get("numero"),
            "numbers": numbers,
            "date": payload.get("dataApuracao"),
            "prizes": prizes if prizes is not None else {},
        },
        source_id,
    )


def normalize_loterias_api(
    payload: Any,
    *,
    default_prizes: Mapping[int, Decimal] | None = None,
    source_id: str = "loterias_api",
) -> DrawResult:
    """Community mirror JSON (``loteriascaixa-api``).

    Older responses carry no ``premiacoes``; the configured table is used then.
    """

    if not isinstance(payload, Mapping):
        raise NormalizationError("Unexpected loterias API payload shape")

    return normalize(
        {
            "contest_number": payload.get("concurso"),
            "numbers": payload.get("dezenas"),
            "date": payload.get("data"),
            "prizes": _prizes_from_faixa_list(payload.get("premiacoes")),
        },
        source_id,
        default_prizes=default_prizes,
    )


def extract_scraped(
    html: str,
    *,
    today: date,
    default_prizes: Mapping[int, Decimal] | None = None,
    source_id: str = "google",
) -> DrawResult:
    """Heuristic extraction from a search result page.

    The first 15 two-digit tokens in 01..25 are taken as the draw. The page
    has no prize data, so the configured table applies.
    """

    text = BeautifulSoup(html or "", "html.parser").get_text(" ")

    tokens = _NUMBER_TOKEN.findall(text)
    if len(tokens) < NUMBERS_PER_DRAW:
        raise NormalizationError(f"Only {len(tokens)} number-like tokens on page")

    contest_match = _CONTEST_TOKEN.search(text)
    if contest_match is None:
        raise NormalizationError("No contest number on page")

    return normalize(
        {
            "contest_number": contest_match.group(1),
            "numbers": tokens[:NUMBERS_PER_DRAW],
            "date": today,
            "prizes": None,
        },
        source_id,
        default_prizes=default_prizes,
    )
