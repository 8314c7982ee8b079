from __future__ import annotations

from datetime import date

from app.domain import DrawResult, parse_prize_table

PRIZES = parse_prize_table("11:6,12:12,13:30,14:1500,15:1000000")

SCENARIO_DRAW = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 16)


class FakeSource:
    """Stands in for a real source; records how often it was asked."""

    def __init__(self, name: str, result: DrawResult | None = None) -> None:
        self.name = name
        self.result = result
        self.calls = 0

    def fetch(self) -> DrawResult | None:
        self.calls += 1
        return self.result


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: object = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> object:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHttp:
    """Minimal requests.Session double: returns one canned response or raises."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def get(self, url, timeout=None, headers=None):  # noqa: ANN001
        self.calls.append({"url": url, "timeout": timeout, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


def make_result(
    contest_number: int = 3200,
    numbers: tuple[int, ...] = SCENARIO_DRAW,
    source: str = "api_caixa",
) -> DrawResult:
    return DrawResult(
        contest_number=contest_number,
        numbers=tuple(sorted(numbers)),
        draw_date=date(2026, 10, 15),
        source=source,
        prize_table=dict(PRIZES),
    )
