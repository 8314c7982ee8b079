"""Scrape today's result from a Google search page.

Fast when it works, but the page is unstructured: candidates go through the
same validation as the API sources and anything short of 15 distinct valid
numbers plus a contest number counts as no result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal

import requests

from app.domain import DrawResult
from app.errors import NormalizationError, SourceUnavailable
from app.sources.http import BROWSER_USER_AGENT, get_text
from app.sources.normalizer import extract_scraped

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://www.google.com/search?q=resultado+lotofacil+de+hoje"

_HEADERS = {
    "User-Agent": BROWSER_USER_AGENT,
    "Accept": "text/html",
    "Accept-Language": "pt-BR,pt;q=0.9",
}


class GoogleSearchSource:
    name = "google"

    def __init__(
        self,
        http: requests.Session,
        *,
        default_prizes: Mapping[int, Decimal],
        today: Callable[[], date],
        url: str = DEFAULT_URL,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._http = http
        self._default_prizes = dict(default_prizes)
        self._today = today
        self._url = url
        self._timeout = timeout_seconds

    def fetch(self) -> DrawResult | None:
        try:
            html = get_text(self._http, self._url, timeout_seconds=self._timeout, headers=_HEADERS)
            result = extract_scraped(
                html,
                today=self._today(),
                default_prizes=self._default_prizes,
                source_id=self.name,
            )
        except (SourceUnavailable, NormalizationError) as exc:
            logger.warning("Source %s unavailable: %s", self.name, exc.message)
            return None

        logger.info("Source %s: contest %s %s", self.name, result.contest_number, list(result.numbers))
        return result
