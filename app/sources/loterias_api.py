"""Community mirror of the Caixa results (loteriascaixa-api)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal

import requests

from app.domain import DrawResult
from app.errors import NormalizationError, SourceUnavailable
from app.sources.http import get_json
from app.sources.normalizer import normalize_loterias_api

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://loteriascaixa-api.herokuapp.com/api/lotofacil/latest"


class LoteriasApiSource:
    name = "loterias_api"

    def __init__(
        self,
        http: requests.Session,
        *,
        default_prizes: Mapping[int, Decimal],
        url: str = DEFAULT_URL,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._http = http
        self._default_prizes = dict(default_prizes)
        self._url = url
        self._timeout = timeout_seconds

    def fetch(self) -> DrawResult | None:
        try:
            payload = get_json(self._http, self._url, timeout_seconds=self._timeout)
            result = normalize_loterias_api(
                payload,
                default_prizes=self._default_prizes,
                source_id=self.name,
            )
        except (SourceUnavailable, NormalizationError) as exc:
            logger.warning("Source %s unavailable: %s", self.name, exc.message)
            return None

        logger.info("Source %s: contest %s", self.name, result.contest_number)
        return result
