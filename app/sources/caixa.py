"""Official Caixa lottery portal API."""

from __future__ import annotations

import logging

import requests

from app.domain import DrawResult
from app.errors import NormalizationError, SourceUnavailable
from app.sources.http import get_json
from app.sources.normalizer import normalize_caixa

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://servicebus2.caixa.gov.br/portaldeloterias/api/lotofacil"


class CaixaSource:
    """Latest Lotofacil draw from the Caixa JSON API, with real prize tiers."""

    name = "api_caixa"

    def __init__(self, http: requests.Session, *, url: str = DEFAULT_URL, timeout_seconds: float = 10.0) -> None:
        self._http = http
        self._url = url
        self._timeout = timeout_seconds

    def fetch(self) -> DrawResult | None:
        try:
            payload = get_json(self._http, self._url, timeout_seconds=self._timeout)
            result = normalize_caixa(payload, source_id=self.name)
        except (SourceUnavailable, NormalizationError) as exc:
            logger.warning("Source %s unavailable: %s", self.name, exc.message)
            return None

        logger.info("Source %s: contest %s", self.name, result.contest_number)
        return result
