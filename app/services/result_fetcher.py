"""Fallback chain over the configured result sources."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from app.domain import DrawResult
from app.errors import NoResultAvailable
from app.sources import SourceAdapter, build_sources

logger = logging.getLogger(__name__)


class ResultFetcher:
    """Try each source in order; the first valid draw wins.

    Sources are called one at a time and never retried within a call. There
    is no cross-source agreement check.
    """

    def __init__(self, sources: Sequence[SourceAdapter]) -> None:
        if not sources:
            raise ValueError("ResultFetcher needs at least one source")
        self._sources = list(sources)

    @property
    def source_names(self) -> list[str]:
        return [s.name for s in self._sources]

    def fetch_latest(self) -> DrawResult:
        logger.info("Fetching latest result from %s", ", ".join(self.source_names))

        for position, source in enumerate(self._sources, start=1):
            logger.info("Source %s/%s: trying %s", position, len(self._sources), source.name)
            result = source.fetch()
            if result is None:
                continue

            logger.info(
                "Result from %s: contest %s numbers %s",
                result.source,
                result.contest_number,
                list(result.numbers),
            )
            return result

        logger.warning("All result sources failed; manual entry or a later retry is needed")
        raise NoResultAvailable(details={"sources": self.source_names})


def build_result_fetcher(config: Mapping[str, Any]) -> ResultFetcher:
    return ResultFetcher(build_sources(config))
