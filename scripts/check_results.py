"""Run one "reconcile latest" cycle: fetch the newest draw and settle bets.

Meant to be invoked by cron (hourly is enough; the fetch may lag the draw).
Reads DATABASE_URL and the source settings from .env / environment.

Usage:
  python scripts/check_results.py
  python scripts/check_results.py --dry-run          # fetch only, no writes

Exit codes: 0 settled or already processed, 1 no source had a result,
2 settlement failed (nothing was committed).
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from app.config import load_settings, resolve_database_url
from app.db import create_app_engine, create_session_factory
from app.domain import parse_prize_table
from app.errors import NoResultAvailable, ReconciliationError
from app.models.base import Base
from app.services.reconciliation_service import ReconciliationService
from app.services.result_fetcher import build_result_fetcher


logger = logging.getLogger("check_results")


def _load_env() -> None:
    load_dotenv()
    env_local = PROJECT_ROOT / ".env.local"
    if env_local.exists():
        load_dotenv(dotenv_path=env_local, override=True)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch the latest Lotofacil result and settle pending bets")
    parser.add_argument(
        "--database-url",
        dest="database_url",
        type=str,
        default=None,
        help="Override DB connection string (e.g. sqlite:///./app.db)",
    )
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=None)
    parser.add_argument("--dry-run", action="store_true", help="Fetch and print the result without settling")
    args = parser.parse_args(argv)

    _load_env()
    config = load_settings()
    if args.timeout_seconds is not None:
        config["SOURCE_TIMEOUT_SECONDS"] = float(args.timeout_seconds)

    logging.basicConfig(
        level=getattr(logging, str(config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    fetcher = build_result_fetcher(config)

    if args.dry_run:
        try:
            result = fetcher.fetch_latest()
        except NoResultAvailable:
            return 1
        logger.info("Dry run: contest %s from %s, nothing written", result.contest_number, result.source)
        return 0

    database_url = str(args.database_url) if args.database_url else resolve_database_url()
    engine = create_app_engine(database_url)
    Base.metadata.create_all(bind=engine)
    session_factory = create_session_factory(engine)

    service = ReconciliationService(
        bet_cost=str(config["BET_COST"]),
        default_prizes=parse_prize_table(str(config["PRIZE_TABLE"])),
    )

    with session_factory() as db:
        try:
            outcome = service.reconcile_latest(db, fetcher)
        except NoResultAvailable:
            logger.warning("No result available; bets stay pending until the next run")
            return 1
        except ReconciliationError as exc:
            logger.error("%s (contest %s)", exc.message, (exc.details or {}).get("contest_number"))
            return 2

    if outcome.already_processed:
        logger.info("Contest %s was already processed", outcome.contest_number)
    else:
        logger.info(
            "Contest %s: %s bets checked, total prize %s",
            outcome.contest_number,
            outcome.checked,
            outcome.total_prize,
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
