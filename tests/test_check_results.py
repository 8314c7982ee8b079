from __future__ import annotations

import importlib.util
import pathlib
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from app.db import create_app_engine, create_session_factory
from app.models.base import Base
from app.repositories.bet_repository import BetRepository
from app.repositories.contest_result_repository import ContestResultRepository
from app.services.result_fetcher import ResultFetcher
from tests.helpers import FakeSource, make_result

SCRIPT = pathlib.Path(__file__).resolve().parents[1] / "scripts" / "check_results.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("check_results", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def cli(monkeypatch):
    module = _load_script()
    monkeypatch.setattr(module, "_load_env", lambda: None)
    return module


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    engine = create_app_engine(url)
    Base.metadata.create_all(bind=engine)
    with create_session_factory(engine)() as s:
        BetRepository().create(s, strategy="weighted", numbers=list(range(1, 16)), placed_date=date(2026, 10, 14))
        s.commit()
    engine.dispose()
    return url


def _use_sources(monkeypatch, cli, *sources):
    monkeypatch.setattr(cli, "build_result_fetcher", lambda config: ResultFetcher(list(sources)))


def _stored_contest(url, contest_number):
    engine = create_app_engine(url)
    try:
        with create_session_factory(engine)() as s:
            return ContestResultRepository().get(s, contest_number)
    finally:
        engine.dispose()


def test_settles_and_exits_zero(monkeypatch, cli, db_url):
    _use_sources(monkeypatch, cli, FakeSource("api_caixa", make_result()))

    assert cli.main(["--database-url", db_url]) == 0
    assert _stored_contest(db_url, 3200).bets_checked == 1

    assert cli.main(["--database-url", db_url]) == 0


def test_no_result_exits_one(monkeypatch, cli, db_url):
    _use_sources(monkeypatch, cli, FakeSource("google"), FakeSource("api_caixa"))

    assert cli.main(["--database-url", db_url]) == 1
    assert _stored_contest(db_url, 3200) is None


def test_settlement_failure_exits_two(monkeypatch, cli, db_url):
    _use_sources(monkeypatch, cli, FakeSource("api_caixa", make_result()))

    def _boom(*args, **kwargs):
        raise OperationalError("UPDATE bets", {}, Exception("database is locked"))

    monkeypatch.setattr(BetRepository, "settle", _boom)

    assert cli.main(["--database-url", db_url]) == 2
    assert _stored_contest(db_url, 3200) is None


def test_dry_run_writes_nothing(monkeypatch, cli, db_url):
    _use_sources(monkeypatch, cli, FakeSource("api_caixa", make_result()))

    assert cli.main(["--database-url", db_url, "--dry-run"]) == 0
    assert _stored_contest(db_url, 3200) is None


def test_env_local_settings_reach_the_cycle(monkeypatch, tmp_path, db_url):
    project = tmp_path / "project"
    project.mkdir()
    (project / ".env.local").write_text("BET_COST=5.00\nRESULT_SOURCES=loterias_api\n", encoding="utf-8")
    for name in ("BET_COST", "RESULT_SOURCES"):
        monkeypatch.delenv(name, raising=False)

    cli = _load_script()
    monkeypatch.setattr(cli, "PROJECT_ROOT", project)
    seen = {}

    def _fetcher(config):
        seen.update(config)
        return ResultFetcher([FakeSource("loterias_api", make_result(source="loterias_api"))])

    monkeypatch.setattr(cli, "build_result_fetcher", _fetcher)

    assert cli.main(["--database-url", db_url]) == 0
    assert seen["RESULT_SOURCES"] == "loterias_api"
    row = _stored_contest(db_url, 3200)
    assert row.total_cost == Decimal("5.00")
    assert row.balance == Decimal("1495.00")
