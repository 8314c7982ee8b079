from __future__ import annotations

from decimal import Decimal

import pytest

from app import create_app
from app.config import DevelopmentConfig
from app.db import create_app_engine, create_session_factory
from app.models.base import Base
from app.repositories.bet_repository import BetRepository
from app.services.reconciliation_service import ReconciliationService
from tests.helpers import PRIZES


@pytest.fixture
def engine(tmp_path):
    engine = create_app_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session(session_factory):
    with session_factory() as s:
        yield s


@pytest.fixture
def bets() -> BetRepository:
    return BetRepository()


@pytest.fixture
def service() -> ReconciliationService:
    return ReconciliationService(bet_cost=Decimal("3.50"), default_prizes=PRIZES)


@pytest.fixture
def app(tmp_path):
    class _TestConfig(DevelopmentConfig):
        TESTING = True
        DATABASE_URL = f"sqlite:///{tmp_path / 'app.db'}"
        RESULT_SOURCES = "api_caixa,loterias_api"

    flask_app = create_app(_TestConfig)
    yield flask_app
    flask_app.extensions["engine"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()
