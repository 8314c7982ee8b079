"""Result and reconciliation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from app.db import get_session
from app.domain import today_in
from app.errors import NotFoundError
from app.repositories.contest_result_repository import ContestResultRepository
from app.schemas.contest_result import ContestResultSchema, DrawResultSchema, ReconcileOutcomeSchema
from app.services.reconciliation_service import ReconciliationService
from app.services.result_fetcher import ResultFetcher
from app.utils.params import limit_arg
from app.utils.responses import ok

results_bp = Blueprint("results", __name__)

_repo = ContestResultRepository()
_result_schema = ContestResultSchema()
_results_schema = ContestResultSchema(many=True)
_draw_schema = DrawResultSchema()
_outcome_schema = ReconcileOutcomeSchema()


def _fetcher() -> ResultFetcher:
    return current_app.extensions["result_fetcher"]


def _service() -> ReconciliationService:
    return current_app.extensions["reconciliation_service"]


@results_bp.get("/results")
def list_results():
    """Most recent results with their settlement totals."""

    limit = limit_arg(request.args, default=50)
    return ok(_results_schema.dump(_repo.list_recent(get_session(), limit=limit)))


@results_bp.get("/results/<int:contest_number>")
def get_result(contest_number: int):
    row = _repo.get(get_session(), contest_number)
    if row is None:
        raise NotFoundError(message=f"Contest {contest_number} not found")
    return ok(_result_schema.dump(row))


@results_bp.get("/test-fetch")
def test_fetch():
    """Run the source chain without settling anything."""

    return ok(_draw_schema.dump(_fetcher().fetch_latest()))


@results_bp.post("/check-bets")
@results_bp.post("/force-check")
def check_bets():
    """Reconcile pending bets against the latest published result."""

    outcome = _service().reconcile_latest(get_session(), _fetcher())
    return ok(_outcome_schema.dump(outcome))


@results_bp.post("/insert-result")
def insert_result():
    """Reconcile against a manually entered result."""

    payload = request.get_json(silent=True) or {}
    today = today_in(str(current_app.config["TIMEZONE"]))
    outcome = _service().reconcile_manual(get_session(), payload, today=today)
    return ok(_outcome_schema.dump(outcome))
