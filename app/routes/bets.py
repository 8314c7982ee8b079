"""Bet, statistics and status routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from app.db import get_session
from app.domain import parse_prize_table, today_in
from app.repositories.bet_repository import BetRepository
from app.schemas.bet import BetCreateSchema, BetSchema
from app.schemas.stats import StrategyStatsSchema, SystemStatusSchema
from app.services.stats_service import StatsService
from app.utils.params import limit_arg
from app.utils.responses import ok

bets_bp = Blueprint("bets", __name__)

_repo = BetRepository()
_bet_schema = BetSchema()
_bets_schema = BetSchema(many=True)
_create_schema = BetCreateSchema()
_stats_schema = StrategyStatsSchema()
_status_schema = SystemStatusSchema()


def _stats() -> StatsService:
    return current_app.extensions["stats_service"]


@bets_bp.get("/bets")
def list_bets():
    """Most recent bets, newest first."""

    limit = limit_arg(request.args, default=200)
    return ok(_bets_schema.dump(_repo.list_recent(get_session(), limit=limit)))


@bets_bp.post("/bets")
def create_bet():
    """Record a manually placed bet."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    placed_date = data.get("placed_date") or today_in(str(current_app.config["TIMEZONE"]))
    bet = _repo.create(
        get_session(),
        strategy=str(data["strategy"]),
        numbers=data["numbers"],
        placed_date=placed_date,
        kind=str(data["kind"]),
    )

    # Commit occurs in teardown if no exception.
    return ok(_bet_schema.dump(bet), status_code=201)


@bets_bp.get("/stats")
def get_stats():
    """Per-strategy results over settled bets: all, auto and manual."""

    stats = _stats().strategy_stats(get_session())
    return ok(
        {
            group: {strategy: _stats_schema.dump(s) for strategy, s in by_strategy.items()}
            for group, by_strategy in stats.items()
        }
    )


@bets_bp.get("/status")
def get_status():
    status = _stats().status(get_session())
    return ok({"status": "active", **_status_schema.dump(status)})


@bets_bp.get("/pricing")
def get_pricing():
    cfg = current_app.config
    return ok(
        {
            "bet_cost": str(cfg["BET_COST"]),
            "prize_table": {str(k): str(v) for k, v in parse_prize_table(cfg["PRIZE_TABLE"]).items()},
        }
    )
