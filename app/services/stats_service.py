"""Read-only statistics over settled bets and system status."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain import CENT, ZERO, to_money
from app.repositories.bet_repository import BetRepository
from app.repositories.contest_result_repository import ContestResultRepository


@dataclass(frozen=True)
class StrategyStats:
    total_bets: int
    total_prize: Decimal
    total_cost: Decimal
    net_profit: Decimal
    roi: Decimal
    avg_matches: Decimal


@dataclass(frozen=True)
class SystemStatus:
    pending_bets: int
    last_bet_date: date | None
    last_result_date: date | None
    last_contest: int | None


class StatsService:
    """Per-strategy performance, split by how the bet was placed."""

    GROUPS = {"all": None, "auto": "auto", "manual": "manual"}

    def __init__(
        self,
        bet_cost: Decimal | str,
        bets: BetRepository | None = None,
        results: ContestResultRepository | None = None,
    ) -> None:
        self._bet_cost = to_money(bet_cost)
        self._bets = bets or BetRepository()
        self._results = results or ContestResultRepository()

    def _stats_for(self, total_bets: int, prize_sum: Decimal, avg_matches: float) -> StrategyStats:
        total_prize = to_money(prize_sum)
        total_cost = (self._bet_cost * total_bets).quantize(CENT)
        net_profit = total_prize - total_cost
        roi = (net_profit / total_cost * 100).quantize(CENT) if total_cost > 0 else ZERO
        return StrategyStats(
            total_bets=total_bets,
            total_prize=total_prize,
            total_cost=total_cost,
            net_profit=net_profit,
            roi=roi,
            avg_matches=Decimal(str(avg_matches)).quantize(CENT),
        )

    def strategy_stats(self, session: Session) -> dict[str, dict[str, StrategyStats]]:
        out: dict[str, dict[str, StrategyStats]] = {}
        for group, kind in self.GROUPS.items():
            rows = self._bets.settled_totals_by_strategy(session, kind=kind)
            out[group] = {
                strategy: self._stats_for(count, prize_sum, avg_matches)
                for strategy, count, prize_sum, avg_matches in rows
            }
        return out

    def status(self, session: Session) -> SystemStatus:
        latest = self._results.latest(session)
        return SystemStatus(
            pending_bets=self._bets.count_unsettled(session),
            last_bet_date=self._bets.latest_placed_date(session),
            last_result_date=latest.draw_date if latest is not None else None,
            last_contest=latest.contest_number if latest is not None else None,
        )
