"""Repository layer for Bet persistence."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.domain import DrawResult
from app.models.bet import Bet


class BetRepository:
    """Queries and the one-shot settle update for bets."""

    def list_recent(self, session: Session, limit: int = 200) -> Sequence[Bet]:
        stmt = select(Bet).order_by(Bet.placed_date.desc(), Bet.id.desc()).limit(int(limit))
        return list(session.scalars(stmt).all())

    def list_unsettled(self, session: Session) -> Sequence[Bet]:
        """Unsettled bets, oldest first."""

        stmt = (
            select(Bet)
            .where(Bet.contest_number.is_(None))
            .order_by(Bet.placed_date.asc(), Bet.id.asc())
        )
        return list(session.scalars(stmt).all())

    def count_unsettled(self, session: Session) -> int:
        stmt = select(func.count()).select_from(Bet).where(Bet.contest_number.is_(None))
        return int(session.scalar(stmt) or 0)

    def latest_placed_date(self, session: Session) -> date | None:
        return session.scalar(select(func.max(Bet.placed_date)))

    def create(
        self,
        session: Session,
        *,
        strategy: str,
        numbers: Sequence[int],
        placed_date: date,
        kind: str = "auto",
    ) -> Bet:
        bet = Bet(
            strategy=strategy,
            kind=kind,
            numbers=sorted(int(n) for n in numbers),
            placed_date=placed_date,
        )
        session.add(bet)
        session.flush()  # assign PK
        return bet

    def settle(
        self,
        session: Session,
        bet_id: int,
        result: DrawResult,
        *,
        match_count: int,
        prize: Decimal,
    ) -> bool:
        """Write the settlement for one bet.

        Only applies while the bet is still unsettled. Returns False when
        another run already settled it.
        """

        stmt = (
            update(Bet)
            .where(Bet.id == bet_id, Bet.contest_number.is_(None))
            .values(
                draw_numbers=list(result.numbers),
                match_count=match_count,
                prize=prize,
                contest_number=result.contest_number,
                settled_at=datetime.now(timezone.utc).replace(tzinfo=None),
            )
        )
        return session.execute(stmt).rowcount == 1

    def settled_totals_by_strategy(
        self, session: Session, kind: str | None = None
    ) -> Sequence[tuple[str, int, Decimal, float]]:
        """(strategy, bets, prize sum, average matches) over settled bets."""

        stmt = (
            select(
                Bet.strategy,
                func.count(Bet.id),
                func.coalesce(func.sum(Bet.prize), 0),
                func.coalesce(func.avg(Bet.match_count), 0),
            )
            .where(Bet.contest_number.is_not(None))
            .group_by(Bet.strategy)
            .order_by(Bet.strategy.asc())
        )
        if kind is not None:
            stmt = stmt.where(Bet.kind == kind)
        return [
            (str(strategy), int(count), Decimal(str(prize_sum)), float(avg_matches))
            for strategy, count, prize_sum, avg_matches in session.execute(stmt).all()
        ]
