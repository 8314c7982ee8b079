"""Repository layer for persisted draw results."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain import DrawResult
from app.models.contest_result import ContestResult


class ContestResultRepository:
    """Reads and the insert-first write for contest results."""

    def exists(self, session: Session, contest_number: int) -> bool:
        stmt = select(ContestResult.id).where(ContestResult.contest_number == int(contest_number))
        return session.scalar(stmt) is not None

    def get(self, session: Session, contest_number: int) -> ContestResult | None:
        stmt = select(ContestResult).where(ContestResult.contest_number == int(contest_number))
        return session.scalars(stmt).first()

    def list_recent(self, session: Session, limit: int = 50) -> Sequence[ContestResult]:
        stmt = (
            select(ContestResult)
            .order_by(ContestResult.draw_date.desc(), ContestResult.contest_number.desc())
            .limit(int(limit))
        )
        return list(session.scalars(stmt).all())

    def latest(self, session: Session) -> ContestResult | None:
        stmt = select(ContestResult).order_by(
            ContestResult.draw_date.desc(), ContestResult.contest_number.desc()
        )
        return session.scalars(stmt).first()

    def insert(self, session: Session, result: DrawResult) -> ContestResult:
        """Insert and flush so the unique constraint is checked immediately.

        Raises ``sqlalchemy.exc.IntegrityError`` when the contest already exists.
        """

        row = ContestResult.from_draw(result)
        session.add(row)
        session.flush()
        return row

    def record_aggregate(
        self,
        session: Session,
        row: ContestResult,
        *,
        total_prize: Decimal,
        bets_checked: int,
        total_cost: Decimal,
    ) -> None:
        row.total_prize = total_prize
        row.bets_checked = bets_checked
        row.total_cost = total_cost
        row.balance = total_prize - total_cost
        session.flush()
