"""Persisted draw results, one row per contest.

Columns:
- contest_number (UNIQUE, the idempotency key for settlement)
- numbers, draw_date, source
- prize_11..prize_15
- total_prize, bets_checked, total_cost, balance (aggregate, set on settlement)
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import JSON, Date, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.domain import DrawResult
from app.models.base import Base


class ContestResult(Base):
    """One row per contest with its 15 numbers, prize tiers and settlement totals."""

    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contest_number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False, default="api")

    prize_11: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    prize_12: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    prize_13: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    prize_14: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    prize_15: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    total_prize: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    bets_checked: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_cost: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    balance: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    @classmethod
    def from_draw(cls, result: DrawResult) -> ContestResult:
        return cls(
            contest_number=result.contest_number,
            numbers=list(result.numbers),
            draw_date=result.draw_date,
            source=result.source,
            prize_11=result.prize_for(11),
            prize_12=result.prize_for(12),
            prize_13=result.prize_for(13),
            prize_14=result.prize_for(14),
            prize_15=result.prize_for(15),
        )

    @property
    def prize_table(self) -> dict[int, Decimal]:
        return {
            11: self.prize_11,
            12: self.prize_12,
            13: self.prize_13,
            14: self.prize_14,
            15: self.prize_15,
        }
