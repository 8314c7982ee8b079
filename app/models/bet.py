"""Bet ORM model.

A bet is unsettled while ``contest_number`` is NULL. The settlement columns
are written once, by the reconciliation service.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import JSON, Date, DateTime, Integer, Numeric, SmallInteger, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.domain import Settlement
from app.models.base import Base


class Bet(Base):
    """One 15-number Lotofacil bet."""

    __tablename__ = "bets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    strategy: Mapped[str] = mapped_column(String(50), nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False, default="auto")  # auto | manual
    numbers: Mapped[list[int]] = mapped_column(JSON, nullable=False)  # sorted, 15 items
    placed_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    draw_numbers: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)
    match_count: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    prize: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    contest_number: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    settled_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    @property
    def settlement(self) -> Settlement | None:
        if self.contest_number is None:
            return None
        return Settlement(
            draw_numbers=tuple(int(n) for n in (self.draw_numbers or [])),
            match_count=int(self.match_count or 0),
            prize=Decimal(self.prize if self.prize is not None else 0),
            contest_number=int(self.contest_number),
        )
