"""ORM models."""

from app.models.bet import Bet
from app.models.contest_result import ContestResult

__all__ = ["Bet", "ContestResult"]
