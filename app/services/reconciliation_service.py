"""Settle pending bets against a draw result, exactly once per contest."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain import CENT, PRIZE_TIERS, ZERO, DrawResult, ReconcileOutcome, to_money
from app.errors import NormalizationError, ReconciliationError, ValidationError
from app.repositories.bet_repository import BetRepository
from app.repositories.contest_result_repository import ContestResultRepository
from app.schemas.contest_result import ManualResultSchema
from app.services.result_fetcher import ResultFetcher
from app.sources.normalizer import normalize

logger = logging.getLogger(__name__)

_manual_schema = ManualResultSchema()


class ReconciliationService:
    """Reconciliation use-cases.

    The unit of work is: claim the contest by inserting its result row,
    settle every pending bet, write the aggregate, commit. The unique
    constraint on ``results.contest_number`` decides which of several
    overlapping runs does the work; the others get ``already_processed``.
    """

    def __init__(
        self,
        bet_cost: Decimal | str,
        default_prizes: Mapping[int, Decimal] | None = None,
        bets: BetRepository | None = None,
        results: ContestResultRepository | None = None,
    ) -> None:
        self._bet_cost = to_money(bet_cost)
        self._default_prizes = dict(default_prizes) if default_prizes is not None else None
        self._bets = bets or BetRepository()
        self._results = results or ContestResultRepository()

    @staticmethod
    def count_matches(bet_numbers: Iterable[int], draw_numbers: Iterable[int]) -> int:
        return len({int(n) for n in bet_numbers} & {int(n) for n in draw_numbers})

    @staticmethod
    def prize_for(match_count: int, prize_table: Mapping[int, Decimal]) -> Decimal:
        if match_count not in PRIZE_TIERS:
            return ZERO
        return to_money(prize_table.get(match_count, ZERO))

    def reconcile(self, session: Session, result: DrawResult) -> ReconcileOutcome:
        contest = result.contest_number
        logger.info(
            "Reconciling contest %s (%s, source %s) numbers %s",
            contest,
            result.draw_date,
            result.source,
            list(result.numbers),
        )

        if self._results.exists(session, contest):
            logger.info("Contest %s already processed", contest)
            return ReconcileOutcome.already(contest)

        try:
            row = self._results.insert(session, result)
        except IntegrityError as exc:
            session.rollback()
            if not self._results.exists(session, contest):
                logger.exception("Could not record contest %s", contest)
                raise ReconciliationError(details={"contest_number": contest}) from exc
            logger.info("Contest %s claimed by a concurrent run", contest)
            return ReconcileOutcome.already(contest)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Could not record contest %s", contest)
            raise ReconciliationError(details={"contest_number": contest}) from exc

        try:
            pending = self._bets.list_unsettled(session)
            logger.info("%s pending bets", len(pending))

            total_prize = ZERO
            checked = 0
            for bet in pending:
                matches = self.count_matches(bet.numbers, result.numbers)
                prize = self.prize_for(matches, result.prize_table)
                if not self._bets.settle(session, bet.id, result, match_count=matches, prize=prize):
                    logger.info("Bet #%s was settled elsewhere; skipped", bet.id)
                    continue

                checked += 1
                total_prize += prize
                logger.info(
                    "Bet #%s %s/%s: %s matches, prize %s",
                    bet.id,
                    bet.strategy,
                    bet.kind,
                    matches,
                    prize,
                )

            total_cost = (self._bet_cost * checked).quantize(CENT)
            self._results.record_aggregate(
                session,
                row,
                total_prize=total_prize,
                bets_checked=checked,
                total_cost=total_cost,
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Reconciliation of contest %s failed; rolled back", contest)
            raise ReconciliationError(details={"contest_number": contest}) from exc

        logger.info(
            "Contest %s: %s bets checked, prize %s, cost %s, balance %s",
            contest,
            checked,
            total_prize,
            total_cost,
            total_prize - total_cost,
        )
        return ReconcileOutcome(contest_number=contest, checked=checked, total_prize=total_prize)

    def reconcile_latest(self, session: Session, fetcher: ResultFetcher) -> ReconcileOutcome:
        """Fetch through the fallback chain, then reconcile.

        ``NoResultAvailable`` propagates before anything is written.
        """

        return self.reconcile(session, fetcher.fetch_latest())

    def parse_manual(self, payload: Mapping[str, Any], *, today: date) -> DrawResult:
        """Validate a human-entered result with the same rules as the sources."""

        try:
            data = _manual_schema.load(payload)
        except MarshmallowValidationError as exc:
            raise ValidationError(message="Invalid result payload", details=exc.messages) from exc

        try:
            return normalize(
                {
                    "contest_number": data["contest_number"],
                    "numbers": data["numbers"],
                    "date": data.get("date") or today,
                    "prizes": data.get("prize_table"),
                },
                "manual",
                default_prizes=self._default_prizes,
            )
        except NormalizationError as exc:
            raise ValidationError(message=exc.message, details=exc.details) from exc

    def reconcile_manual(self, session: Session, payload: Mapping[str, Any], *, today: date) -> ReconcileOutcome:
        return self.reconcile(session, self.parse_manual(payload, today=today))
