"""Domain values shared by sources, services and routes.

Money is always ``Decimal`` quantized to cents.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo

NUMBERS_PER_DRAW = 15
MIN_NUMBER = 1
MAX_NUMBER = 25
PRIZE_TIERS = (11, 12, 13, 14, 15)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: object) -> Decimal:
    """Convert an int/str/float/Decimal amount to a cent-quantized Decimal.

    Floats go through ``str`` so 1500.1 stays 1500.10 rather than the binary
    expansion. Raises ``ValueError`` for anything non-numeric.
    """

    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)  # type: ignore[arg-type]
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount.quantize(CENT)


def parse_prize_table(raw: str | Mapping[object, object]) -> dict[int, Decimal]:
    """Parse ``"11:6,12:12,..."`` (or a mapping) into a full tier table.

    Tiers missing from the input are zero; tiers outside 11..15 are ignored.
    """

    items: list[tuple[object, object]]
    if isinstance(raw, Mapping):
        items = list(raw.items())
    else:
        items = []
        for chunk in str(raw).split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            tier, sep, amount = chunk.partition(":")
            if not sep:
                raise ValueError(f"Invalid prize table entry: {chunk!r}")
            items.append((tier.strip(), amount.strip()))

    table = {tier: ZERO for tier in PRIZE_TIERS}
    for tier_raw, amount_raw in items:
        try:
            tier = int(str(tier_raw).strip())
        except ValueError as exc:
            raise ValueError(f"Invalid prize tier: {tier_raw!r}") from exc
        if tier not in table:
            continue
        amount = to_money(amount_raw)
        if amount < 0:
            raise ValueError(f"Negative prize for tier {tier}")
        table[tier] = amount
    return table


def today_in(timezone_name: str) -> date:
    """Current calendar date in the given IANA timezone."""

    return datetime.now(ZoneInfo(timezone_name)).date()


@dataclass(frozen=True)
class DrawResult:
    """Canonical draw result, whatever source produced it."""

    contest_number: int
    numbers: tuple[int, ...]
    draw_date: date
    source: str
    prize_table: Mapping[int, Decimal] = field(default_factory=lambda: {tier: ZERO for tier in PRIZE_TIERS})

    def prize_for(self, match_count: int) -> Decimal:
        if match_count not in PRIZE_TIERS:
            return ZERO
        return self.prize_table.get(match_count, ZERO)


@dataclass(frozen=True)
class Settlement:
    draw_numbers: tuple[int, ...]
    match_count: int
    prize: Decimal
    contest_number: int


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of one reconciliation attempt.

    ``already_processed`` is the routine idempotency signal, not a failure.
    """

    contest_number: int
    checked: int = 0
    total_prize: Decimal = ZERO
    already_processed: bool = False

    @classmethod
    def already(cls, contest_number: int) -> ReconcileOutcome:
        return cls(contest_number=contest_number, already_processed=True)
