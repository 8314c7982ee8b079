"""Query-string helpers."""

from __future__ import annotations

from collections.abc import Mapping

from app.errors import ValidationError

MAX_LIMIT = 1000


def limit_arg(args: Mapping[str, str], *, default: int) -> int:
    """Read ``?limit=`` as a positive int capped at ``MAX_LIMIT``."""

    raw = (args.get("limit") or "").strip()
    if not raw:
        return default
    try:
        limit = int(raw)
    except ValueError as e:
        raise ValidationError("limit must be an integer") from e
    if limit <= 0:
        raise ValidationError("limit must be positive")
    return min(limit, MAX_LIMIT)
