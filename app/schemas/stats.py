"""Schemas for statistics and status."""

from __future__ import annotations

from marshmallow import Schema, fields


class StrategyStatsSchema(Schema):
    total_bets = fields.Int()
    total_prize = fields.Decimal(as_string=True)
    total_cost = fields.Decimal(as_string=True)
    net_profit = fields.Decimal(as_string=True)
    roi = fields.Decimal(as_string=True)
    avg_matches = fields.Decimal(as_string=True)


class SystemStatusSchema(Schema):
    pending_bets = fields.Int()
    last_bet_date = fields.Date(allow_none=True)
    last_result_date = fields.Date(allow_none=True)
    last_contest = fields.Int(allow_none=True)
