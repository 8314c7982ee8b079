"""Schemas for draw results and reconciliation outcomes."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class WholeNumber(fields.Integer):
    """Integer that takes ints or digit strings; floats and booleans are invalid."""

    def _deserialize(self, value, attr, data, **kwargs):  # type: ignore[no-untyped-def]
        if isinstance(value, (bool, float)):
            raise self.make_error("invalid")
        return super()._deserialize(value, attr, data, **kwargs)


class ManualResultSchema(Schema):
    """Human-entered result, used when every source fails."""

    contest_number = WholeNumber(
        data_key="contestNumber",
        required=True,
        validate=validate.Range(min=1),
    )
    numbers = fields.List(
        WholeNumber(validate=validate.Range(min=1, max=25)),
        required=True,
        validate=validate.Length(equal=15),
    )
    date = fields.Date(required=False, load_default=None, allow_none=True)
    prize_table = fields.Dict(
        data_key="prizeTable",
        keys=fields.String(validate=validate.OneOf(["11", "12", "13", "14", "15"])),
        values=fields.Decimal(places=2, validate=validate.Range(min=0)),
        required=False,
        load_default=None,
        allow_none=True,
    )

    @validates_schema
    def _validate_unique(self, data, **kwargs):  # type: ignore[no-untyped-def]
        nums = data.get("numbers") or []
        if len(nums) != len(set(nums)):
            raise ValidationError({"numbers": ["Numbers must be unique"]})


class ContestResultSchema(Schema):
    contest_number = fields.Int()
    numbers = fields.List(fields.Int())
    draw_date = fields.Date()
    source = fields.Str()
    prize_table = fields.Dict(keys=fields.Str(), values=fields.Decimal(as_string=True))
    total_prize = fields.Decimal(as_string=True, allow_none=True)
    bets_checked = fields.Int(allow_none=True)
    total_cost = fields.Decimal(as_string=True, allow_none=True)
    balance = fields.Decimal(as_string=True, allow_none=True)


class DrawResultSchema(Schema):
    """A fetched (not necessarily persisted) result."""

    contest_number = fields.Int()
    numbers = fields.List(fields.Int())
    draw_date = fields.Date()
    source = fields.Str()
    prize_table = fields.Dict(keys=fields.Str(), values=fields.Decimal(as_string=True))


class ReconcileOutcomeSchema(Schema):
    contest_number = fields.Int()
    checked = fields.Int()
    total_prize = fields.Decimal(as_string=True)
    already_processed = fields.Bool()
