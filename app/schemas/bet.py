"""Marshmallow schemas for Bet."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates_schema


class SettlementSchema(Schema):
    draw_numbers = fields.List(fields.Int())
    match_count = fields.Int()
    prize = fields.Decimal(as_string=True)
    contest_number = fields.Int()


class BetSchema(Schema):
    """Serialize Bet."""

    id = fields.Int(required=True)
    strategy = fields.Str(required=True)
    kind = fields.Str()
    numbers = fields.List(fields.Int())
    placed_date = fields.Date()
    settlement = fields.Nested(SettlementSchema, allow_none=True)


class BetCreateSchema(Schema):
    """Validate a manually placed bet."""

    strategy = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1, max=25)),
        required=True,
        validate=validate.Length(equal=15),
    )
    placed_date = fields.Date(data_key="placedDate", required=False, load_default=None)
    kind = fields.Str(required=False, load_default="manual", validate=validate.OneOf(["auto", "manual"]))

    @validates_schema
    def _validate_unique(self, data, **kwargs):  # type: ignore[no-untyped-def]
        nums = data.get("numbers") or []
        if len(nums) != len(set(nums)):
            raise ValidationError({"numbers": ["Numbers must be unique"]})
