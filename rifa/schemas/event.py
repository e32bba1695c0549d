"""Marshmallow schemas for raffle events."""

from __future__ import annotations

from decimal import Decimal

from marshmallow import EXCLUDE, Schema, fields, validate


class EventSchema(Schema):
    """Serialize RaffleEvent."""

    id = fields.Str(required=True)
    title = fields.Str(required=True)
    description = fields.Str()
    location = fields.Str()
    start_date = fields.Date(allow_none=True)
    end_date = fields.Date(allow_none=True)
    draw_date = fields.Date()
    value = fields.Float()
    prize = fields.Str()
    initial_seq = fields.Int()
    final_seq = fields.Int()
    ticket_count = fields.Int()
    header_image = fields.Str(allow_none=True)
    created_at = fields.DateTime()


class EventWriteSchema(Schema):
    """Validate create/update payloads.

    Updates load with ``partial=True``; defaults apply to creates only.
    The initial_seq <= final_seq rule is checked by the service, which also
    sees the stored values on partial updates.
    """

    class Meta:
        unknown = EXCLUDE  # read-only fields echoed back by clients

    title = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    description = fields.Str(load_default="")
    location = fields.Str(load_default="", validate=validate.Length(max=200))
    start_date = fields.Date(load_default=None, allow_none=True)
    end_date = fields.Date(load_default=None, allow_none=True)
    draw_date = fields.Date(required=True)
    value = fields.Decimal(
        places=2,
        load_default=Decimal("10.00"),
        validate=validate.Range(min=0),
    )
    prize = fields.Str(load_default="", validate=validate.Length(max=300))
    initial_seq = fields.Int(load_default=1, validate=validate.Range(min=0))
    final_seq = fields.Int(load_default=999, validate=validate.Range(min=0))
    header_image = fields.Str(load_default=None, allow_none=True)


class EventListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    q = fields.Str(load_default=None)
