"""Schemas for the paginated ticket grid."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class GridQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    page = fields.Int(load_default=1, validate=validate.Range(min=1))


class TicketSlotSchema(Schema):
    number = fields.Int(required=True)
    value = fields.Float(required=True)
    prize = fields.Str(required=True)


class TicketGridPageSchema(Schema):
    event_id = fields.Str(required=True)
    page = fields.Int(required=True)
    total_pages = fields.Int(required=True)
    tickets_per_page = fields.Int(required=True)
    total_tickets = fields.Int(required=True)

    # Trailing positions past final_seq are null.
    slots = fields.List(fields.Nested(TicketSlotSchema, allow_none=True), required=True)
