"""Schemas for draw session responses."""

from __future__ import annotations

from marshmallow import Schema, fields

from rifa.draw.session import DrawPhase


class DrawSessionSchema(Schema):
    session_id = fields.Str(required=True)
    event_id = fields.Str(required=True)
    title = fields.Str(required=True)
    initial_seq = fields.Int(required=True)
    final_seq = fields.Int(required=True)

    phase = fields.Enum(DrawPhase, by_value=True, required=True)
    current_display_number = fields.Int(allow_none=True)
    winner = fields.Int(allow_none=True)

    # Most recent first.
    history = fields.List(fields.Int(), required=True)
    history_count = fields.Int(required=True)
    available_count = fields.Int(required=True)
    is_sold_out = fields.Bool(required=True)
    can_start = fields.Bool(required=True)
    label = fields.Str(required=True)


class DrawStartResponseSchema(DrawSessionSchema):
    # False when the start was ignored (draw in flight or pool exhausted).
    started = fields.Bool(required=True)
