"""Draw session routes (controllers). No business logic here.

Clients poll ``GET /draw-sessions/<id>`` to render the spin; every response
is the session state at request time.
"""

from __future__ import annotations

from flask import Blueprint, current_app

from rifa.db import get_session
from rifa.schemas.draw import DrawSessionSchema, DrawStartResponseSchema
from rifa.services.draw_session_service import DrawSessionService
from rifa.services.event_service import EventService
from rifa.utils.responses import ok

draw_bp = Blueprint("draw", __name__)

_session_schema = DrawSessionSchema()
_start_schema = DrawStartResponseSchema()


def _sessions() -> DrawSessionService:
    return current_app.extensions["draw_sessions"]


@draw_bp.post("/events/<event_id>/draw-sessions")
def open_draw_session(event_id: str):
    service = EventService(max_tickets=int(current_app.config["MAX_TICKETS_PER_EVENT"]))
    event = service.get_event(get_session(), event_id)
    ticket_range = service.check_range(event.initial_seq, event.final_seq)

    state = _sessions().open(event.id, ticket_range, title=event.title)
    return ok(_session_schema.dump(state), status_code=201)


@draw_bp.get("/draw-sessions/<session_id>")
def get_draw_session(session_id: str):
    return ok(_session_schema.dump(_sessions().get(session_id)))


@draw_bp.post("/draw-sessions/<session_id>/start")
def start_draw(session_id: str):
    return ok(_start_schema.dump(_sessions().start(session_id)))


@draw_bp.delete("/draw-sessions/<session_id>")
def close_draw_session(session_id: str):
    return ok(_session_schema.dump(_sessions().close(session_id)))
