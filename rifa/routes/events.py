"""Event catalog routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from rifa.db import get_session
from rifa.errors import ValidationError
from rifa.schemas.event import EventListQuerySchema, EventSchema, EventWriteSchema
from rifa.schemas.grid import GridQuerySchema, TicketGridPageSchema
from rifa.services import csv_service
from rifa.services.event_service import EventService
from rifa.services.grid_service import TicketGridService
from rifa.utils.responses import attachment, ok

events_bp = Blueprint("events", __name__)

_event_schema = EventSchema()
_events_schema = EventSchema(many=True)
_write_schema = EventWriteSchema()
_list_query_schema = EventListQuerySchema()
_grid_query_schema = GridQuerySchema()
_grid_schema = TicketGridPageSchema()


def _service() -> EventService:
    return EventService(max_tickets=int(current_app.config["MAX_TICKETS_PER_EVENT"]))


def _grid_service() -> TicketGridService:
    return TicketGridService(int(current_app.config["TICKETS_PER_PAGE"]))


@events_bp.get("/events")
def list_events():
    """List events, newest first; ``q`` filters by title or prize."""

    query = _list_query_schema.load(request.args)
    events = _service().list_events(get_session(), search=query.get("q"))
    return ok(_events_schema.dump(events))


@events_bp.post("/events")
def create_event():
    payload = request.get_json(silent=True) or {}
    data = _write_schema.load(payload)
    event = _service().create_event(get_session(), data)

    # Commit occurs in teardown if no exception.
    return ok(_event_schema.dump(event), status_code=201)


@events_bp.get("/events/export.csv")
def export_events():
    events = _service().list_events(get_session())
    return attachment(
        csv_service.export_events(events),
        filename=csv_service.export_filename(),
        mimetype="text/csv; charset=utf-8",
    )


@events_bp.post("/events/import")
def import_events():
    """Create events from a CSV in the export format (body or ``file`` upload)."""

    upload = request.files.get("file")
    raw = upload.read() if upload is not None else request.get_data()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValidationError(message="CSV must be UTF-8", details={"file": [str(exc)]}) from exc

    service = _service()
    rows = csv_service.parse_events(text, check_range=service.check_range)

    session = get_session()
    created = [service.create_event(session, row) for row in rows]
    return ok(_events_schema.dump(created), status_code=201)


@events_bp.get("/events/<event_id>")
def get_event(event_id: str):
    event = _service().get_event(get_session(), event_id)
    return ok(_event_schema.dump(event))


@events_bp.route("/events/<event_id>", methods=["PUT", "PATCH"])
def update_event(event_id: str):
    payload = request.get_json(silent=True) or {}
    data = _write_schema.load(payload, partial=True)
    event = _service().update_event(get_session(), event_id, data)
    return ok(_event_schema.dump(event))


@events_bp.delete("/events/<event_id>")
def delete_event(event_id: str):
    _service().delete_event(get_session(), event_id)
    current_app.extensions["draw_sessions"].close_for_event(event_id)
    return ok({"id": event_id, "deleted": True})


@events_bp.post("/events/<event_id>/duplicate")
def duplicate_event(event_id: str):
    event = _service().duplicate_event(get_session(), event_id)
    return ok(_event_schema.dump(event), status_code=201)


@events_bp.get("/events/<event_id>/grid")
def get_grid_page(event_id: str):
    """One page of the ticket grid (1-based ``page``)."""

    query = _grid_query_schema.load(request.args)
    event = _service().get_event(get_session(), event_id)
    page = _grid_service().page(event, int(query["page"]))
    return ok(_grid_schema.dump(page))
