"""Web page routes."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, render_template

from rifa.db import get_session
from rifa.services.event_service import EventService
from rifa.services.grid_service import PrintLayoutService, format_currency

web_bp = Blueprint("web", __name__)

_layout = PrintLayoutService()


@web_bp.get("/events/<event_id>/print")
def print_event(event_id: str):
    """Printable ticket sheets, 25 per page (use the browser's print to PDF)."""

    service = EventService(max_tickets=int(current_app.config["MAX_TICKETS_PER_EVENT"]))
    event = service.get_event(get_session(), event_id)
    document = _layout.build(event)

    html = render_template(
        "print.html",
        document=document,
        ticket_value=format_currency(event.value),
    )
    return Response(
        html,
        mimetype="text/html",
        headers={"Content-Disposition": f'inline; filename="{document.filename}"'},
    )

