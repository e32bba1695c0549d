"""Service layer for raffle event use-cases."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from rifa.draw.pool import TicketRange
from rifa.errors import NotFoundError, ValidationError
from rifa.models.raffle_event import RaffleEvent
from rifa.repositories.event_repository import EventRepository

logger = logging.getLogger(__name__)

_COPY_FIELDS = (
    "title",
    "description",
    "location",
    "start_date",
    "end_date",
    "draw_date",
    "value",
    "prize",
    "initial_seq",
    "final_seq",
    "header_image",
)


class EventService:
    """Raffle event catalog."""

    def __init__(self, repository: EventRepository | None = None, max_tickets: int = 100_000) -> None:
        self._repo = repository or EventRepository()
        self._max_tickets = max_tickets

    def check_range(self, initial_seq: int, final_seq: int) -> TicketRange:
        """Validate a ticket range; raises InvalidRangeError when reversed."""

        ticket_range = TicketRange(int(initial_seq), int(final_seq))
        if ticket_range.size > self._max_tickets:
            raise ValidationError(
                message="Too many tickets",
                details={"final_seq": [f"A raffle holds at most {self._max_tickets} tickets"]},
            )
        return ticket_range

    def list_events(self, session: Session, search: str | None = None) -> Sequence[RaffleEvent]:
        return self._repo.list_events(session, search=search)

    def get_event(self, session: Session, event_id: str) -> RaffleEvent:
        event = self._repo.get_by_id(session, event_id)
        if event is None:
            raise NotFoundError(message=f"Event {event_id} not found")
        return event

    def create_event(self, session: Session, data: dict[str, Any]) -> RaffleEvent:
        self.check_range(data.get("initial_seq", 1), data.get("final_seq", 999))
        event = self._repo.create(session, **data)
        logger.info("Created event %s (%r, tickets %d..%d)", event.id, event.title, event.initial_seq, event.final_seq)
        return event

    def update_event(self, session: Session, event_id: str, data: dict[str, Any]) -> RaffleEvent:
        event = self.get_event(session, event_id)
        self.check_range(
            data.get("initial_seq", event.initial_seq),
            data.get("final_seq", event.final_seq),
        )
        return self._repo.update(session, event, **data)

    def delete_event(self, session: Session, event_id: str) -> None:
        event = self.get_event(session, event_id)
        self._repo.delete(session, event)
        logger.info("Deleted event %s", event_id)

    def duplicate_event(self, session: Session, event_id: str) -> RaffleEvent:
        """Copy an event under a new id, as if re-submitted from its form."""

        source = self.get_event(session, event_id)
        data = {name: getattr(source, name) for name in _COPY_FIELDS}
        return self._repo.create(session, **data)
