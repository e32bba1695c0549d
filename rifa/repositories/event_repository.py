"""Repository layer for raffle event persistence."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from rifa.models.raffle_event import RaffleEvent


class EventRepository:
    """CRUD operations for RaffleEvent."""

    def list_events(self, session: Session, search: str | None = None) -> Sequence[RaffleEvent]:
        stmt = select(RaffleEvent)
        term = (search or "").strip().lower()
        if term:
            pattern = f"%{term}%"
            stmt = stmt.where(
                or_(
                    func.lower(RaffleEvent.title).like(pattern),
                    func.lower(RaffleEvent.prize).like(pattern),
                )
            )
        stmt = stmt.order_by(RaffleEvent.created_at.desc())
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, event_id: str) -> RaffleEvent | None:
        return session.get(RaffleEvent, event_id)

    def create(self, session: Session, **fields: Any) -> RaffleEvent:
        event = RaffleEvent(**fields)
        session.add(event)
        session.flush()  # assign defaults (id, created_at)
        return event

    def update(self, session: Session, event: RaffleEvent, **fields: Any) -> RaffleEvent:
        for name, value in fields.items():
            setattr(event, name, value)
        session.flush()
        return event

    def delete(self, session: Session, event: RaffleEvent) -> None:
        session.delete(event)
        session.flush()
