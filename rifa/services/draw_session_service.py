"""Live draw sessions, one per event, held in process memory.

Sessions are never persisted: reopening a draw for an event starts over with
an empty history.
"""

from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Any

from rifa.draw.pool import TicketRange
from rifa.draw.scheduler import RealTimeScheduler, Scheduler
from rifa.draw.session import DrawSession, DrawTimings
from rifa.errors import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    session_id: str
    event_id: str
    session: DrawSession
    scheduler: Scheduler

    def catch_up(self) -> None:
        if isinstance(self.scheduler, RealTimeScheduler):
            self.scheduler.poll()


class DrawSessionService:
    """Open, drive and close draw sessions.

    Every call holds one lock and first lets the session's scheduler catch up
    with the clock, so timer callbacks only ever run on a caller's thread.
    """

    def __init__(
        self,
        timings: DrawTimings | None = None,
        *,
        seed: int | None = None,
        scheduler_factory: Callable[[], Scheduler] = RealTimeScheduler,
    ) -> None:
        self._timings = timings or DrawTimings()
        self._seed = seed
        self._scheduler_factory = scheduler_factory
        self._lock = Lock()
        self._sessions: dict[str, _Entry] = {}
        self._by_event: dict[str, str] = {}

    def _rngs(self) -> tuple[random.Random, random.Random]:
        if self._seed is None:
            return random.Random(), random.Random()
        return random.Random(self._seed), random.Random(self._seed + 1)

    def _entry(self, session_id: str) -> _Entry:
        entry = self._sessions.get(session_id)
        if entry is None:
            raise NotFoundError(message=f"Draw session {session_id} not found")
        return entry

    def open(self, event_id: str, ticket_range: TicketRange, title: str = "") -> dict[str, Any]:
        """Start a fresh session for an event, closing the one it replaces."""

        rng, display_rng = self._rngs()
        with self._lock:
            previous = self._by_event.pop(event_id, None)
            if previous is not None:
                self._sessions.pop(previous).session.close()

            scheduler = self._scheduler_factory()
            session = DrawSession(
                ticket_range,
                scheduler,
                title=title,
                timings=self._timings,
                rng=rng,
                display_rng=display_rng,
            )
            entry = _Entry(
                session_id=uuid.uuid4().hex,
                event_id=event_id,
                session=session,
                scheduler=scheduler,
            )
            self._sessions[entry.session_id] = entry
            self._by_event[event_id] = entry.session_id
            logger.info("Opened draw session %s for event %s", entry.session_id, event_id)
            return self._describe(entry)

    def get(self, session_id: str) -> dict[str, Any]:
        with self._lock:
            entry = self._entry(session_id)
            entry.catch_up()
            return self._describe(entry)

    def start(self, session_id: str) -> dict[str, Any]:
        with self._lock:
            entry = self._entry(session_id)
            entry.catch_up()
            started = entry.session.start()
            entry.catch_up()
            return {**self._describe(entry), "started": started}

    def close(self, session_id: str) -> dict[str, Any]:
        with self._lock:
            entry = self._sessions.pop(session_id, None)
            if entry is None:
                raise NotFoundError(message=f"Draw session {session_id} not found")
            if self._by_event.get(entry.event_id) == session_id:
                del self._by_event[entry.event_id]
            entry.session.close()
            return self._describe(entry)

    def close_for_event(self, event_id: str) -> None:
        with self._lock:
            session_id = self._by_event.pop(event_id, None)
            if session_id is not None:
                self._sessions.pop(session_id).session.close()

    def close_all(self) -> None:
        with self._lock:
            for entry in self._sessions.values():
                entry.session.close()
            self._sessions.clear()
            self._by_event.clear()

    @staticmethod
    def _describe(entry: _Entry) -> dict[str, Any]:
        snap = entry.session.snapshot()
        return {
            "session_id": entry.session_id,
            "event_id": entry.event_id,
            "title": snap.title,
            "initial_seq": snap.initial_seq,
            "final_seq": snap.final_seq,
            "phase": snap.phase,
            "current_display_number": snap.current_display_number,
            "winner": snap.winner,
            "history": snap.history,
            "history_count": snap.history_count,
            "available_count": snap.available_count,
            "is_sold_out": snap.is_sold_out,
            "can_start": snap.can_start,
            "label": snap.label,
        }
