"""Draw session state machine.

idle -> spinning -> revealing -> resolved -> spinning -> ... ; any -> closed.
The winner is picked only when the reveal pause ends, from the numbers not yet
in the session history.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from rifa.draw.ledger import HistoryLedger
from rifa.draw.pool import TicketRange, available, is_sold_out
from rifa.draw.scheduler import AnimationTick, Scheduler, SpinAnimation, TimerHandle

logger = logging.getLogger(__name__)


class DrawPhase(str, Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    REVEALING = "revealing"
    RESOLVED = "resolved"
    CLOSED = "closed"


@dataclass(frozen=True)
class DrawTimings:
    spin_duration_ms: float = 4000
    reveal_delay_ms: float = 1200
    base_interval_ms: float = 50
    max_interval_ms: float = 850


@dataclass(frozen=True)
class DrawSnapshot:
    title: str
    initial_seq: int
    final_seq: int
    phase: DrawPhase
    current_display_number: int | None
    winner: int | None
    history: list[int]
    available_count: int
    is_sold_out: bool
    can_start: bool

    @property
    def history_count(self) -> int:
        return len(self.history)

    @property
    def label(self) -> str:
        """Short status key for the draw button."""

        if self.phase is DrawPhase.CLOSED:
            return "closed"
        if self.phase is DrawPhase.SPINNING:
            return "spinning"
        if self.phase is DrawPhase.REVEALING:
            return "revealing"
        if self.is_sold_out:
            return "exhausted"
        if self.phase is DrawPhase.RESOLVED:
            return "next_draw"
        return "start"


WinnerListener = Callable[[int], None]


class DrawSession:
    """One draw UI session over a ticket range.

    All mutation goes through ``start()``, ``close()`` and the callbacks this
    session schedules on its own scheduler.
    """

    def __init__(
        self,
        ticket_range: TicketRange,
        scheduler: Scheduler,
        *,
        title: str = "",
        timings: DrawTimings | None = None,
        rng: random.Random | None = None,
        display_rng: random.Random | None = None,
    ) -> None:
        self.range = ticket_range
        self.title = title
        self._scheduler = scheduler
        self._timings = timings or DrawTimings()
        self._rng = rng or random.Random()
        self._display_rng = display_rng or random.Random()

        self._phase = DrawPhase.IDLE
        self._current: int | None = None
        self._winner: int | None = None
        self._history = HistoryLedger()

        self._animation: SpinAnimation | None = None
        self._reveal_handle: TimerHandle | None = None
        self._listeners: list[WinnerListener] = []

    @property
    def phase(self) -> DrawPhase:
        return self._phase

    @property
    def current_display_number(self) -> int | None:
        return self._current

    @property
    def winner(self) -> int | None:
        return self._winner

    @property
    def history(self) -> list[int]:
        return self._history.as_list()

    @property
    def available_numbers(self) -> list[int]:
        return available(self.range, self._history)

    @property
    def available_count(self) -> int:
        return self.range.size - self._history.count()

    @property
    def is_sold_out(self) -> bool:
        return is_sold_out(self.range, self._history)

    @property
    def can_start(self) -> bool:
        return self._phase in (DrawPhase.IDLE, DrawPhase.RESOLVED) and not self.is_sold_out

    def on_winner(self, listener: WinnerListener) -> None:
        self._listeners.append(listener)

    def start(self) -> bool:
        """Begin a draw. Returns False when the request is ignored."""

        if self._phase in (DrawPhase.SPINNING, DrawPhase.REVEALING):
            logger.debug("Draw already in progress for %r; start ignored", self.title)
            return False
        if self._phase is DrawPhase.CLOSED:
            logger.debug("Draw session %r is closed; start ignored", self.title)
            return False
        if self.is_sold_out:
            logger.info("All %d numbers of %r were drawn; start ignored", self.range.size, self.title)
            return False

        self._phase = DrawPhase.SPINNING
        self._winner = None
        self._current = None
        logger.info(
            "Draw #%d started for %r (%d numbers available)",
            self._history.count() + 1,
            self.title,
            self.available_count,
        )

        t = self._timings
        self._animation = SpinAnimation(
            self._scheduler,
            low=self.range.initial_seq,
            high=self.range.final_seq,
            duration_ms=t.spin_duration_ms,
            base_interval_ms=t.base_interval_ms,
            max_interval_ms=t.max_interval_ms,
            on_tick=self._on_tick,
            on_complete=self._on_spin_complete,
            rng=self._display_rng,
        )
        self._animation.begin()
        return True

    def close(self) -> None:
        if self._animation is not None:
            self._animation.cancel()
            self._animation = None
        if self._reveal_handle is not None:
            self._reveal_handle.cancel()
            self._reveal_handle = None
        if self._phase is not DrawPhase.CLOSED:
            logger.info("Draw session %r closed after %d draws", self.title, self._history.count())
        self._phase = DrawPhase.CLOSED

    def snapshot(self) -> DrawSnapshot:
        return DrawSnapshot(
            title=self.title,
            initial_seq=self.range.initial_seq,
            final_seq=self.range.final_seq,
            phase=self._phase,
            current_display_number=self._current,
            winner=self._winner,
            history=self._history.as_list(),
            available_count=self.available_count,
            is_sold_out=self.is_sold_out,
            can_start=self.can_start,
        )

    def _on_tick(self, tick: AnimationTick) -> None:
        if self._phase is not DrawPhase.SPINNING:
            return
        self._current = tick.display_number

    def _on_spin_complete(self) -> None:
        if self._phase is not DrawPhase.SPINNING:
            return
        self._animation = None
        self._phase = DrawPhase.REVEALING
        self._reveal_handle = self._scheduler.call_later(self._timings.reveal_delay_ms, self._resolve)

    def _resolve(self) -> None:
        self._reveal_handle = None
        if self._phase is not DrawPhase.REVEALING:
            return

        candidates = available(self.range, self._history)
        winner = candidates[self._rng.randrange(len(candidates))]

        self._history.append(winner)
        self._current = winner
        self._winner = winner
        self._phase = DrawPhase.RESOLVED
        logger.info(
            "Draw #%d for %r resolved: winner=%d, %d numbers left",
            self._history.count(),
            self.title,
            winner,
            self.available_count,
        )

        for listener in list(self._listeners):
            try:
                listener(winner)
            except Exception:
                logger.exception("Winner listener failed for %r (winner=%d)", self.title, winner)
