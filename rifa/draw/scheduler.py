"""Cooperative timers and the spin animation driven by them.

Timers live on a logical timeline measured in milliseconds. Nothing runs in
the background: due callbacks fire when the owner advances the timeline,
one at a time and in due-time order, with ``now()`` pinned to the due time of
the callback being run.
"""

from __future__ import annotations

import heapq
import itertools
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(order=True)
class TimerHandle:
    """Scheduled callback. Cancelling is idempotent."""

    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Single-threaded timer queue on a logical clock."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._queue: list[TimerHandle] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(
            when=self._now + max(0.0, float(delay_ms)),
            seq=next(self._counter),
            callback=callback,
        )
        heapq.heappush(self._queue, handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def advance_to(self, target_ms: float) -> int:
        """Fire every timer due at or before ``target_ms``; return how many fired.

        Timers scheduled by a firing callback are picked up in the same pass
        when they fall due before the target.
        """

        fired = 0
        while self._queue and self._queue[0].when <= target_ms:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = max(self._now, handle.when)
            handle.callback()
            fired += 1
        self._now = max(self._now, float(target_ms))
        return fired

    def advance(self, delta_ms: float) -> int:
        return self.advance_to(self._now + float(delta_ms))


class VirtualScheduler(Scheduler):
    """Time moves only when the caller advances it (tests, simulations)."""

    def run_all(self, limit: int = 100_000) -> int:
        """Advance until no live timer remains."""

        fired = 0
        while self.pending:
            if fired >= limit:
                raise RuntimeError(f"Timers still pending after {limit} callbacks")
            live = min(h.when for h in self._queue if not h.cancelled)
            fired += self.advance_to(live)
        return fired


class RealTimeScheduler(Scheduler):
    """Logical timeline that follows the monotonic wall clock.

    ``poll()`` catches up with real time; call it before every read or
    command so elapsed timers have fired.
    """

    def __init__(self, time_fn: Callable[[], float] = time.monotonic) -> None:
        super().__init__(start_ms=0.0)
        self._time_fn = time_fn
        self._origin = time_fn()

    def wall_ms(self) -> float:
        return (self._time_fn() - self._origin) * 1000.0

    def poll(self) -> int:
        return self.advance_to(self.wall_ms())


def tick_interval(progress: float, base_ms: float, max_ms: float) -> float:
    """Cubic ease-out delay between ticks: fast at first, slow near the end."""

    p = min(max(float(progress), 0.0), 1.0)
    return float(base_ms) + (p**3) * (float(max_ms) - float(base_ms))


@dataclass(frozen=True)
class AnimationTick:
    display_number: int
    delay_ms: float | None  # None on the last tick of the spin


class SpinAnimation:
    """Self-rescheduling ticks that shuffle the displayed number during a spin.

    Each tick samples a number from the full range, cosmetic only. The next
    tick is scheduled after the current one fired; once ``duration_ms`` has
    elapsed the last tick is emitted and ``on_complete`` runs.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        low: int,
        high: int,
        duration_ms: float,
        base_interval_ms: float,
        max_interval_ms: float,
        on_tick: Callable[[AnimationTick], None],
        on_complete: Callable[[], None],
        rng: random.Random | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._low = int(low)
        self._high = int(high)
        self._duration = float(duration_ms)
        self._base = float(base_interval_ms)
        self._max = float(max_interval_ms)
        self._on_tick = on_tick
        self._on_complete = on_complete
        self._rng = rng or random.Random()

        self._started_at: float | None = None
        self._handle: TimerHandle | None = None
        self._done = False
        self.ticks = 0

    @property
    def active(self) -> bool:
        return self._started_at is not None and not self._done

    def begin(self) -> None:
        if self._started_at is not None:
            raise RuntimeError("SpinAnimation cannot be restarted; create a new one")
        self._started_at = self._scheduler.now()
        self._tick()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._done = True

    def _tick(self) -> None:
        if self._done or self._started_at is None:
            return
        self._handle = None

        elapsed = self._scheduler.now() - self._started_at
        progress = min(elapsed / self._duration, 1.0) if self._duration > 0 else 1.0
        number = self._rng.randint(self._low, self._high)
        self.ticks += 1

        if elapsed < self._duration:
            delay = tick_interval(progress, self._base, self._max)
            self._on_tick(AnimationTick(display_number=number, delay_ms=delay))
            if self._done:
                return
            self._handle = self._scheduler.call_later(delay, self._tick)
            return

        self._done = True
        self._on_tick(AnimationTick(display_number=number, delay_ms=None))
        self._on_complete()
