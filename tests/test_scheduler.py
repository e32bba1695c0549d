from __future__ import annotations

import random
import unittest

from rifa.draw import AnimationTick, RealTimeScheduler, SpinAnimation, VirtualScheduler, tick_interval


class SchedulerTests(unittest.TestCase):
    def test_timers_fire_in_due_order_with_clock_pinned(self) -> None:
        scheduler = VirtualScheduler()
        seen: list[tuple[str, float]] = []
        scheduler.call_later(30, lambda: seen.append(("b", scheduler.now())))
        scheduler.call_later(10, lambda: seen.append(("a", scheduler.now())))
        scheduler.call_later(30, lambda: seen.append(("c", scheduler.now())))

        fired = scheduler.advance(100)

        self.assertEqual(fired, 3)
        self.assertEqual(seen, [("a", 10.0), ("b", 30.0), ("c", 30.0)])
        self.assertEqual(scheduler.now(), 100.0)

    def test_timer_not_due_does_not_fire(self) -> None:
        scheduler = VirtualScheduler()
        seen: list[int] = []
        scheduler.call_later(50, lambda: seen.append(1))
        scheduler.advance(49)
        self.assertEqual(seen, [])
        scheduler.advance(1)
        self.assertEqual(seen, [1])

    def test_cancel_is_idempotent(self) -> None:
        scheduler = VirtualScheduler()
        seen: list[int] = []
        handle = scheduler.call_later(5, lambda: seen.append(1))
        handle.cancel()
        handle.cancel()
        self.assertEqual(scheduler.pending, 0)
        self.assertEqual(scheduler.run_all(), 0)
        self.assertEqual(seen, [])

    def test_callbacks_scheduled_while_firing_are_picked_up(self) -> None:
        scheduler = VirtualScheduler()
        seen: list[float] = []

        def first() -> None:
            seen.append(scheduler.now())
            scheduler.call_later(5, lambda: seen.append(scheduler.now()))

        scheduler.call_later(10, first)
        scheduler.advance(20)
        self.assertEqual(seen, [10.0, 15.0])

    def test_real_time_scheduler_follows_time_source(self) -> None:
        now = [100.0]
        scheduler = RealTimeScheduler(time_fn=lambda: now[0])
        seen: list[int] = []
        scheduler.call_later(500, lambda: seen.append(1))

        now[0] = 100.4
        scheduler.poll()
        self.assertEqual(seen, [])

        now[0] = 100.5
        scheduler.poll()
        self.assertEqual(seen, [1])


class TickIntervalTests(unittest.TestCase):
    def test_cubic_ease_out(self) -> None:
        self.assertEqual(tick_interval(0.0, 50, 850), 50.0)
        self.assertEqual(tick_interval(1.0, 50, 850), 850.0)
        self.assertAlmostEqual(tick_interval(0.5, 50, 850), 150.0)

    def test_progress_is_clamped(self) -> None:
        self.assertEqual(tick_interval(-1.0, 50, 850), 50.0)
        self.assertEqual(tick_interval(3.0, 50, 850), 850.0)


class SpinAnimationTests(unittest.TestCase):
    def _animation(self, scheduler: VirtualScheduler, ticks: list[AnimationTick], done: list[float]) -> SpinAnimation:
        return SpinAnimation(
            scheduler,
            low=1,
            high=10,
            duration_ms=4000,
            base_interval_ms=50,
            max_interval_ms=850,
            on_tick=ticks.append,
            on_complete=lambda: done.append(scheduler.now()),
            rng=random.Random(3),
        )

    def test_ticks_decelerate_and_stay_in_range(self) -> None:
        scheduler = VirtualScheduler()
        ticks: list[AnimationTick] = []
        done: list[float] = []
        animation = self._animation(scheduler, ticks, done)

        animation.begin()
        self.assertEqual(len(ticks), 1)  # first tick is immediate
        scheduler.run_all()

        delays = [t.delay_ms for t in ticks[:-1]]
        self.assertEqual(delays[0], 50.0)
        self.assertEqual(delays, sorted(delays))
        self.assertIsNone(ticks[-1].delay_ms)
        self.assertTrue(all(1 <= t.display_number <= 10 for t in ticks))
        self.assertEqual(len(done), 1)
        self.assertGreaterEqual(done[0], 4000)
        self.assertLess(done[0], 4000 + 850)
        self.assertFalse(animation.active)

    def test_cancel_stops_pending_tick(self) -> None:
        scheduler = VirtualScheduler()
        ticks: list[AnimationTick] = []
        done: list[float] = []
        animation = self._animation(scheduler, ticks, done)

        animation.begin()
        scheduler.advance(500)
        count = len(ticks)
        animation.cancel()

        self.assertEqual(scheduler.run_all(), 0)
        self.assertEqual(len(ticks), count)
        self.assertEqual(done, [])

    def test_cannot_restart(self) -> None:
        scheduler = VirtualScheduler()
        animation = self._animation(scheduler, [], [])
        animation.begin()
        with self.assertRaises(RuntimeError):
            animation.begin()


if __name__ == "__main__":
    unittest.main()
