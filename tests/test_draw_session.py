from __future__ import annotations

import random
import unittest
from unittest.mock import patch

from rifa.draw import DrawPhase, DrawSession, DrawTimings, TicketRange, VirtualScheduler
from rifa.draw.pool import is_sold_out
from rifa.errors import InvalidRangeError

# Constant 100 ms ticks: spin ends exactly at t=1000, winner at t=1500.
FLAT = DrawTimings(spin_duration_ms=1000, reveal_delay_ms=500, base_interval_ms=100, max_interval_ms=100)


class DrawSessionTests(unittest.TestCase):
    def _session(self, low: int = 1, high: int = 10, *, seed: int = 11, timings: DrawTimings = FLAT) -> DrawSession:
        self.scheduler = VirtualScheduler()
        return DrawSession(
            TicketRange(low, high),
            self.scheduler,
            title="Rifa de Natal",
            timings=timings,
            rng=random.Random(seed),
            display_rng=random.Random(seed + 1),
        )

    def test_phases_of_one_draw(self) -> None:
        session = self._session()
        self.assertIs(session.phase, DrawPhase.IDLE)
        self.assertIsNone(session.current_display_number)

        self.assertTrue(session.start())
        self.assertIs(session.phase, DrawPhase.SPINNING)
        self.assertIsNotNone(session.current_display_number)

        self.scheduler.advance(999)
        self.assertIs(session.phase, DrawPhase.SPINNING)

        self.scheduler.advance(1)
        self.assertIs(session.phase, DrawPhase.REVEALING)
        shown = session.current_display_number
        self.assertIsNone(session.winner)

        self.scheduler.advance(499)
        self.assertIs(session.phase, DrawPhase.REVEALING)
        self.assertEqual(session.current_display_number, shown)

        self.scheduler.advance(1)
        self.assertIs(session.phase, DrawPhase.RESOLVED)
        self.assertEqual(session.history, [session.winner])
        self.assertEqual(session.current_display_number, session.winner)
        self.assertEqual(session.available_count, 9)

    def test_default_timings_resolve_after_spin_and_reveal(self) -> None:
        session = self._session(timings=DrawTimings())
        session.start()
        self.scheduler.advance(4000 + 1199)
        self.assertIsNot(session.phase, DrawPhase.RESOLVED)
        self.scheduler.run_all()
        self.assertIs(session.phase, DrawPhase.RESOLVED)
        self.assertGreaterEqual(self.scheduler.now(), 5200)

    def test_ten_draws_are_a_permutation_and_exhaust_the_pool(self) -> None:
        session = self._session()
        session.start()
        self.scheduler.run_all()
        self.assertEqual(len(session.history), 1)
        self.assertEqual(session.winner, session.history[0])
        self.assertEqual(session.available_count, 9)

        for _ in range(9):
            self.assertTrue(session.start())
            self.scheduler.run_all()

        self.assertEqual(sorted(session.history), list(range(1, 11)))
        self.assertTrue(session.is_sold_out)
        self.assertFalse(session.can_start)
        self.assertEqual(session.snapshot().label, "exhausted")

        before = session.history
        self.assertFalse(session.start())
        self.assertIs(session.phase, DrawPhase.RESOLVED)
        self.assertEqual(session.history, before)
        self.assertEqual(self.scheduler.pending, 0)

    def test_winner_comes_from_numbers_available_before_resolution(self) -> None:
        session = self._session(1, 6)
        for _ in range(6):
            session.start()
            self.scheduler.advance(1000)
            self.assertIs(session.phase, DrawPhase.REVEALING)
            candidates = session.available_numbers
            self.scheduler.advance(500)
            self.assertIn(session.winner, candidates)
        self.assertEqual(len(set(session.history)), 6)

    def test_single_ticket_range(self) -> None:
        session = self._session(5, 5)
        session.start()
        self.scheduler.run_all()
        self.assertEqual(session.winner, 5)
        self.assertTrue(session.is_sold_out)

    def test_reversed_range_cannot_open_a_session(self) -> None:
        with self.assertRaises(InvalidRangeError):
            self._session(5, 3)

    def test_start_while_spinning_is_ignored(self) -> None:
        session = self._session()
        self.assertTrue(session.start())
        self.assertFalse(session.start())
        self.scheduler.advance(1000)
        self.assertFalse(session.start())  # revealing
        self.scheduler.run_all()
        self.assertEqual(len(session.history), 1)

    def test_close_mid_spin_stops_all_mutation(self) -> None:
        session = self._session()
        session.start()
        self.scheduler.advance(300)
        shown = session.current_display_number

        session.close()
        self.assertIs(session.phase, DrawPhase.CLOSED)
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(self.scheduler.run_all(), 0)
        self.assertEqual(session.current_display_number, shown)
        self.assertEqual(session.history, [])
        self.assertFalse(session.start())

    def test_close_while_revealing_draws_no_winner(self) -> None:
        session = self._session()
        session.start()
        self.scheduler.advance(1000)
        self.assertIs(session.phase, DrawPhase.REVEALING)
        session.close()
        self.scheduler.advance(10_000)
        self.assertIsNone(session.winner)
        self.assertEqual(session.history, [])

    def test_same_seed_gives_same_winners(self) -> None:
        runs = []
        for _ in range(2):
            session = self._session(1, 50, seed=2024)
            for _ in range(5):
                session.start()
                self.scheduler.run_all()
            runs.append(session.history)
        self.assertEqual(runs[0], runs[1])

    def test_winner_listeners_fire_once_per_draw(self) -> None:
        session = self._session(1, 3)
        winners: list[int] = []
        session.on_winner(winners.append)
        for _ in range(3):
            session.start()
            self.scheduler.run_all()
        self.assertEqual(winners, list(reversed(session.history)))

    def test_new_draw_clears_previous_winner(self) -> None:
        session = self._session()
        session.start()
        self.scheduler.run_all()
        self.assertIsNotNone(session.winner)
        session.start()
        self.assertIsNone(session.winner)
        self.assertEqual(session.snapshot().label, "spinning")

    def test_snapshot_labels(self) -> None:
        session = self._session()
        self.assertEqual(session.snapshot().label, "start")
        session.start()
        self.scheduler.advance(1000)
        self.assertEqual(session.snapshot().label, "revealing")
        self.scheduler.run_all()
        snap = session.snapshot()
        self.assertEqual(snap.label, "next_draw")
        self.assertEqual(snap.history_count, 1)
        session.close()
        self.assertEqual(session.snapshot().label, "closed")

    def test_sold_out_check_goes_through_number_pool(self) -> None:
        session = self._session(5, 5)
        with patch("rifa.draw.session.is_sold_out", wraps=is_sold_out) as pool_check:
            self.assertFalse(session.is_sold_out)
            session.start()
            self.scheduler.run_all()
            self.assertTrue(session.is_sold_out)
        self.assertTrue(pool_check.called)
        checked_range, _ = pool_check.call_args.args
        self.assertEqual(checked_range, TicketRange(5, 5))

    def test_failing_winner_listener_is_logged_and_others_still_run(self) -> None:
        session = self._session()
        winners: list[int] = []

        def broken(_: int) -> None:
            raise RuntimeError("display offline")

        session.on_winner(broken)
        session.on_winner(winners.append)
        session.start()
        with self.assertLogs("rifa.draw.session", level="ERROR") as logs:
            self.scheduler.run_all()

        self.assertIs(session.phase, DrawPhase.RESOLVED)
        self.assertEqual(winners, [session.winner])
        self.assertIn("Winner listener failed", logs.output[0])


if __name__ == "__main__":
    unittest.main()
