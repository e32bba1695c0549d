from __future__ import annotations

import unittest

from rifa.draw import HistoryLedger, TicketRange, all_numbers, available, is_sold_out
from rifa.errors import InvalidRangeError, ValidationError


class TicketRangeTests(unittest.TestCase):
    def test_reversed_range_is_rejected(self) -> None:
        with self.assertRaises(InvalidRangeError) as ctx:
            TicketRange(5, 3)
        self.assertEqual(ctx.exception.code, "invalid_range")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIsInstance(ctx.exception, ValidationError)

    def test_single_number_range(self) -> None:
        r = TicketRange(5, 5)
        self.assertEqual(r.size, 1)
        self.assertEqual(all_numbers(r), [5])

    def test_membership(self) -> None:
        r = TicketRange(10, 20)
        self.assertIn(10, r)
        self.assertIn(20, r)
        self.assertNotIn(21, r)
        self.assertNotIn("10", r)


class NumberPoolTests(unittest.TestCase):
    def test_all_numbers_is_inclusive_and_ordered(self) -> None:
        self.assertEqual(all_numbers(TicketRange(3, 7)), [3, 4, 5, 6, 7])

    def test_available_excludes_history(self) -> None:
        r = TicketRange(1, 5)
        self.assertEqual(available(r, [4, 1]), [2, 3, 5])
        self.assertFalse(is_sold_out(r, [4, 1]))

    def test_sold_out_when_every_number_drawn(self) -> None:
        r = TicketRange(1, 3)
        self.assertTrue(is_sold_out(r, [3, 1, 2]))
        self.assertEqual(available(r, [3, 1, 2]), [])


class HistoryLedgerTests(unittest.TestCase):
    def test_most_recent_first(self) -> None:
        ledger = HistoryLedger()
        ledger.append(7)
        ledger.append(2)
        ledger.append(9)
        self.assertEqual(ledger.as_list(), [9, 2, 7])
        self.assertEqual(ledger.count(), 3)
        self.assertEqual(ledger.latest, 9)
        self.assertIn(2, ledger)

    def test_duplicate_append_is_refused(self) -> None:
        ledger = HistoryLedger()
        ledger.append(4)
        with self.assertRaises(ValueError):
            ledger.append(4)
        self.assertEqual(ledger.as_list(), [4])

    def test_as_list_is_a_copy(self) -> None:
        ledger = HistoryLedger()
        ledger.append(1)
        ledger.as_list().append(99)
        self.assertEqual(len(ledger), 1)


if __name__ == "__main__":
    unittest.main()
