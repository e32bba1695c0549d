"""Ticket number pool: the valid range and what is still available to draw."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rifa.errors import InvalidRangeError


@dataclass(frozen=True)
class TicketRange:
    """Closed interval of ticket numbers [initial_seq, final_seq]."""

    initial_seq: int
    final_seq: int

    def __post_init__(self) -> None:
        if int(self.initial_seq) > int(self.final_seq):
            raise InvalidRangeError(int(self.initial_seq), int(self.final_seq))

    @property
    def size(self) -> int:
        return int(self.final_seq) - int(self.initial_seq) + 1

    def __contains__(self, number: object) -> bool:
        if not isinstance(number, int):
            return False
        return int(self.initial_seq) <= number <= int(self.final_seq)


def all_numbers(ticket_range: TicketRange) -> list[int]:
    """Every ticket number of the range, ascending."""

    return list(range(int(ticket_range.initial_seq), int(ticket_range.final_seq) + 1))


def available(ticket_range: TicketRange, history: Iterable[int]) -> list[int]:
    """Numbers of the range that were not drawn yet.

    Returned as a list so callers can pick by uniform random index.
    """

    drawn = {int(n) for n in history}
    return [n for n in all_numbers(ticket_range) if n not in drawn]


def is_sold_out(ticket_range: TicketRange, history: Iterable[int]) -> bool:
    return not available(ticket_range, history)
