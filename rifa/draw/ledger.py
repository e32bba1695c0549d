"""Append-only record of the winners drawn in one session."""

from __future__ import annotations

from collections.abc import Iterator


class HistoryLedger:
    """Winners ordered most-recent-first.

    There is no removal: the ledger only empties by being discarded together
    with its session.
    """

    def __init__(self) -> None:
        self._entries: list[int] = []

    def append(self, winner: int) -> None:
        winner = int(winner)
        if winner in self._entries:
            raise ValueError(f"Number {winner} was already drawn in this session")
        self._entries.insert(0, winner)

    def count(self) -> int:
        return len(self._entries)

    @property
    def latest(self) -> int | None:
        return self._entries[0] if self._entries else None

    def as_list(self) -> list[int]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._entries))

    def __contains__(self, number: object) -> bool:
        return number in self._entries
