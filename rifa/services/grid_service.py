"""Ticket grid pages, on screen and in the printable document."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from math import ceil

from rifa.errors import ValidationError
from rifa.models.raffle_event import RaffleEvent

GRID_COLUMNS = 5
GRID_ROWS = 5


@dataclass(frozen=True)
class TicketSlot:
    number: int
    value: float
    prize: str


@dataclass(frozen=True)
class TicketGridPage:
    event_id: str
    page: int
    total_pages: int
    tickets_per_page: int
    total_tickets: int
    slots: list[TicketSlot | None]

    @property
    def rows(self) -> list[list[TicketSlot | None]]:
        return [self.slots[i : i + GRID_COLUMNS] for i in range(0, len(self.slots), GRID_COLUMNS)]


def format_currency(value: Decimal | float) -> str:
    """pt-BR money without symbol: 1234.5 -> '1.234,50'."""

    text = f"{Decimal(str(value)).quantize(Decimal('0.01')):,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def clean_text(text: str | None) -> str:
    """Strip accents and anything outside printable ASCII."""

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    no_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[^\x20-\x7E]", "", no_marks).strip()


def format_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else "-"


class TicketGridService:
    """Paginate an event's tickets into fixed-size grid pages (1-based)."""

    def __init__(self, tickets_per_page: int = GRID_COLUMNS * GRID_ROWS) -> None:
        if tickets_per_page < 1:
            raise ValueError("tickets_per_page must be positive")
        self._per_page = tickets_per_page

    def total_pages(self, event: RaffleEvent) -> int:
        return max(1, ceil(event.ticket_count / self._per_page))

    def page(self, event: RaffleEvent, page: int = 1) -> TicketGridPage:
        total_pages = self.total_pages(event)
        if page < 1 or page > total_pages:
            raise ValidationError(
                message="Invalid page",
                details={"page": [f"Must be within 1..{total_pages}"]},
            )

        value = float(event.value)
        start = int(event.initial_seq) + (page - 1) * self._per_page
        slots: list[TicketSlot | None] = []
        for number in range(start, start + self._per_page):
            if number > int(event.final_seq):
                slots.append(None)
            else:
                slots.append(TicketSlot(number=number, value=value, prize=event.prize))

        return TicketGridPage(
            event_id=event.id,
            page=page,
            total_pages=total_pages,
            tickets_per_page=self._per_page,
            total_tickets=event.ticket_count,
            slots=slots,
        )

    def pages(self, event: RaffleEvent) -> list[TicketGridPage]:
        return [self.page(event, p) for p in range(1, self.total_pages(event) + 1)]


@dataclass(frozen=True)
class PrintHeader:
    title: str
    description: str
    location: str
    draw_date: str
    value: str
    prize: str
    image: str | None


@dataclass(frozen=True)
class PrintDocument:
    filename: str
    header: PrintHeader
    pages: list[TicketGridPage]

    def footer(self, page: TicketGridPage) -> str:
        return f"Pagina {page.page} de {page.total_pages} | Raffle Master"


class PrintLayoutService:
    """Build the multi-page printable sheet of an event (5x5 tickets per page)."""

    def __init__(self, grid: TicketGridService | None = None) -> None:
        self._grid = grid or TicketGridService(GRID_COLUMNS * GRID_ROWS)

    @staticmethod
    def filename(event: RaffleEvent, extension: str = "html") -> str:
        slug = re.sub(r"\s+", "-", clean_text(event.title).upper())
        return f"RIFA-{slug}.{extension}"

    def build(self, event: RaffleEvent) -> PrintDocument:
        header = PrintHeader(
            title=clean_text(event.title).upper() or "SORTEIO",
            description=clean_text(event.description) or "Sem informacoes adicionais.",
            location=clean_text(event.location).upper() or "-",
            draw_date=format_date(event.draw_date),
            value=f"R$ {format_currency(event.value)}",
            prize=clean_text(event.prize).upper() or "-",
            image=event.header_image or None,
        )
        return PrintDocument(
            filename=self.filename(event),
            header=header,
            pages=self._grid.pages(event),
        )
