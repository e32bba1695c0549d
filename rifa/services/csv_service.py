"""CSV export/import of the event catalog (semicolon separated, Excel friendly)."""

from __future__ import annotations

import csv
import io
import re
from collections.abc import Callable, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError

from rifa.errors import ValidationError
from rifa.models.raffle_event import RaffleEvent
from rifa.schemas.event import EventWriteSchema

CSV_HEADERS = ["Título", "Local", "Data Sorteio", "Valor", "Prêmio", "Cartelas"]
BOM = "\ufeff"

_TICKETS_RE = re.compile(r"^\s*(\d+)\s*a\s*(\d+)\s*$")

_write_schema = EventWriteSchema()

RangeCheck = Callable[[int, int], object]


def export_filename(today: date | None = None) -> str:
    return f"rifas_export_{(today or date.today()).isoformat()}.csv"


def export_events(events: Sequence[RaffleEvent]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=";", lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for e in events:
        writer.writerow(
            [
                e.title,
                e.location,
                e.draw_date.strftime("%d/%m/%Y") if e.draw_date else "",
                f"{Decimal(str(e.value)):.2f}",
                e.prize,
                f"{e.initial_seq} a {e.final_seq}",
            ]
        )
    return BOM + buf.getvalue().rstrip("\n")


def _flatten(messages: Any, prefix: str = "") -> list[str]:
    if isinstance(messages, dict):
        out: list[str] = []
        for name, inner in messages.items():
            out.extend(_flatten(inner, f"{prefix}{name}: "))
        return out
    if isinstance(messages, (list, tuple)):
        return [f"{prefix}{m}" for m in messages]
    return [f"{prefix}{messages}"]


def _parse_row(row: list[str], line_no: int, check_range: RangeCheck | None = None) -> dict[str, Any]:
    if len(row) != len(CSV_HEADERS):
        raise ValidationError(
            message="Invalid CSV row",
            details={"line": line_no, "errors": [f"Expected {len(CSV_HEADERS)} columns, got {len(row)}"]},
        )

    title, location, draw_date_raw, value_raw, prize, tickets_raw = (c.strip() for c in row)
    errors: list[str] = []

    draw_date: date | None = None
    try:
        draw_date = datetime.strptime(draw_date_raw, "%d/%m/%Y").date()
    except ValueError:
        errors.append("Data Sorteio must be dd/mm/yyyy")

    value: Decimal | None = None
    try:
        value = Decimal(value_raw.replace(",", "."))
    except InvalidOperation:
        errors.append("Valor must be a number")

    m = _TICKETS_RE.match(tickets_raw)
    if not m:
        errors.append("Cartelas must look like '1 a 999'")

    if errors:
        raise ValidationError(message="Invalid CSV row", details={"line": line_no, "errors": errors})

    payload = {
        "title": title,
        "location": location,
        "draw_date": draw_date.isoformat(),  # type: ignore[union-attr]
        "value": str(value),
        "prize": prize,
        "initial_seq": int(m.group(1)),  # type: ignore[union-attr]
        "final_seq": int(m.group(2)),  # type: ignore[union-attr]
    }
    try:
        data = _write_schema.load(payload)
    except MarshmallowValidationError as exc:
        raise ValidationError(
            message="Invalid CSV row",
            details={"line": line_no, "errors": _flatten(exc.messages)},
        ) from exc

    if check_range is not None:
        try:
            check_range(data["initial_seq"], data["final_seq"])
        except ValidationError as exc:
            raise ValidationError(
                message="Invalid CSV row",
                details={"line": line_no, "errors": [exc.message, *_flatten(exc.details or [])]},
            ) from exc

    return data


def parse_events(text: str, check_range: RangeCheck | None = None) -> list[dict[str, Any]]:
    """Parse an exported CSV back into event payloads.

    Rows go through the same schema as the JSON API; ``check_range`` (the
    catalog's range and ticket-cap rule) runs on each row too. Every row is
    validated before anything is returned.
    """

    text = text.lstrip(BOM)
    rows = list(csv.reader(io.StringIO(text), delimiter=";"))
    if not rows:
        raise ValidationError(message="Empty CSV", details={"file": ["No header row"]})

    header = [c.strip() for c in rows[0]]
    if header != CSV_HEADERS:
        raise ValidationError(
            message="Unexpected CSV header",
            details={"header": [";".join(CSV_HEADERS)]},
        )

    out: list[dict[str, Any]] = []
    for idx, row in enumerate(rows[1:], start=2):
        if not any(c.strip() for c in row):
            continue
        out.append(_parse_row(row, idx, check_range))
    return out
