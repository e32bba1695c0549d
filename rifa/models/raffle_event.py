"""Raffle event ORM model."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from rifa.models.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RaffleEvent(Base):
    """A raffle: ticket range, price, prize and printable metadata."""

    __tablename__ = "raffle_events"
    __table_args__ = (
        CheckConstraint("initial_seq <= final_seq", name="ck_raffle_events_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    draw_date: Mapped[date] = mapped_column(Date, nullable=False)

    value: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("10.00"))
    prize: Mapped[str] = mapped_column(String(300), nullable=False, default="")

    initial_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    final_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=999)

    header_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)

    @property
    def ticket_count(self) -> int:
        return int(self.final_seq) - int(self.initial_seq) + 1
