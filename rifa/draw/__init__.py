"""Draw engine: winners without replacement from a ticket range."""

from rifa.draw.ledger import HistoryLedger
from rifa.draw.pool import TicketRange, all_numbers, available, is_sold_out
from rifa.draw.scheduler import (
    AnimationTick,
    RealTimeScheduler,
    Scheduler,
    SpinAnimation,
    TimerHandle,
    VirtualScheduler,
    tick_interval,
)
from rifa.draw.session import DrawPhase, DrawSession, DrawSnapshot, DrawTimings

__all__ = [
    "AnimationTick",
    "DrawPhase",
    "DrawSession",
    "DrawSnapshot",
    "DrawTimings",
    "HistoryLedger",
    "RealTimeScheduler",
    "Scheduler",
    "SpinAnimation",
    "TicketRange",
    "TimerHandle",
    "VirtualScheduler",
    "all_numbers",
    "available",
    "is_sold_out",
    "tick_interval",
]
