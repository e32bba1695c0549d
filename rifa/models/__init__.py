"""ORM models."""

from rifa.models.raffle_event import RaffleEvent

__all__ = ["RaffleEvent"]
