"""Trip booking and lifecycle."""

from .dto import TripBookIn, TripNotice
from .service import TripService

__all__ = ["TripBookIn", "TripNotice", "TripService"]
