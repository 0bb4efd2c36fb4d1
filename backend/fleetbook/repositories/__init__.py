"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from fleetbook.repositories.base import BaseRepository, apply_sorting, parse_sort_tokens
from fleetbook.repositories.trip import TripRepository
from fleetbook.repositories.user import UserRepository
from fleetbook.repositories.vehicle import VehicleRepository

__all__ = [
    "BaseRepository",
    "apply_sorting",
    "parse_sort_tokens",
    "TripRepository",
    "UserRepository",
    "VehicleRepository",
]
