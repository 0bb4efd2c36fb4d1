"""Driver-side vehicle registration."""

from .service import DriverRegistrationOut, DriverService

__all__ = ["DriverRegistrationOut", "DriverService"]
