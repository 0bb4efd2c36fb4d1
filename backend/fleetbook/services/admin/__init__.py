"""Administrative reads and removals."""

from .service import AdminService, AnalyticsOut

__all__ = ["AdminService", "AnalyticsOut"]
