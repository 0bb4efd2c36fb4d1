"""Fleet booking REST backend.

Provide convenient access to :func:`fleetbook.factory.create_app` so callers
can ``from fleetbook import create_app``.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
