# fleetbook/services/vehicles/availability.py
from __future__ import annotations

import json
import logging
from typing import Any

from fleetbook.schemas.vehicle import PublicVehicleSchema
from fleetbook.services._shared.base import BaseService, ServiceContext
from fleetbook.services._shared.errors import DependencyError
from fleetbook.services._shared.outcome import Outcome
from fleetbook.services._shared.ports import CacheStore

log = logging.getLogger(__name__)

DEFAULT_KEY = "public:vehicles"
DEFAULT_TTL_SECONDS = 300


class AvailabilityCache(BaseService):
    """
    Read-through cache in front of the public vehicle listing.

    The listing is stored as one JSON document under a single key. Reads
    serve the document while it lives; a miss (absent, expired, unreadable
    or cache down) rebuilds it from the database. Writers that change what
    is public call :meth:`invalidate` after their transaction commits.

    A listing rebuilt by a reader that started before a commit may be stored
    after the matching invalidation; such a stale entry lives at most one
    TTL.
    """

    def __init__(
        self,
        *,
        cache: CacheStore,
        key: str = DEFAULT_KEY,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.cache = cache
        self.key = key
        self.ttl_seconds = ttl_seconds
        self._schema = PublicVehicleSchema(many=True)

    def get_public_vehicles(self) -> list[dict[str, Any]]:
        """
        Return the public listing, serialized for the wire.

        :returns: Items shaped ``{_id, make, model, year, owner: {_id, name},
            drivers: [ids]}``.
        :rtype: list[dict]
        """
        cached = self._read()
        if cached is not None:
            log.debug("vehicles.public.cache_hit", extra={"cache_key": self.key})
            return cached

        with self.ro_uow() as uow:
            payload = self._schema.dump(uow.vehicles.list_public())

        try:
            self.cache.set(self.key, json.dumps(payload), ttl_seconds=self.ttl_seconds)
        except DependencyError as exc:
            self.log_outcome(
                "vehicles.public.cache_store", Outcome.failed(str(exc)), cache_key=self.key
            )
        return payload

    def invalidate(self) -> Outcome:
        """
        Drop the cached listing. Never raises.

        :returns: ``applied`` when the key is gone, ``failed`` with the cause
            otherwise.
        """
        try:
            self.cache.delete(self.key)
        except DependencyError as exc:
            return self.log_outcome(
                "vehicles.public.invalidate", Outcome.failed(str(exc)), cache_key=self.key
            )
        log.info("vehicles.public.invalidated", extra={"cache_key": self.key})
        return Outcome.applied()

    def _read(self) -> list[dict[str, Any]] | None:
        try:
            raw = self.cache.get(self.key)
        except DependencyError as exc:
            self.log_outcome("vehicles.public.cache_read", Outcome.failed(str(exc)))
            return None
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("vehicles.public.cache_corrupt", extra={"cache_key": self.key})
            return None
        if not isinstance(data, list):
            log.warning("vehicles.public.cache_corrupt", extra={"cache_key": self.key})
            return None
        return data
