"""Factory Boy definition for :class:`fleetbook.models.vehicle.Vehicle`."""

from __future__ import annotations

import factory

from fleetbook.models.vehicle import Vehicle, VehicleStatus
from tests.factories import BaseFactory, SQLAlchemySession
from tests.factories.user import OwnerFactory


class VehicleFactory(BaseFactory):
    """Build persisted vehicles.

    Pass ``drivers=[...]`` to register drivers at creation time.
    """

    class Meta:
        model = Vehicle

    id = None
    owner = factory.SubFactory(OwnerFactory)
    make = "Toyota"
    model = "Corolla"
    year = 2021
    license_plate = factory.Sequence(lambda n: f"PLT-{n:04d}")
    status = VehicleStatus.AVAILABLE

    @factory.post_generation
    def drivers(obj, create, extracted, **kwargs):
        if create and extracted:
            obj.drivers.extend(extracted)
            # persistence ran before this hook; a read-only unit of work would roll it back
            SQLAlchemySession.get().commit()
