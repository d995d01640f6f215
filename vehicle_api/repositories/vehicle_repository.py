from collections.abc import Sequence

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from vehicle_api.models.vehicle import Vehicle


class VehicleRepository:
    """Query interface over the ``vehicles`` table.

    The repository never commits; transaction boundaries belong to the caller
    that owns ``session``.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_all(self) -> Sequence[Vehicle]:
        result = await self._session.execute(select(Vehicle))
        return result.scalars().all()

    async def find_by_id(self, vehicle_id: int) -> Vehicle | None:
        return await self._session.get(Vehicle, vehicle_id)

    async def find_by_registration_number(self, registration_number: str) -> Vehicle | None:
        result = await self._session.execute(
            select(Vehicle).where(Vehicle.registration_number == registration_number)
        )
        return result.scalars().first()

    async def exists_by_id(self, vehicle_id: int) -> bool:
        return bool(await self._session.scalar(select(exists().where(Vehicle.id == vehicle_id))))

    async def exists_by_registration_number(self, registration_number: str) -> bool:
        return bool(
            await self._session.scalar(
                select(exists().where(Vehicle.registration_number == registration_number))
            )
        )

    async def save(self, vehicle: Vehicle) -> Vehicle:
        # flush so the store assigns the id and checks the unique constraint now
        self._session.add(vehicle)
        await self._session.flush()
        return vehicle

    async def delete_by_id(self, vehicle_id: int) -> None:
        await self._session.execute(delete(Vehicle).where(Vehicle.id == vehicle_id))
