"""
Business rules for vehicle records.

Every public method runs in its own session. Reads open a session and never
commit; writes run inside ``async_sessionmaker.begin()`` so the existence and
uniqueness checks and the write share one transaction. The registration
number check is a read before the write: two concurrent creates can both pass
it, and the UNIQUE constraint on ``vehicles.registration_number`` rejects the
second one with an ``IntegrityError``.
"""

import logging
from collections.abc import Sequence
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vehicle_api.models.vehicle import Vehicle, VehicleType
from vehicle_api.repositories.vehicle_repository import VehicleRepository
from vehicle_api.schemas.vehicle import VehicleIn
from vehicle_api.utils.exceptions import ConflictError, NotFoundError
from vehicle_api.utils.timestamps import utcnow

logger = logging.getLogger(__name__)


def _vehicle_type(value: str | None) -> VehicleType | None:
    return VehicleType(value) if value is not None else None


def _duplicate_message(registration_number: str) -> str:
    return f"Vehicle with registration number {registration_number} already exists"


def _not_found_message(vehicle_id: int) -> str:
    return f"Vehicle not found with id: {vehicle_id}"


class VehicleService:
    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def list_all(self) -> Sequence[Vehicle]:
        logger.debug("Fetching all vehicles")
        async with self._sessionmaker() as session:
            return await VehicleRepository(session).find_all()

    async def get_by_id(self, vehicle_id: int) -> Vehicle | None:
        logger.debug("Fetching vehicle with id: %s", vehicle_id)
        async with self._sessionmaker() as session:
            return await VehicleRepository(session).find_by_id(vehicle_id)

    async def get_by_registration_number(self, registration_number: str) -> Vehicle | None:
        logger.debug("Fetching vehicle with registration number: %s", registration_number)
        async with self._sessionmaker() as session:
            return await VehicleRepository(session).find_by_registration_number(registration_number)

    async def exists_by_registration_number(self, registration_number: str) -> bool:
        async with self._sessionmaker() as session:
            return await VehicleRepository(session).exists_by_registration_number(registration_number)

    async def create(self, data: VehicleIn) -> Vehicle:
        logger.debug("Saving new vehicle with registration number: %s", data.registration_number)
        async with self._sessionmaker.begin() as session:
            repo = VehicleRepository(session)
            if await repo.exists_by_registration_number(data.registration_number):
                raise ConflictError(_duplicate_message(data.registration_number))

            now = utcnow()
            vehicle = Vehicle(
                make=data.make,
                model=data.model,
                year=data.year,
                registration_number=data.registration_number,
                color=data.color,
                type=_vehicle_type(data.type),
                created_at=now,
                updated_at=now,
            )
            await repo.save(vehicle)
        logger.info("Created vehicle %s", vehicle.id)
        return vehicle

    async def update(self, vehicle_id: int, data: VehicleIn) -> Vehicle:
        logger.debug("Updating vehicle with id: %s", vehicle_id)
        async with self._sessionmaker.begin() as session:
            repo = VehicleRepository(session)
            existing = await repo.find_by_id(vehicle_id)
            if existing is None:
                raise NotFoundError(_not_found_message(vehicle_id))

            # keeping its own registration number is never a conflict
            if (
                existing.registration_number != data.registration_number
                and await repo.exists_by_registration_number(data.registration_number)
            ):
                raise ConflictError(_duplicate_message(data.registration_number))

            existing.make = data.make
            existing.model = data.model
            existing.year = data.year
            existing.registration_number = data.registration_number
            existing.color = data.color
            existing.type = _vehicle_type(data.type)
            # updated_at must move forward even within one clock tick
            existing.updated_at = max(utcnow(), existing.updated_at + timedelta(microseconds=1))
            await repo.save(existing)
        logger.info("Updated vehicle %s", vehicle_id)
        return existing

    async def delete(self, vehicle_id: int) -> None:
        logger.debug("Deleting vehicle with id: %s", vehicle_id)
        async with self._sessionmaker.begin() as session:
            repo = VehicleRepository(session)
            if not await repo.exists_by_id(vehicle_id):
                raise NotFoundError(_not_found_message(vehicle_id))
            await repo.delete_by_id(vehicle_id)
        logger.info("Deleted vehicle %s", vehicle_id)
