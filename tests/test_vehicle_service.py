import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from vehicle_api.database import Base
from vehicle_api.models.vehicle import VehicleType
from vehicle_api.schemas.vehicle import VehicleIn
from vehicle_api.services.vehicle_service import VehicleService
from vehicle_api.utils.exceptions import ConflictError, NotFoundError


@pytest_asyncio.fixture
async def service():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield VehicleService(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


def _payload(**overrides) -> VehicleIn:
    fields = {
        "make": "Toyota",
        "model": "Camry",
        "year": 2020,
        "registration_number": "ABC123",
        "type": "SEDAN",
    }
    fields.update(overrides)
    return VehicleIn(**fields)


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(service):
    vehicle = await service.create(_payload())

    assert vehicle.id is not None
    assert vehicle.type is VehicleType.SEDAN
    assert vehicle.created_at == vehicle.updated_at


@pytest.mark.asyncio
async def test_create_duplicate_registration_number(service):
    await service.create(_payload())

    with pytest.raises(ConflictError, match="ABC123"):
        await service.create(_payload(make="Honda", model="Civic"))

    assert len(await service.list_all()) == 1


@pytest.mark.asyncio
async def test_list_all(service):
    await service.create(_payload())
    await service.create(_payload(registration_number="XYZ789", type=None))

    vehicles = await service.list_all()

    assert sorted(v.registration_number for v in vehicles) == ["ABC123", "XYZ789"]


@pytest.mark.asyncio
async def test_get_by_id_and_registration_number(service):
    created = await service.create(_payload())

    assert (await service.get_by_id(created.id)).registration_number == "ABC123"
    assert (await service.get_by_registration_number("ABC123")).id == created.id
    assert await service.get_by_id(created.id + 1) is None
    assert await service.get_by_registration_number("XYZ789") is None


@pytest.mark.asyncio
async def test_update_keeping_own_registration_number(service):
    created = await service.create(_payload())
    created_at = created.created_at
    updated_at = created.updated_at

    updated = await service.update(created.id, _payload(color="Red", year=2021))

    assert updated.id == created.id
    assert updated.color == "Red"
    assert updated.year == 2021
    assert updated.created_at == created_at
    assert updated.updated_at > updated_at


@pytest.mark.asyncio
async def test_update_to_free_registration_number(service):
    created = await service.create(_payload())

    updated = await service.update(created.id, _payload(registration_number="NEW001"))

    assert updated.registration_number == "NEW001"
    assert not await service.exists_by_registration_number("ABC123")
    assert await service.exists_by_registration_number("NEW001")


@pytest.mark.asyncio
async def test_update_onto_other_registration_number(service):
    await service.create(_payload())
    other = await service.create(_payload(registration_number="XYZ789"))

    with pytest.raises(ConflictError):
        await service.update(other.id, _payload(registration_number="ABC123"))

    assert (await service.get_by_id(other.id)).registration_number == "XYZ789"


@pytest.mark.asyncio
async def test_update_missing_vehicle(service):
    with pytest.raises(NotFoundError, match="42"):
        await service.update(42, _payload())


@pytest.mark.asyncio
async def test_delete(service):
    created = await service.create(_payload())

    await service.delete(created.id)

    assert await service.get_by_id(created.id) is None
    assert not await service.exists_by_registration_number("ABC123")


@pytest.mark.asyncio
async def test_delete_missing_vehicle(service):
    with pytest.raises(NotFoundError):
        await service.delete(42)
