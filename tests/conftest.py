import asyncio
import os
import tempfile

import pytest

# must be set before vehicle_api.config is imported
_tmp_dir = tempfile.mkdtemp(prefix="vehicle-api-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_tmp_dir, 'test.sqlite3')}"


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    # Disable API key auth for tests
    from vehicle_api.config import settings
    settings.api_key = ""

    from vehicle_api.database import create_tables

    asyncio.run(create_tables())


@pytest.fixture(autouse=True)
def clean_vehicles_table(setup_test_db):
    from sqlalchemy import delete

    from vehicle_api.database import engine
    from vehicle_api.models.vehicle import Vehicle

    async def _clear():
        async with engine.begin() as conn:
            await conn.execute(delete(Vehicle))
        await engine.dispose()

    asyncio.run(_clear())
    yield


@pytest.fixture
def camry_payload() -> dict:
    return {
        "make": "Toyota",
        "model": "Camry",
        "year": 2020,
        "registrationNumber": "ABC123",
        "type": "SEDAN",
    }
