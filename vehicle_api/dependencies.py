from fastapi import Header

from vehicle_api.config import settings
from vehicle_api.database import async_session
from vehicle_api.services.vehicle_service import VehicleService
from vehicle_api.utils.exceptions import AccessDeniedError


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise AccessDeniedError("Invalid or missing API key")


def get_vehicle_service() -> VehicleService:
    return VehicleService(async_session)
