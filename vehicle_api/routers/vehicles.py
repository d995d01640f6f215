import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from vehicle_api.dependencies import get_vehicle_service
from vehicle_api.schemas.vehicle import VehicleIn, VehicleResponse
from vehicle_api.services.vehicle_service import VehicleService
from vehicle_api.utils.exceptions import NotFoundError, PayloadValidationError
from vehicle_api.validation import validate_vehicle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

# ids outside the store's 64-bit INTEGER range are rejected as invalid input
VehicleId = Annotated[int, Path(ge=-2**63, le=2**63 - 1)]


def _to_dict(vehicle) -> dict:
    return VehicleResponse.model_validate(vehicle).model_dump(mode="json", by_alias=True)


def _require_valid(payload: VehicleIn) -> None:
    errors = validate_vehicle(payload)
    if errors:
        logger.info("Rejected vehicle payload: %s", [error.field for error in errors])
        raise PayloadValidationError([error.message for error in errors])


@router.get("")
async def get_all_vehicles(service: VehicleService = Depends(get_vehicle_service)):
    logger.info("REST request to get all vehicles")
    vehicles = await service.list_all()
    return [_to_dict(v) for v in vehicles]


@router.get("/registration/{registration_number}")
async def get_vehicle_by_registration_number(
    registration_number: str,
    service: VehicleService = Depends(get_vehicle_service),
):
    logger.info("REST request to get vehicle by registration number: %s", registration_number)
    vehicle = await service.get_by_registration_number(registration_number)
    if vehicle is None:
        raise NotFoundError(f"Vehicle not found with registration number: {registration_number}")
    return _to_dict(vehicle)


@router.get("/exists/{registration_number}")
async def check_registration_number_exists(
    registration_number: str,
    service: VehicleService = Depends(get_vehicle_service),
) -> bool:
    logger.info("REST request to check if registration number exists: %s", registration_number)
    return await service.exists_by_registration_number(registration_number)


@router.get("/{vehicle_id}")
async def get_vehicle(vehicle_id: VehicleId, service: VehicleService = Depends(get_vehicle_service)):
    logger.info("REST request to get vehicle by id: %s", vehicle_id)
    vehicle = await service.get_by_id(vehicle_id)
    if vehicle is None:
        raise NotFoundError(f"Vehicle not found with id: {vehicle_id}")
    return _to_dict(vehicle)


@router.post("", status_code=201)
async def create_vehicle(payload: VehicleIn, service: VehicleService = Depends(get_vehicle_service)):
    logger.info("REST request to save vehicle: %s", payload.registration_number)
    _require_valid(payload)
    vehicle = await service.create(payload)
    return _to_dict(vehicle)


@router.put("/{vehicle_id}")
async def update_vehicle(
    vehicle_id: VehicleId,
    payload: VehicleIn,
    service: VehicleService = Depends(get_vehicle_service),
):
    logger.info("REST request to update vehicle %s", vehicle_id)
    _require_valid(payload)
    vehicle = await service.update(vehicle_id, payload)
    return _to_dict(vehicle)


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: VehicleId, service: VehicleService = Depends(get_vehicle_service)):
    logger.info("REST request to delete vehicle: %s", vehicle_id)
    await service.delete(vehicle_id)
    return Response(status_code=204)
