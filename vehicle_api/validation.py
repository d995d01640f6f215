from typing import NamedTuple

from vehicle_api.models.vehicle import VehicleType
from vehicle_api.schemas.vehicle import VehicleIn


class FieldError(NamedTuple):
    field: str
    message: str


_REQUIRED_TEXT_FIELDS = (
    ("make", "make", "Make is required"),
    ("model", "model", "Model is required"),
    ("registration_number", "registrationNumber", "Registration number is required"),
)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_vehicle(payload: VehicleIn) -> list[FieldError]:
    """Return every field-level problem of a create/update payload.

    An empty list means the payload is acceptable. ``year`` is only checked
    for presence, any integer is accepted.
    """
    errors: list[FieldError] = []

    for attr, field, message in _REQUIRED_TEXT_FIELDS:
        if _is_blank(getattr(payload, attr)):
            errors.append(FieldError(field, message))

    if payload.year is None:
        errors.append(FieldError("year", "Year is required"))

    if payload.type is not None and payload.type not in VehicleType.__members__:
        allowed = ", ".join(VehicleType.__members__)
        errors.append(FieldError("type", f"Type must be one of: {allowed}"))

    return errors
