from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StrictInt
from pydantic.alias_generators import to_camel

from vehicle_api.models.vehicle import VehicleType

# the store keeps model_year in a 32-bit INTEGER column
Year = Annotated[StrictInt, Field(ge=-2**31, le=2**31 - 1)]


class VehicleIn(BaseModel):
    """Create/update payload. Required-field checks live in ``vehicle_api.validation``."""

    make: str | None = None
    model: str | None = None
    year: Year | None = None
    registration_number: str | None = None
    color: str | None = None
    type: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class VehicleResponse(BaseModel):
    id: int
    make: str
    model: str
    year: int
    registration_number: str
    color: str | None = None
    type: VehicleType | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "alias_generator": to_camel, "populate_by_name": True}
