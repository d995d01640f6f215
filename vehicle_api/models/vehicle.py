import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String

from vehicle_api.database import Base


class VehicleType(str, enum.Enum):
    SEDAN = "SEDAN"
    SUV = "SUV"
    HATCHBACK = "HATCHBACK"
    COUPE = "COUPE"
    CONVERTIBLE = "CONVERTIBLE"
    WAGON = "WAGON"
    VAN = "VAN"
    PICKUP = "PICKUP"
    TRUCK = "TRUCK"
    BUS = "BUS"
    MOTORCYCLE = "MOTORCYCLE"


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    make = Column(String, nullable=False)
    model = Column(String, nullable=False)
    # "year" is a reserved word in some dialects
    year = Column("model_year", Integer, nullable=False)
    registration_number = Column(String, nullable=False, unique=True)
    color = Column(String, nullable=True)
    type = Column(Enum(VehicleType, native_enum=False, length=32), nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Vehicle id={self.id} registration_number={self.registration_number!r}>"
