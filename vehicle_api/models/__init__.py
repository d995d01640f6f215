from vehicle_api.models.vehicle import Vehicle, VehicleType

__all__ = ["Vehicle", "VehicleType"]
