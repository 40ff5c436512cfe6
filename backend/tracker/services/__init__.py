from .unit_service import unit_service
from .movement_service import movement_service
from .station_service import station_service
from .throughput_service import throughput_service

__all__ = [
    "unit_service",
    "movement_service",
    "station_service",
    "throughput_service"
]
