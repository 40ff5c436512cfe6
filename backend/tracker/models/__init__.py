from .base import Base
from .unit import Unit
from .movement import Movement
from .station import Station
from .throughput import Throughput

__all__ = [
    "Base",
    "Unit",
    "Movement",
    "Station",
    "Throughput"
]
