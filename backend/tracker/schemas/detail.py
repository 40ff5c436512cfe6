from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from .enums import SegmentStateEnum, StageStatusEnum
from .movement import Movement
from .unit import Unit


class StageProgress(BaseModel):
    name: str
    status: StageStatusEnum
    timestamp: Optional[datetime] = None


class UnitDetail(BaseModel):
    unit: Unit
    station_duration: str
    stages: List[StageProgress]
    segments: List[SegmentStateEnum]
    movements: List[Movement]
