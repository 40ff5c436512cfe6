from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from .enums import SegmentStateEnum, UnitStatusEnum


class UnitBase(BaseModel):
    saree_id: str
    article_number: str
    length: Optional[str] = None
    weaver_name: Optional[str] = None
    color: Optional[str] = None
    design: Optional[str] = None
    current_station: str
    status: UnitStatusEnum = UnitStatusEnum.in_progress
    progress: int = 0


class Unit(UnitBase):
    id: UUID
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UnitWithDuration(Unit):
    station_duration: str
    segments: List[SegmentStateEnum] = []
