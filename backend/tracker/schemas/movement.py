from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class MovementBase(BaseModel):
    saree_id: str
    from_station: str
    to_station: str


class MovementCreate(MovementBase):
    timestamp: Optional[datetime] = None


class Movement(MovementBase):
    id: UUID
    timestamp: datetime
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
