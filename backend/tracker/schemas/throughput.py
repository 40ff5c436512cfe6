from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class Throughput(BaseModel):
    id: int
    count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
