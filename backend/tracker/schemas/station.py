from uuid import UUID

from pydantic import BaseModel


class Station(BaseModel):
    id: UUID
    name: str
    count: int = 0

    class Config:
        from_attributes = True
