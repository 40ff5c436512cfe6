import uuid

from sqlalchemy import Column, Integer, String, Uuid
from tracker.models.base import Base


class Station(Base):
    __tablename__ = "stations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(50), unique=True, nullable=False)
    count = Column(Integer, nullable=False, default=0)
