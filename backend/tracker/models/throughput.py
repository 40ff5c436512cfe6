from sqlalchemy import Column, Integer, TIMESTAMP
from sqlalchemy.sql import func
from tracker.models.base import Base


class Throughput(Base):
    __tablename__ = "through_put"

    id = Column(Integer, primary_key=True, autoincrement=True)
    count = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
