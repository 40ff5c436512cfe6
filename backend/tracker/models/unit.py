import uuid

from sqlalchemy import Column, Integer, String, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from tracker.models.base import Base


class Unit(Base):
    __tablename__ = "sarees"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    saree_id = Column(String(50), unique=True, nullable=False, index=True)
    article_number = Column(String(100), nullable=False)
    length = Column(String(50))
    weaver_name = Column(String(255))
    color = Column(String(100))
    design = Column(String(100))
    current_station = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="In Progress")
    progress = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())
