import uuid

from sqlalchemy import Column, String, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from tracker.models.base import Base


class Movement(Base):
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # references sarees.saree_id (the human code), not sarees.id
    saree_id = Column(String(50), nullable=False, index=True)
    from_station = Column(String(50), nullable=False)
    to_station = Column(String(50), nullable=False)
    timestamp = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
