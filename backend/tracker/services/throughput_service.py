from typing import Optional

from sqlalchemy.orm import Session
from tracker import models


class ThroughputService:
    def get_latest(self, db: Session) -> Optional[models.Throughput]:
        return db.query(models.Throughput).order_by(models.Throughput.id.desc()).limit(1).first()

throughput_service = ThroughputService()
