from typing import List

from sqlalchemy.orm import Session
from tracker import models


class StationService:
    def get_all(self, db: Session) -> List[models.Station]:
        return db.query(models.Station).order_by(models.Station.name).all()

station_service = StationService()
