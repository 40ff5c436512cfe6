from typing import List, Optional

from sqlalchemy.orm import Session
from tracker import models


class UnitService:
    def get_by_code(self, db: Session, saree_id: str) -> Optional[models.Unit]:
        return db.query(models.Unit).filter(models.Unit.saree_id == saree_id).first()

    def get_all(self, db: Session) -> List[models.Unit]:
        return db.query(models.Unit).order_by(models.Unit.created_at.desc()).all()

    def count(self, db: Session) -> int:
        return db.query(models.Unit).count()

unit_service = UnitService()
