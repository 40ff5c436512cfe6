from typing import List, Optional

from sqlalchemy.orm import Session
from tracker import models, schemas


class MovementService:
    def get_all(self, db: Session, ascending: bool = False) -> List[models.Movement]:
        order = models.Movement.timestamp.asc() if ascending else models.Movement.timestamp.desc()
        return db.query(models.Movement).order_by(order).all()

    def get_for_unit(self, db: Session, saree_id: str) -> List[models.Movement]:
        return (
            db.query(models.Movement)
            .filter(models.Movement.saree_id == saree_id)
            .order_by(models.Movement.timestamp.asc())
            .all()
        )

    def get_latest_into(self, db: Session, saree_id: str, station: str) -> Optional[models.Movement]:
        """Most recent movement that brought the unit to the given station."""
        return (
            db.query(models.Movement)
            .filter(
                models.Movement.saree_id == saree_id,
                models.Movement.to_station == station
            )
            .order_by(models.Movement.timestamp.desc())
            .limit(1)
            .first()
        )

    def create(self, db: Session, movement: schemas.MovementCreate) -> models.Movement:
        data = movement.model_dump(exclude_none=True)
        db_movement = models.Movement(**data)
        db.add(db_movement)
        db.commit()
        db.refresh(db_movement)
        return db_movement

movement_service = MovementService()
