import logging
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException
from tracker import schemas
from tracker.api import deps
from tracker.core.exceptions import QueryError
from tracker.database.client import StoreClient
from tracker.services import movement_service
from tracker.views.live import TransactionsView

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/", response_model=List[schemas.Movement])
def read_movements(
    search: str = "",
    station: str = "all",
    order: Literal["asc", "desc"] = "desc",
    view: TransactionsView = Depends(deps.get_transactions_view)
):
    if view.load_error:
        raise HTTPException(status_code=503, detail=view.load_error)
    return view.filtered(search=search, station=station, ascending=order == "asc")

@router.post("/", response_model=schemas.Movement, status_code=201)
async def create_movement(movement_in: schemas.MovementCreate, client: StoreClient = Depends(deps.get_client)):
    # written straight through; the view picks it up from the feed
    try:
        return await client.arun(
            "transactions",
            lambda db: schemas.Movement.model_validate(movement_service.create(db, movement_in))
        )
    except QueryError as e:
        logger.error(f"Error recording movement: {e}")
        raise HTTPException(status_code=503, detail="Error recording movement")
