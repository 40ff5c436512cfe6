from fastapi import APIRouter, Depends, HTTPException
from typing import List
from tracker import schemas
from tracker.api import deps
from tracker.core.exceptions import NotFoundError, QueryError
from tracker.database.client import StoreClient
from tracker.views import loader
from tracker.views.live import TrackerView

router = APIRouter()

@router.get("/", response_model=List[schemas.UnitWithDuration])
def read_units(search: str = "", view: TrackerView = Depends(deps.get_tracker_view)):
    if view.load_error:
        raise HTTPException(status_code=503, detail=view.load_error)
    return view.search(search)

@router.get("/{saree_id}", response_model=schemas.UnitDetail)
async def read_unit(saree_id: str, client: StoreClient = Depends(deps.get_client)):
    try:
        return await loader.load_unit_detail(client, saree_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Saree not found")
    except QueryError:
        raise HTTPException(status_code=503, detail="Error fetching saree data. Please try again.")
