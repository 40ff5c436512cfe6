from fastapi import APIRouter, Depends
from typing import List
from tracker import schemas
from tracker.api import deps

router = APIRouter()

@router.get("/status", response_model=List[schemas.ViewStatus])
def read_status(views: dict = Depends(deps.get_views)):
    return [view.status for view in views.values()]
