from fastapi import APIRouter, Depends, HTTPException
from tracker import schemas
from tracker.api import deps
from tracker.views.live import DashboardView

router = APIRouter()

@router.get("/", response_model=schemas.DashboardSummary)
def read_dashboard(view: DashboardView = Depends(deps.get_dashboard_view)):
    summary = view.summary
    if summary is None:
        raise HTTPException(status_code=503, detail=view.load_error or "Dashboard is still loading")
    return summary
