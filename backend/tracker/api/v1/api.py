from fastapi import APIRouter
from tracker.api.v1.endpoints import auth, dashboard, movements, realtime, units

api_router = APIRouter()
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(units.router, prefix="/units", tags=["units"])
api_router.include_router(movements.router, prefix="/movements", tags=["movements"])
api_router.include_router(realtime.router, prefix="/realtime", tags=["realtime"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
