from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tracker.api.v1.api import api_router
from tracker.core.config import settings
from tracker.core.logger import setup_logger
from tracker.core.scheduler import create_scheduler
from tracker.database.client import create_store_client
from tracker.services.auth_service import initialize_demo_auth
from tracker.views.live import DashboardView, TrackerView, TransactionsView
import asyncio

logger = setup_logger("tracker")

app = FastAPI(
    title="Saree Tracker API",
    description="Live view of sarees moving through the production stations",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")

@app.on_event("startup")
async def on_startup():
    logger.info("Starting application, store client and live views...")
    client = create_store_client(settings)
    app.state.client = client

    if settings.demo_auth_enabled:
        await asyncio.to_thread(
            initialize_demo_auth, client.auth, settings.DEMO_EMAIL, settings.DEMO_PASSWORD
        )

    views = {
        "dashboard": DashboardView(client),
        "tracker": TrackerView(client),
        "transactions": TransactionsView(client),
    }
    app.state.views = views
    await asyncio.gather(*(view.mount() for view in views.values()))

    scheduler = create_scheduler(client.auth, settings.SESSION_REFRESH_MINUTES)
    scheduler.start()
    app.state.scheduler = scheduler
    logger.info("Scheduler started")

@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Shutting down live views, scheduler and store client...")
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None and scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
    else:
        logger.warning("Scheduler was not running")

    for view in getattr(app.state, "views", {}).values():
        await view.unmount()

    client = getattr(app.state, "client", None)
    if client is not None:
        await client.close()
