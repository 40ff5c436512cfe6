from fastapi import Request

from tracker.database.client import StoreClient
from tracker.views.live import DashboardView, TrackerView, TransactionsView


def get_client(request: Request) -> StoreClient:
    return request.app.state.client


def get_tracker_view(request: Request) -> TrackerView:
    return request.app.state.views["tracker"]


def get_transactions_view(request: Request) -> TransactionsView:
    return request.app.state.views["transactions"]


def get_dashboard_view(request: Request) -> DashboardView:
    return request.app.state.views["dashboard"]


def get_views(request: Request) -> dict:
    return request.app.state.views
