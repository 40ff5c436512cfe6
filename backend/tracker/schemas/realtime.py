from typing import List, Optional

from pydantic import BaseModel

from .enums import ConnectionStateEnum


class SubscriptionStatus(BaseModel):
    table: str
    state: ConnectionStateEnum
    error: Optional[str] = None


class ViewStatus(BaseModel):
    view: str
    live: bool
    load_error: Optional[str] = None
    subscriptions: List[SubscriptionStatus]
