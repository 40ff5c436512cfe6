# tracker/schemas/__init__.py

from .enums import (
    UnitStatusEnum,
    ConnectionStateEnum,
    StageStatusEnum,
    SegmentStateEnum
)
from .unit import Unit, UnitBase, UnitWithDuration
from .movement import Movement, MovementBase, MovementCreate
from .station import Station
from .throughput import Throughput
from .dashboard import DashboardSummary, DailyThroughput, WipEntry
from .detail import StageProgress, UnitDetail
from .realtime import SubscriptionStatus, ViewStatus
from .auth import Credentials, User, AuthSession
from .job_status import JobStatus

# Row schema per store table, used to decode change-feed payloads
TABLE_SCHEMAS = {
    "sarees": Unit,
    "transactions": Movement,
    "stations": Station,
    "through_put": Throughput,
}

__all__ = [
    "UnitStatusEnum", "ConnectionStateEnum", "StageStatusEnum", "SegmentStateEnum",
    "Unit", "UnitBase", "UnitWithDuration",
    "Movement", "MovementBase", "MovementCreate",
    "Station",
    "Throughput",
    "DashboardSummary", "DailyThroughput", "WipEntry",
    "StageProgress", "UnitDetail",
    "SubscriptionStatus", "ViewStatus",
    "Credentials", "User", "AuthSession",
    "JobStatus",
    "TABLE_SCHEMAS"
]
