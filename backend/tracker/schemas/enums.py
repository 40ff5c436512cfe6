from enum import Enum


class UnitStatusEnum(str, Enum):
    in_progress = "In Progress"
    completed = "Completed"
    inwarded = "Inwarded"


class ConnectionStateEnum(str, Enum):
    connecting = "connecting"
    connected = "connected"
    closed = "closed"
    errored = "errored"


class StageStatusEnum(str, Enum):
    completed = "completed"
    current = "current"
    pending = "pending"


class SegmentStateEnum(str, Enum):
    complete = "complete"
    active = "active"
    pending = "pending"
