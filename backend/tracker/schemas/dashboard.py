from typing import List

from pydantic import BaseModel

from .station import Station


class DailyThroughput(BaseModel):
    completed: int
    target: int


class WipEntry(BaseModel):
    name: str
    count: int
    color: str


class DashboardSummary(BaseModel):
    stations: List[Station]
    total_units: int
    daily_throughput: DailyThroughput
    progress_percentage: int
    wip: List[WipEntry]
    total_wip: int
    live: bool = False
