from typing import Sequence

from tracker import schemas
from tracker.utils.stations import WIP_STATIONS, sort_stations, station_color

# Display-side offsets, not stored anywhere
BASE_UNITS_IN_PRODUCTION = 900
BASE_COMPLETED_TODAY = 300
MIN_DAILY_TARGET = 120
DAILY_TARGET_PERCENT = 10


def total_in_production(unit_count: int) -> int:
    return BASE_UNITS_IN_PRODUCTION + unit_count


def completed_today(throughput_count: int) -> int:
    return BASE_COMPLETED_TODAY + throughput_count


def daily_target(unit_count: int) -> int:
    # 10% of the live units rounded up, integer arithmetic
    return max(MIN_DAILY_TARGET, -(-unit_count * DAILY_TARGET_PERCENT // 100))


def progress_percentage(completed: int, target: int) -> int:
    if target <= 0:
        return 0
    return int(completed * 100 / target + 0.5)


def build_wip(stations: Sequence[schemas.Station]) -> list:
    wip_stations = [station for station in stations if station.name in WIP_STATIONS]
    return [
        schemas.WipEntry(name=station.name, count=station.count, color=station_color(station.name))
        for station in sort_stations(wip_stations, WIP_STATIONS)
    ]


def build_summary(stations: Sequence[schemas.Station], unit_count: int, throughput_count: int,
                  live: bool = False) -> schemas.DashboardSummary:
    completed = completed_today(throughput_count)
    target = daily_target(unit_count)
    wip = build_wip(stations)
    return schemas.DashboardSummary(
        stations=sort_stations(stations),
        total_units=total_in_production(unit_count),
        daily_throughput=schemas.DailyThroughput(completed=completed, target=target),
        progress_percentage=progress_percentage(completed, target),
        wip=wip,
        total_wip=sum(entry.count for entry in wip),
        live=live
    )
