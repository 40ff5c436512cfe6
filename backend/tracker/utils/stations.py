"""Station sequences and the displays derived from them.

Two sequences are in use: the summary screens know all six stations, the unit
timeline skips FMH. They are kept apart on purpose.
"""
from typing import Iterable, List, Sequence

from tracker import schemas
from tracker.schemas import SegmentStateEnum, StageStatusEnum
from tracker.utils.duration import as_utc

STATION_ORDER = ("Inspection", "Dyeing", "FMH", "FWH", "FMG", "Showroom Inward")

TIMELINE_STAGES = ("Inspection", "Dyeing", "FWH", "FMG", "Showroom Inward")

# stations counted as work in progress on the dashboard
WIP_STATIONS = ("Inspection", "Dyeing", "FMH", "FWH")

STATION_COLORS = {
    "Inspection": "blue",
    "Dyeing": "purple",
    "FMH": "yellow",
    "FWH": "orange",
    "FMG": "green",
    "Showroom Inward": "indigo",
}
DEFAULT_STATION_COLOR = "gray"


def station_index(name: str, order: Sequence[str] = STATION_ORDER) -> int:
    try:
        return order.index(name)
    except ValueError:
        return -1


def station_color(name: str) -> str:
    return STATION_COLORS.get(name, DEFAULT_STATION_COLOR)


def sort_stations(stations: Iterable, order: Sequence[str] = STATION_ORDER) -> list:
    """Sort anything with a ``name`` into canonical order, unknown names last."""
    def sort_key(station):
        index = station_index(station.name, order)
        return index if index >= 0 else len(order)
    return sorted(stations, key=sort_key)


def segment_states(current_station: str, order: Sequence[str] = STATION_ORDER) -> List[SegmentStateEnum]:
    current = station_index(current_station, order)
    segments = []
    for index in range(len(order)):
        if current < 0 or index > current:
            segments.append(SegmentStateEnum.pending)
        elif index < current:
            segments.append(SegmentStateEnum.complete)
        else:
            segments.append(SegmentStateEnum.active)
    return segments


def latest_movement_into(movements: Iterable, station: str):
    latest = None
    for movement in movements:
        if movement.to_station != station:
            continue
        if latest is None or as_utc(movement.timestamp) >= as_utc(latest.timestamp):
            latest = movement
    return latest


def build_stages(unit: schemas.Unit, movements: Sequence,
                 stages: Sequence[str] = TIMELINE_STAGES) -> List[schemas.StageProgress]:
    """Timeline of one unit. ``movements`` must be oldest first."""
    current_index = station_index(unit.current_station, stages)
    result = []
    for index, name in enumerate(stages):
        arrival = next((m for m in movements if m.to_station == name), None)
        if arrival is not None:
            status = StageStatusEnum.current if name == unit.current_station else StageStatusEnum.completed
            timestamp = arrival.timestamp
        elif name == unit.current_station:
            status = StageStatusEnum.current
            timestamp = unit.created_at
        elif index < current_index:
            status = StageStatusEnum.completed
            timestamp = unit.created_at
        else:
            status = StageStatusEnum.pending
            timestamp = None
        result.append(schemas.StageProgress(name=name, status=status, timestamp=timestamp))
    return result
