"""Snapshot reads that seed a view before its first change event.

Every function either returns a complete result or raises QueryError (or
NotFoundError); nothing is returned half loaded.
"""
import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from tracker import schemas
from tracker.core.exceptions import NotFoundError
from tracker.services import movement_service, station_service, throughput_service, unit_service
from tracker.utils.datetime_utils import utc_now
from tracker.utils.duration import station_duration
from tracker.utils.stations import build_stages, latest_movement_into, segment_states

logger = logging.getLogger(__name__)


async def entered_station_at(client, unit: schemas.Unit) -> Optional[datetime]:
    def query(db):
        movement = movement_service.get_latest_into(db, unit.saree_id, unit.current_station)
        return movement.timestamp if movement else None
    return await client.arun("transactions", query)


async def with_duration(client, unit: schemas.Unit, now: datetime = None) -> schemas.UnitWithDuration:
    entered_at = await entered_station_at(client, unit)
    return schemas.UnitWithDuration(
        **unit.model_dump(),
        station_duration=station_duration(now or utc_now(), unit.created_at, entered_at),
        segments=segment_states(unit.current_station)
    )


async def load_units(client, now: datetime = None) -> List[schemas.UnitWithDuration]:
    units = await client.arun(
        "sarees",
        lambda db: [schemas.Unit.model_validate(unit) for unit in unit_service.get_all(db)]
    )
    # one secondary read per unit, all in flight together
    now = now or utc_now()
    result = await asyncio.gather(*(with_duration(client, unit, now) for unit in units))
    logger.info(f"Loaded {len(result)} units")
    return list(result)


async def load_movements(client, ascending: bool = False) -> List[schemas.Movement]:
    movements = await client.arun(
        "transactions",
        lambda db: [schemas.Movement.model_validate(m) for m in movement_service.get_all(db, ascending)]
    )
    logger.info(f"Loaded {len(movements)} movements")
    return movements


async def load_stations(client) -> List[schemas.Station]:
    return await client.arun(
        "stations",
        lambda db: [schemas.Station.model_validate(s) for s in station_service.get_all(db)]
    )


async def load_counts(client) -> Tuple[int, int]:
    """Live unit count and the latest throughput counter value."""
    def latest_throughput(db):
        row = throughput_service.get_latest(db)
        return row.count if row else 0

    unit_count, throughput_count = await asyncio.gather(
        client.arun("sarees", unit_service.count),
        client.arun("through_put", latest_throughput)
    )
    return unit_count, throughput_count


async def load_unit_detail(client, saree_id: str, now: datetime = None) -> schemas.UnitDetail:
    def query(db):
        unit = unit_service.get_by_code(db, saree_id)
        return schemas.Unit.model_validate(unit) if unit else None

    unit = await client.arun("sarees", query)
    if unit is None:
        raise NotFoundError("sarees", saree_id)

    movements = await client.arun(
        "transactions",
        lambda db: [schemas.Movement.model_validate(m) for m in movement_service.get_for_unit(db, saree_id)]
    )
    latest = latest_movement_into(movements, unit.current_station)
    return schemas.UnitDetail(
        unit=unit,
        station_duration=station_duration(
            now or utc_now(), unit.created_at, latest.timestamp if latest else None
        ),
        stages=build_stages(unit, movements),
        segments=segment_states(unit.current_station),
        movements=movements
    )
