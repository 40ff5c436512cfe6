"""Row builders for the store tables and for change-feed payloads."""

import uuid
from datetime import datetime, timedelta, timezone

from tracker import models

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def add_unit(db, saree_id="1001", station="Inspection", created_at=None, **fields):
    unit = models.Unit(
        id=uuid.uuid4(),
        saree_id=saree_id,
        article_number=fields.pop("article_number", "ART-1"),
        weaver_name=fields.pop("weaver_name", "Lakshmi"),
        length=fields.pop("length", "6.3m"),
        current_station=station,
        status=fields.pop("status", "In Progress"),
        progress=fields.pop("progress", 0),
        created_at=created_at or NOW - timedelta(days=3),
        **fields
    )
    db.add(unit)
    db.commit()
    return unit


def add_movement(db, saree_id, from_station, to_station, timestamp):
    movement = models.Movement(
        id=uuid.uuid4(),
        saree_id=saree_id,
        from_station=from_station,
        to_station=to_station,
        timestamp=timestamp,
        created_at=timestamp
    )
    db.add(movement)
    db.commit()
    return movement


def unit_row(saree_id="2001", station="Dyeing", created_at=None, row_id=None, **fields):
    """A sarees row as it appears in a change notification."""
    row = {
        "id": str(row_id or uuid.uuid4()),
        "saree_id": saree_id,
        "article_number": "ART-9",
        "length": "5.5m",
        "weaver_name": "Meena",
        "color": None,
        "design": None,
        "current_station": station,
        "status": "In Progress",
        "progress": 20,
        "created_at": (created_at or NOW).isoformat(),
        "updated_at": None,
    }
    row.update(fields)
    return row


def change(kind, table, record=None, old_record=None):
    return {"type": kind, "table": table, "record": record, "old_record": old_record}


