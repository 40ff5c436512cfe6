"""Change events as they leave the feed.

Raw notifications look like::

    {"type": "INSERT" | "UPDATE" | "DELETE",
     "table": "sarees",
     "record": {...new row...} | null,
     "old_record": {...prior row...} | null}

They are decoded exactly once, here, into one of three event classes. A
DELETE may carry only the primary key of the prior row (default replica
identity), so Removed keeps the raw row next to the decoded key.
"""
from dataclasses import dataclass
from typing import Any, Optional, Type, Union

from pydantic import BaseModel, TypeAdapter


@dataclass(frozen=True)
class Created:
    row: Any


@dataclass(frozen=True)
class Modified:
    row: Any


@dataclass(frozen=True)
class Removed:
    key: Any
    old: dict


ChangeEvent = Union[Created, Modified, Removed]


def _identity(schema: Type[BaseModel], raw: dict):
    annotation = schema.model_fields["id"].annotation
    return TypeAdapter(annotation).validate_python(raw["id"])


def decode_event(payload: dict, schema: Type[BaseModel]) -> Optional[ChangeEvent]:
    """Turn a raw notification into a tagged event, None for unknown kinds.

    Raises KeyError or pydantic.ValidationError for malformed rows.
    """
    kind = payload.get("type")
    if kind == "INSERT":
        return Created(schema.model_validate(payload["record"]))
    if kind == "UPDATE":
        return Modified(schema.model_validate(payload["record"]))
    if kind == "DELETE":
        old = payload["old_record"]
        return Removed(_identity(schema, old), old)
    return None
