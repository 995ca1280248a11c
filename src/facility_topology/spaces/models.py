"""Dataclasses for flat Digital Twins space records and hierarchical space nodes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from facility_topology.errors import InvalidInputError


def parse_type_id(value: Any) -> Optional[int]:
    """Return ``value`` as an integer type id, or ``None`` when it is not an exact integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text.startswith("-") else text
        return int(text) if digits.isascii() and digits.isdigit() else None
    return None


@dataclass(frozen=True, slots=True)
class SpaceRecord:
    """A single space as returned by the Digital Twins spaces endpoint."""

    id: str
    name: Optional[str]
    friendly_name: Optional[str]
    type_id: int
    parent_space_id: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SpaceRecord":
        if not isinstance(payload, Mapping):
            raise InvalidInputError(f"Space record must be a JSON object, got {type(payload).__name__}")
        space_id = payload.get("id")
        if not space_id:
            raise InvalidInputError(f"Space record is missing an identifier: {dict(payload)!r}")
        raw_type_id = payload.get("typeId")
        type_id = parse_type_id(raw_type_id)
        if type_id is None:
            raise InvalidInputError(f"Space {space_id} has a non-integer typeId {raw_type_id!r}")
        return cls(
            id=str(space_id),
            name=payload.get("name"),
            friendly_name=payload.get("friendlyName"),
            type_id=type_id,
            parent_space_id=payload.get("parentSpaceId") or "",
        )


@dataclass(slots=True)
class Space:
    """Node of the space hierarchy; owns its child spaces."""

    id: str
    name: Optional[str]
    friendly_name: Optional[str]
    type: str
    type_id: int
    parent_space_id: str = ""
    child_spaces: List["Space"] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: SpaceRecord, type_name: str) -> "Space":
        return cls(
            id=record.id,
            name=record.name,
            friendly_name=record.friendly_name,
            type=type_name,
            type_id=record.type_id,
            parent_space_id=record.parent_space_id or "",
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "friendlyName": self.friendly_name,
            "type": self.type,
            "typeId": self.type_id,
            "parentSpaceId": self.parent_space_id,
            "childSpaces": [child.to_dict() for child in self.child_spaces],
        }
