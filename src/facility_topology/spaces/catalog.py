"""Space type catalog resolved from the Digital Twins types endpoint."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from facility_topology.errors import InvalidInputError, TypeResolutionError

from .models import parse_type_id

logger = logging.getLogger(__name__)

TENANT_TYPE = "Tenant"
HOTEL_BRAND_TYPE = "HotelBrand"
HOTEL_TYPE = "Venue"
FLOOR_TYPE = "Floor"
ROOM_TYPE = "Room"

REQUIRED_TYPE_NAMES: tuple[str, ...] = (
    TENANT_TYPE,
    HOTEL_BRAND_TYPE,
    HOTEL_TYPE,
    FLOOR_TYPE,
    ROOM_TYPE,
)

SPACE_TYPE_CATEGORY = "SpaceType"

_CANONICAL_NAMES = {name.lower(): name for name in REQUIRED_TYPE_NAMES}


def canonical_type_name(name: Optional[str]) -> Optional[str]:
    """Return the canonical spelling of a recognised type name, or ``None``."""
    if not isinstance(name, str) or not name:
        return None
    return _CANONICAL_NAMES.get(name.strip().lower())


def is_type(name: Optional[str], expected: str) -> bool:
    """Case-insensitive comparison of type names."""
    return name is not None and name.lower() == expected.lower()


def types_query() -> str:
    """Query string used to ask the types endpoint for the recognised space types."""
    return f"names={';'.join(REQUIRED_TYPE_NAMES)}&categories={SPACE_TYPE_CATEGORY}"


@dataclass(frozen=True)
class TypeCatalog:
    """Immutable mapping between recognised space type names and their numeric ids."""

    ids_by_name: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    names_by_id: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_types(cls, entries: Iterable[Mapping[str, Any]]) -> "TypeCatalog":
        return cls().merged(entries)

    @classmethod
    def from_ids(cls, ids_by_name: Mapping[str, int]) -> "TypeCatalog":
        return cls.from_types({"id": type_id, "name": name} for name, type_id in ids_by_name.items())

    def merged(self, entries: Iterable[Mapping[str, Any]]) -> "TypeCatalog":
        ids_by_name = dict(self.ids_by_name)
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise InvalidInputError(f"Space type entry must be a JSON object, got {type(entry).__name__}")
            name = canonical_type_name(entry.get("name"))
            if name is None:
                logger.debug("Ignoring unrecognised space type %r", entry.get("name"))
                continue
            type_id = parse_type_id(entry.get("id"))
            if type_id is None:
                logger.warning("Space type %s returned without a usable id: %r", name, entry.get("id"))
                continue
            ids_by_name[name] = type_id
        names_by_id = {type_id: name for name, type_id in ids_by_name.items()}
        return TypeCatalog(
            ids_by_name=MappingProxyType(ids_by_name),
            names_by_id=MappingProxyType(names_by_id),
        )

    def missing_type_names(self) -> list[str]:
        return [name for name in REQUIRED_TYPE_NAMES if name not in self.ids_by_name]

    def is_complete(self) -> bool:
        return not self.missing_type_names()

    def validate(self) -> "TypeCatalog":
        missing = self.missing_type_names()
        if missing:
            raise TypeResolutionError(missing)
        return self

    def type_name(self, type_id: int) -> Optional[str]:
        return self.names_by_id.get(type_id)

    def type_id(self, name: str) -> Optional[int]:
        canonical = canonical_type_name(name)
        if canonical is None:
            return None
        return self.ids_by_name.get(canonical)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self.names_by_id
