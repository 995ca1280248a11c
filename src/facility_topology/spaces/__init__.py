"""Space domain models, type catalog and hierarchy builder."""

from .catalog import (
    FLOOR_TYPE,
    HOTEL_BRAND_TYPE,
    HOTEL_TYPE,
    REQUIRED_TYPE_NAMES,
    ROOM_TYPE,
    TENANT_TYPE,
    TypeCatalog,
    types_query,
)
from .hierarchy import build_hierarchy, hierarchy_to_payload, iter_spaces
from .models import Space, SpaceRecord

__all__ = [
    "FLOOR_TYPE",
    "HOTEL_BRAND_TYPE",
    "HOTEL_TYPE",
    "REQUIRED_TYPE_NAMES",
    "ROOM_TYPE",
    "TENANT_TYPE",
    "Space",
    "SpaceRecord",
    "TypeCatalog",
    "build_hierarchy",
    "hierarchy_to_payload",
    "iter_spaces",
    "types_query",
]
