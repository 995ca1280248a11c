"""Build the tenant → brand → hotel → floor → room tree from flat space records.

The builder indexes every recognised record by its parent id, picks an
*anchor* (the first Tenant, HotelBrand, Venue or Floor seen, with higher
levels short-circuiting lower ones), and uses the anchor's whole layer as the
root set. Children are attached depth-first from the parent index. A lone
non-floor root is collapsed so callers always get a level to branch on.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from facility_topology.errors import InvalidInputError

from .catalog import (
    FLOOR_TYPE,
    HOTEL_BRAND_TYPE,
    HOTEL_TYPE,
    TENANT_TYPE,
    TypeCatalog,
    is_type,
)
from .models import Space, SpaceRecord

logger = logging.getLogger(__name__)

# Highest level first. Room is the leaf level and never anchors.
ANCHOR_PRIORITY: tuple[str, ...] = (TENANT_TYPE, HOTEL_BRAND_TYPE, HOTEL_TYPE, FLOOR_TYPE)

ROOT_PARENT_ID = ""


def _anchor_rank(type_name: str) -> Optional[int]:
    for rank, candidate in enumerate(ANCHOR_PRIORITY):
        if is_type(type_name, candidate):
            return rank
    return None


def _index_spaces(
    records: Iterable[SpaceRecord], catalog: TypeCatalog
) -> tuple[dict[str, List[Space]], Optional[Space], int]:
    spaces_by_parent_id: dict[str, List[Space]] = {}
    candidates: List[Optional[Space]] = [None] * len(ANCHOR_PRIORITY)
    seen_ids: set[str] = set()
    dropped = 0

    for record in records:
        if not record.id:
            raise InvalidInputError("Space record is missing an identifier")
        type_name = catalog.type_name(record.type_id)
        if type_name is None:
            dropped += 1
            continue
        if record.id in seen_ids:
            raise InvalidInputError(f"Duplicate space identifier {record.id}")
        seen_ids.add(record.id)

        space = Space.from_record(record, type_name)
        rank = _anchor_rank(type_name)
        # A candidate only counts while no higher (or equal) level has been seen yet.
        if rank is not None and all(slot is None for slot in candidates[: rank + 1]):
            candidates[rank] = space

        spaces_by_parent_id.setdefault(space.parent_space_id, []).append(space)

    anchor = next((candidate for candidate in candidates if candidate is not None), None)
    return spaces_by_parent_id, anchor, dropped


def _attach_children(
    parents: Sequence[Space],
    spaces_by_parent_id: dict[str, List[Space]],
    attached: set[str],
) -> None:
    for parent in parents:
        children = spaces_by_parent_id.get(parent.id)
        if not children:
            continue
        for child in children:
            if child.id in attached:
                raise InvalidInputError(f"Space {child.id} is part of a parent cycle")
            attached.add(child.id)
        parent.child_spaces.extend(children)
        _attach_children(children, spaces_by_parent_id, attached)


def build_hierarchy(records: Sequence[SpaceRecord], catalog: TypeCatalog) -> List[Space]:
    """Convert flat space records into the hierarchy shown to facility managers.

    Raises :class:`~facility_topology.errors.TypeResolutionError` before any
    record is looked at when the catalog lacks one of the recognised types, and
    :class:`~facility_topology.errors.InvalidInputError` when the records do not
    form a strict tree.
    """
    catalog.validate()

    spaces_by_parent_id, anchor, dropped = _index_spaces(records, catalog)
    if dropped:
        logger.debug("Dropped %s space records with unrecognised type ids", dropped)
    if anchor is None:
        logger.info("No tenant, brand, hotel or floor space found; returning an empty hierarchy")
        return []

    logger.debug("Anchoring hierarchy on %s space %s (%s)", anchor.type, anchor.id, anchor.name)
    hierarchical_spaces = list(spaces_by_parent_id[anchor.parent_space_id])
    _attach_children(hierarchical_spaces, spaces_by_parent_id, {space.id for space in hierarchical_spaces})

    if len(hierarchical_spaces) == 1 and not is_type(hierarchical_spaces[0].type, FLOOR_TYPE):
        root = hierarchical_spaces[0]
        logger.info("Single %s root %s; returning its child spaces instead", root.type, root.id)
        hierarchical_spaces = [
            child for child in root.child_spaces if not is_type(child.type, TENANT_TYPE)
        ]

    return hierarchical_spaces


def iter_spaces(roots: Iterable[Space], depth: int = 0) -> Iterator[tuple[int, Space]]:
    """Yield ``(depth, space)`` pairs in depth-first pre-order."""
    for space in roots:
        yield depth, space
        yield from iter_spaces(space.child_spaces, depth + 1)


def hierarchy_to_payload(roots: Iterable[Space]) -> list[dict[str, object]]:
    return [space.to_dict() for space in roots]
