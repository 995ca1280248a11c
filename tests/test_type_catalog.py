from __future__ import annotations

import pytest

from facility_topology.errors import ConfigurationError, InvalidInputError, TypeResolutionError
from facility_topology.spaces import TypeCatalog, types_query

TYPES_PAYLOAD = [
    {"id": 10, "name": "Tenant", "category": "SpaceType"},
    {"id": 11, "name": "hotelbrand", "category": "SpaceType"},
    {"id": 12, "name": "VENUE", "category": "SpaceType"},
    {"id": 13, "name": "Floor", "category": "SpaceType"},
    {"id": 14, "name": "Room", "category": "SpaceType"},
]


def test_from_types_canonicalises_names() -> None:
    catalog = TypeCatalog.from_types(TYPES_PAYLOAD).validate()

    assert catalog.type_name(11) == "HotelBrand"
    assert catalog.type_name(12) == "Venue"
    assert catalog.type_id("venue") == 12
    assert catalog.is_complete()
    assert 14 in catalog
    assert 99 not in catalog


def test_unrecognised_types_are_ignored() -> None:
    catalog = TypeCatalog.from_types(TYPES_PAYLOAD + [{"id": 20, "name": "Region"}])

    assert catalog.type_name(20) is None
    assert catalog.type_id("Region") is None


def test_missing_types_raise_type_resolution_error() -> None:
    catalog = TypeCatalog.from_types(TYPES_PAYLOAD[:3])

    assert catalog.missing_type_names() == ["Floor", "Room"]
    with pytest.raises(TypeResolutionError, match="Floor, Room") as excinfo:
        catalog.validate()
    assert isinstance(excinfo.value, ConfigurationError)


def test_merged_fills_gaps_without_mutating_original() -> None:
    partial = TypeCatalog.from_types(TYPES_PAYLOAD[:3])

    merged = partial.merged(TYPES_PAYLOAD[3:])

    assert merged.is_complete()
    assert not partial.is_complete()


def test_merged_replaces_stale_ids() -> None:
    catalog = TypeCatalog.from_types(TYPES_PAYLOAD)

    updated = catalog.merged([{"id": 40, "name": "Room"}])

    assert updated.type_id("Room") == 40
    assert updated.type_name(40) == "Room"
    assert updated.type_name(14) is None


def test_catalog_mappings_are_read_only() -> None:
    catalog = TypeCatalog.from_types(TYPES_PAYLOAD)

    with pytest.raises(TypeError):
        catalog.ids_by_name["Room"] = 1  # type: ignore[index]


def test_types_query_lists_required_names() -> None:
    assert types_query() == "names=Tenant;HotelBrand;Venue;Floor;Room&categories=SpaceType"


def test_merged_skips_fractional_ids() -> None:
    catalog = TypeCatalog.from_types(TYPES_PAYLOAD[:4] + [{"id": 14.5, "name": "Room"}])

    assert catalog.missing_type_names() == ["Room"]


def test_merged_rejects_non_object_entries() -> None:
    with pytest.raises(InvalidInputError):
        TypeCatalog.from_types(TYPES_PAYLOAD + ["Room"])  # type: ignore[list-item]
