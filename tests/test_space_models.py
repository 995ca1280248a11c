from __future__ import annotations

import pytest

from facility_topology.errors import InvalidInputError
from facility_topology.spaces import Space, SpaceRecord


def test_space_record_from_payload_normalises_parent() -> None:
    record = SpaceRecord.from_payload(
        {
            "id": "space-1",
            "name": "SmartHotel 360",
            "friendlyName": "SmartHotel 360 Seattle",
            "typeId": "12",
            "parentSpaceId": None,
        }
    )

    assert record == SpaceRecord(
        id="space-1",
        name="SmartHotel 360",
        friendly_name="SmartHotel 360 Seattle",
        type_id=12,
        parent_space_id="",
    )


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "No id", "typeId": 1},
        {"id": "", "typeId": 1},
        {"id": "space-2", "typeId": "floor"},
        {"id": "space-3"},
        {"id": "space-4", "typeId": 3.9},
        {"id": "space-5", "typeId": True},
        {"id": "space-6", "typeId": "3.0"},
        {"id": "space-7", "typeId": [3]},
    ],
)
def test_space_record_rejects_malformed_payload(payload: dict) -> None:
    with pytest.raises(InvalidInputError):
        SpaceRecord.from_payload(payload)


def test_space_from_record_starts_without_children() -> None:
    record = SpaceRecord(id="f1", name="1", friendly_name="Floor 1", type_id=4, parent_space_id="h1")

    space = Space.from_record(record, "Floor")

    assert space.type == "Floor"
    assert space.parent_space_id == "h1"
    assert space.child_spaces == []
    assert space.to_dict()["childSpaces"] == []


@pytest.mark.parametrize("raw_type_id", [3, "3", " 3 ", 3.0])
def test_space_record_accepts_exact_integer_type_ids(raw_type_id: object) -> None:
    record = SpaceRecord.from_payload({"id": "space-8", "typeId": raw_type_id})

    assert record.type_id == 3


def test_space_record_rejects_non_object_payload() -> None:
    with pytest.raises(InvalidInputError, match="JSON object"):
        SpaceRecord.from_payload(["space-9", 3])  # type: ignore[arg-type]
