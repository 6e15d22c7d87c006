import logging

import pytest

from diagram_ir.model import RecordError, Reference, Waypoint
from diagram_ir.records import (
    coerce_float,
    element_from_record,
    elements_from_records,
    parse_waypoints,
    split_documents,
)


def test_node_record_fields_and_aliases():
    element = element_from_record(
        {
            "type": "node",
            "name": " n1 ",
            "position_of": "a.north east",
            "x_offset": "1.5",
            "width": 4,
            "height": "",
            "tikz_object_attributes": "thick",
            "fillcolor": "#ff0000",
            "label": "Start",
        }
    )

    assert element.name == "n1"
    assert element.kind == "node"
    assert element.position_of == Reference("a", "north east")
    assert element.adjust_x == 1.5
    assert element.w == 4.0
    assert element.h is None
    assert element.attributes == "thick"
    assert element.extras == {"fillcolor": "#ff0000", "label": "Start"}
    assert element.records[0]["label"] == "Start"


@pytest.mark.parametrize("value", ["abc", True, [1]])
def test_non_numeric_values_are_rejected(value):
    with pytest.raises(RecordError) as excinfo:
        element_from_record({"name": "n1", "x": value})
    assert excinfo.value.name == "n1"


def test_coerce_float_blank_is_absent():
    assert coerce_float(None) is None
    assert coerce_float("  ") is None
    assert coerce_float("0") == 0.0
    assert coerce_float(3) == 3.0


def test_unknown_type_is_rejected():
    with pytest.raises(RecordError):
        element_from_record({"name": "x", "type": "table"})


def test_record_without_name_is_rejected():
    with pytest.raises(RecordError):
        element_from_record({"x": 1})


def test_edge_endpoints_from_direction_fields():
    element = element_from_record(
        {"type": "edge", "name": "e1", "from": "a", "from_direction": "east", "to": "b.west"}
    )

    assert element.is_edge
    assert element.start == Reference("a", "east")
    assert element.end == Reference("b", "west")


def test_edge_start_end_take_precedence():
    element = element_from_record({"type": "edge", "name": "e1", "start": "a.north", "from": "z"})
    assert element.start == Reference("a", "north")
    assert element.end is None


def test_unnamed_edges_get_positional_names():
    elements = elements_from_records(
        [
            {"type": "node", "name": "a"},
            {"type": "edge", "from": "a", "to": "a"},
        ]
    )
    assert [element.name for element in elements] == ["a", "edge#1"]


def test_split_documents(caplog):
    documents = [
        {"type": "page", "scale": {"position": {"x": 2}}},
        {"type": "node", "name": "a"},
        {"name": "b", "x": 1},
        {"type": "style", "name": "custom"},
        {"type": "chart"},
        None,
        {"type": "edge", "from": "a", "to": "b"},
    ]

    with caplog.at_level(logging.WARNING):
        records, styles = split_documents(documents)

    assert [record.get("name") for record in records] == ["a", "b", None]
    assert [document["type"] for document in styles] == ["page", "style"]
    assert "chart" in caplog.text


def test_at_is_kept_verbatim():
    element = element_from_record({"name": "n1", "at": " $(a)!0.5!(b)$ "})

    assert element.at == "$(a)!0.5!(b)$"
    assert element.extras == {}


def test_parse_waypoints():
    waypoints = parse_waypoints("s(1,1) c(2, 2) e(-1,0.5) (3,4) ac(0,1)")

    assert waypoints == (
        Waypoint("s", 1.0, 1.0),
        Waypoint("a", 2.0, 2.0, control=True),
        Waypoint("e", -1.0, 0.5),
        Waypoint("a", 3.0, 4.0),
        Waypoint("a", 0.0, 1.0, control=True),
    )
    assert parse_waypoints("  ") is None


@pytest.mark.parametrize("text", ["s(1)", "x(1,2)", "s(a,2)"])
def test_malformed_waypoints_are_rejected(text):
    with pytest.raises(RecordError) as excinfo:
        parse_waypoints(text, name="e1")
    assert excinfo.value.name == "e1"


def test_edge_record_waypoints():
    record = {"type": "edge", "name": "e1", "from": "a", "to": "b", "waypoints": "sc(0,1) e(0,1)"}
    element = element_from_record(record)

    assert element.waypoints == (Waypoint("s", 0.0, 1.0, control=True), Waypoint("e", 0.0, 1.0))
    assert "waypoints" not in element.extras
