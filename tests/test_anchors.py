import math

import pytest

from diagram_ir.anchors import (
    CANONICAL_VECTORS,
    canonical_anchor_name,
    direction_vector,
    element_anchor,
    resolve_anchor,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("north", "north"),
        ("NORTH", "north"),
        ("n", "north"),
        ("north_east", "north east"),
        ("northeast", "north east"),
        ("NE", "north east"),
        ("south-west", "south west"),
        ("up right", "north east"),
        ("left", "west"),
        ("centre", "center"),
    ],
)
def test_canonical_anchor_name_accepts_aliases(text, expected):
    assert canonical_anchor_name(text) == expected


def test_unknown_anchor_is_none():
    assert resolve_anchor("text") is None
    assert resolve_anchor("") is None
    assert canonical_anchor_name(None) is None


def test_opposite_anchors_are_antisymmetric():
    pairs = [("north", "south"), ("east", "west"), ("north east", "south west"), ("north west", "south east")]
    for first, second in pairs:
        vx, vy = CANONICAL_VECTORS[first]
        wx, wy = CANONICAL_VECTORS[second]
        assert (vx, vy) == (-wx, -wy)


def test_corner_anchor_vectors_are_full_half_extents():
    assert resolve_anchor("north east").vector == (1.0, 1.0)
    assert resolve_anchor("south west").vector == (-1.0, -1.0)


def test_element_anchor_defaults_to_center():
    assert element_anchor(None).is_center
    assert element_anchor("  ").is_center
    assert element_anchor("west").vector == (-1.0, 0.0)
    assert element_anchor("label") is None


def test_direction_vector_is_unit_length():
    dx, dy = direction_vector("north east")
    assert math.isclose(math.hypot(dx, dy), 1.0)
    assert dx == pytest.approx(dy)
    assert direction_vector("center") == (0.0, 0.0)
    assert direction_vector("nowhere") == (0.0, 0.0)
