import pytest

from diagram_ir.bounding import BoundingBox, bounding_box_of
from diagram_ir.model import Coordinates, Element, Extent, Reference, ScaleConfig, SymbolicPosition


def _placed(name, x, y, w, h, anchor=None):
    element = Element(name, anchor=anchor)
    element.position = Coordinates.from_unscaled(x, y, ScaleConfig())
    element.dimension = Extent(w, h, w, h)
    return element


def test_box_is_normalised_from_any_corners():
    box = BoundingBox(4, 3, -2, 1)
    assert (box.left, box.bottom, box.right, box.top) == (-2.0, 1.0, 4.0, 3.0)
    assert (box.width, box.height) == (6.0, 2.0)
    assert box.center == (1.0, 2.0)


def test_box_from_centered_element():
    box = BoundingBox.from_element(_placed("a", 10, 20, 4, 2))
    assert (box.left, box.bottom, box.right, box.top) == (8.0, 19.0, 12.0, 21.0)


def test_box_honours_element_anchor():
    box = BoundingBox.from_element(_placed("a", 0, 0, 4, 2, anchor="north west"))
    assert (box.left, box.bottom, box.right, box.top) == (0.0, -2.0, 4.0, 0.0)


@pytest.mark.parametrize(
    "element",
    [
        Element("edge", kind="edge"),
        Element("unplaced"),
        _placed("flat", 0, 0, 0, 2),
        _placed("odd", 0, 0, 2, 2, anchor="text"),
    ],
)
def test_box_not_computable(element):
    assert BoundingBox.from_element(element) is None


def test_symbolic_element_has_no_box():
    element = _placed("s", 0, 0, 2, 2)
    element.position = SymbolicPosition(Reference("a", "text"))
    assert BoundingBox.from_element(element) is None


def test_contains_is_inclusive():
    box = BoundingBox(0, 0, 2, 2)
    assert box.contains((0, 0))
    assert box.contains((2, 1))
    assert not box.contains((2.01, 1))


def test_overlaps_is_inclusive():
    box = BoundingBox(0, 0, 2, 2)
    assert box.overlaps(BoundingBox(2, 2, 3, 3))
    assert box.overlaps(BoundingBox(1, 1, 5, 5))
    assert not box.overlaps(BoundingBox(2.5, 0, 3, 2))
    assert not box.overlaps(BoundingBox(0, -3, 2, -0.1))


def test_edge_point_by_name_and_vector():
    box = BoundingBox(-2, -1, 2, 1)
    assert box.edge_point("north") == pytest.approx((0.0, 1.0))
    assert box.edge_point("west") == pytest.approx((-2.0, 0.0))
    assert box.edge_point((1, 1)) == pytest.approx((1.0, 1.0))
    assert box.edge_point((4, -1)) == pytest.approx((2.0, -0.5))


def test_edge_point_falls_back_to_center():
    box = BoundingBox(0, 0, 2, 2)
    assert box.edge_point((0, 0)) == (1.0, 1.0)
    assert box.edge_point("center") == (1.0, 1.0)
    assert box.edge_point("somewhere") == (1.0, 1.0)


def test_aggregate_box_skips_uncomputable_elements():
    elements = [
        _placed("a", 0, 0, 2, 2),
        _placed("b", 10, 5, 4, 4),
        Element("e", kind="edge"),
        Element("unplaced"),
    ]

    box = bounding_box_of(elements)

    assert (box.left, box.bottom, box.right, box.top) == (-1.0, -1.0, 12.0, 7.0)


def test_aggregate_box_requires_one_element():
    with pytest.raises(ValueError):
        bounding_box_of([Element("unplaced")])
