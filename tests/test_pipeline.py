import pytest

from diagram_ir import DiagramOptions, SymbolicPosition, UnresolvedReferenceError, build_diagram


def _documents():
    return [
        {"type": "page", "scale": {"position": {"x": 2, "y": 2}, "size": {"w": 2, "h": 2}}},
        {
            "type": "style",
            "node": {"object": {"tikz": {"shape": "rectangle", "draw": "#000000"}}},
            "edge": {"object": {"tikz": {"->": True}}},
        },
        {"type": "style", "name": "round", "node": {"object": {"tikz": {"shape": "circle"}}}},
        {"type": "node", "name": "a", "x": 0, "y": 0, "w": 2, "h": 1},
        {"type": "node", "name": "b", "position_of": "a.east", "adjust_x": 3, "style": "round"},
        {"type": "node", "name": "label", "position_of": "b.text"},
        {"type": "edge", "from": "a", "to": "b", "attributes": "thick"},
        {"name": "a", "fillcolor": "#ff0000", "attributes": "dashed"},
    ]


def test_build_diagram_end_to_end():
    diagram = build_diagram(_documents())

    assert list(diagram.elements) == ["a", "b", "label", "edge#3"]
    assert diagram.page.scale.position_x == 2.0
    assert not diagram.failures

    a = diagram["a"]
    assert a.position.scaled == (0.0, 0.0)
    assert a.dimension.scaled == (4.0, 2.0)
    assert a.bounding_box.width == 4.0
    assert a.style == {"shape": "rectangle", "draw": "color000000", "fill": "colorFF0000", "dashed": True}
    assert len(a.element.records) == 2

    b = diagram["b"]
    assert b.position.scaled == pytest.approx((8.0, 0.0))
    assert b.position.unscaled == pytest.approx((4.0, 0.0))
    assert b.style["shape"] == "circle"

    label = diagram["label"]
    assert isinstance(label.position, SymbolicPosition)
    assert label.position.at == "b.text"

    edge = diagram["edge#3"]
    start, end = edge.element.endpoints
    assert start.scaled == pytest.approx((2.0, 0.0))
    assert end.scaled == pytest.approx((7.0, 0.0))
    assert edge.style == {"->": True, "thick": True}
    assert edge.bounding_box is None

    assert [item.name for item in diagram.nodes()] == ["a", "b", "label"]
    assert [item.name for item in diagram.edges()] == ["edge#3"]
    assert set(diagram.colors) == {"color000000", "colorFF0000"}
    assert diagram.bounds.left == pytest.approx(-2.0)
    assert diagram.bounds.right == pytest.approx(9.0)


def test_build_diagram_collects_warnings():
    documents = [{"type": "node", "name": "a", "attributes": "draw=red, fill="}]

    diagram = build_diagram(documents)

    assert diagram["a"].style == {"draw": "red"}
    assert len(diagram.warnings) == 1


def test_build_diagram_strict_failure():
    documents = [{"type": "node", "name": "a", "position_of": "ghost"}]

    with pytest.raises(UnresolvedReferenceError):
        build_diagram(documents)

    diagram = build_diagram(documents, DiagramOptions(strict=False))
    assert diagram.failures == {"a": "Reference element 'ghost' not found"}
    assert diagram["a"].bounding_box is None
    assert diagram.bounds is None
