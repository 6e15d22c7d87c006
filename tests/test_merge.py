import pytest

from diagram_ir.merge import merge_all, merge_elements
from diagram_ir.model import Element, RecordError, Reference


def _declaration(**fields):
    fields.setdefault("name", "n1")
    return Element(records=[dict(fields)], **fields)


def test_defined_values_overwrite_and_undefined_keep():
    first = _declaration(x=1, y=2, style="base")
    second = _declaration(x=5, anchor="north")

    merged = merge_elements(first, second)

    assert merged.x == 5
    assert merged.y == 2
    assert merged.style == "base"
    assert merged.anchor == "north"


def test_references_merge_like_scalars():
    merged = merge_elements(_declaration(position_of=Reference("a")), _declaration(adjust_x=1))

    assert merged.position_of == Reference("a")
    assert merged.adjust_x == 1


def test_attributes_accumulate():
    merged = merge_elements(_declaration(attributes="thick"), _declaration(attributes="draw=red"))
    assert merged.attributes == "thick, draw=red"

    assert merge_elements(_declaration(), _declaration(attributes="dashed")).attributes == "dashed"
    assert merge_elements(_declaration(attributes="dashed"), _declaration()).attributes == "dashed"


def test_extras_merge_key_wise():
    first = _declaration(extras={"fillcolor": "red", "label": "A"})
    second = _declaration(extras={"fillcolor": "blue", "label": None})

    merged = merge_elements(first, second)

    assert merged.extras == {"fillcolor": "blue", "label": "A"}


def test_record_concatenation_is_associative():
    a = _declaration(x=1)
    b = _declaration(y=2)
    c = _declaration(w=3)

    left = merge_elements(merge_elements(a, b), c)
    right = merge_elements(a, merge_elements(b, c))

    assert left.records == right.records == [{"name": "n1", "x": 1}, {"name": "n1", "y": 2}, {"name": "n1", "w": 3}]
    assert (left.x, left.y, left.w) == (right.x, right.y, right.w) == (1, 2, 3)


def test_inputs_are_not_modified():
    first = _declaration(attributes="thick", extras={"color": "red"})
    second = _declaration(attributes="dashed", extras={"color": "blue"})

    merge_elements(first, second)

    assert first.attributes == "thick"
    assert first.extras == {"color": "red"}
    assert len(first.records) == 1


def test_kind_conflict_is_rejected():
    with pytest.raises(RecordError):
        merge_elements(_declaration(kind="node"), _declaration(kind="edge"))


def test_undeclared_kind_takes_later_kind():
    assert merge_elements(_declaration(), _declaration(kind="node")).kind == "node"


def test_merge_all_keeps_first_declaration_order():
    merged = merge_all(
        [
            _declaration(name="b", x=1),
            _declaration(name="a", x=2),
            _declaration(name="b", y=3),
        ]
    )

    assert list(merged) == ["b", "a"]
    assert (merged["b"].x, merged["b"].y) == (1, 3)
    assert len(merged["b"].records) == 2


def test_blank_passthrough_values_keep_earlier_ones():
    first = _declaration(x=0, extras={"fillcolor": "red", "label": "Hello"})
    second = _declaration(extras={"fillcolor": "", "label": "  ", "note": "kept"})

    merged = merge_elements(first, second)

    assert merged.x == 0
    assert merged.extras == {"fillcolor": "red", "label": "Hello", "note": "kept"}
