import math

import pytest

from diagram_ir import (
    Coordinates,
    DiagramOptions,
    PageConfig,
    RecordError,
    Reference,
    ScaleConfig,
    get_default_options,
    set_default_options,
)


@pytest.mark.parametrize("factor", [0, 0.0, float("nan"), float("inf"), "abc"])
def test_scale_rejects_invalid_factors(factor):
    with pytest.raises(ValueError):
        ScaleConfig(position_x=factor)


def test_scale_from_mapping_defaults_missing_factors():
    scale = ScaleConfig.from_mapping({"position": {"x": 2}, "size": {"h": 0.5}})
    assert scale == ScaleConfig(position_x=2.0, position_y=1.0, size_w=1.0, size_h=0.5)
    assert ScaleConfig.from_mapping(None) == ScaleConfig()


def test_scale_round_trip():
    scale = ScaleConfig(position_x=2.5, position_y=-0.4)
    direct = Coordinates.from_unscaled(7.0, -3.0, scale)
    derived = Coordinates.from_scaled(direct.x_scaled, direct.y_scaled, scale)
    assert math.isclose(derived.x_unscaled, 7.0)
    assert math.isclose(derived.y_unscaled, -3.0)


def test_page_config_from_mapping():
    page = PageConfig.from_mapping({"scale": {"size": {"w": 3}}, "margin": {"w": 2}, "grid": 5})
    assert page.scale.size_w == 3.0
    assert page.margin_w == 2.0
    assert page.margin_h == 1.0
    assert page.grid == 5.0
    assert page.as_dict()["margin"] == {"w": 2.0, "h": 1.0}


def test_reference_parse_splits_on_first_dot():
    assert Reference.parse("n1") == Reference("n1")
    assert Reference.parse("n1.north east") == Reference("n1", "north east")
    assert Reference.parse(" n1. ") == Reference("n1")
    assert str(Reference("n1", "text")) == "n1.text"
    with pytest.raises(RecordError):
        Reference.parse(".north")


def test_default_options_are_copies():
    original = get_default_options()
    try:
        custom = DiagramOptions(strict=False, max_passes=5)
        set_default_options(custom)
        custom.strict = True
        current = get_default_options()
        assert current.strict is False
        assert current.max_passes == 5
        current.max_passes = 9
        assert get_default_options().max_passes == 5
    finally:
        set_default_options(original)


def test_options_validate_and_normalise():
    with pytest.raises(ValueError):
        DiagramOptions(max_passes=0)
    with pytest.raises(ValueError):
        DiagramOptions(namespaces=())
    options = DiagramOptions(namespaces=["common", "tikz"], reserved_keys={" Shape "})
    assert options.namespaces == ("common", "tikz")
    assert options.reserved_keys == frozenset({"shape"})
