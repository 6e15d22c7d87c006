"""Width/height resolution for a single element."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Tuple, Union

from ..model import Element, ElementName, Extent, Reference, ScaleConfig
from .position import resolve_reference
from .types import DimensionResult, ResultKind

logger = logging.getLogger(__name__)

Registry = Mapping[ElementName, Element]
AxisValue = Tuple[float, float]  # (scaled, unscaled)

DEFAULT_SIZE = 1.0

_AXES = {
    "w": ("size_w", 0, "w_unscaled"),
    "h": ("size_h", 1, "h_unscaled"),
}


def _span(
    element: Element,
    registry: Registry,
    scale: ScaleConfig,
    axis: str,
    start: Reference,
    stop: Reference,
) -> Union[Optional[float], DimensionResult]:
    """Scaled distance between two referenced points along ``axis``."""

    _, coord_index, _ = _AXES[axis]
    points = []
    for reference in (start, stop):
        result = resolve_reference(registry, reference, (0.0, 0.0), scale)
        if result.kind is ResultKind.FAILURE:
            return DimensionResult.failure(result.message or f"cannot resolve '{reference}'")
        if result.is_deferred:
            return DimensionResult.deferred(reference, result.message)
        if result.is_symbolic:
            logger.warning(
                "Element '%s': %s_from/%s_to endpoint '%s' has no coordinates; using default size",
                element.name,
                axis,
                axis,
                reference,
            )
            return None
        points.append(result.coordinates.scaled[coord_index])
    return abs(points[1] - points[0])


def _resolve_axis(
    element: Element, registry: Registry, scale: ScaleConfig, axis: str
) -> Union[AxisValue, DimensionResult]:
    factor_attr, _, unscaled_attr = _AXES[axis]
    factor = getattr(scale, factor_attr)
    offset = getattr(element, f"{axis}_offset")
    offset = 0.0 if offset is None else float(offset)

    literal = getattr(element, axis)
    if literal is not None:
        unscaled = float(literal)
        return unscaled * factor, unscaled

    same_axis = getattr(element, f"{axis}_of")
    if same_axis is not None:
        target = registry.get(same_axis.element)
        if target is None:
            return DimensionResult.failure(f"Reference element '{same_axis.element}' not found")
        if target.is_edge:
            return DimensionResult.failure(f"Reference element '{same_axis.element}' is an edge and has no size")
        if target.dimension is None:
            return DimensionResult.deferred(same_axis, f"size of '{same_axis.element}' is not resolved yet")
        unscaled = getattr(target.dimension, unscaled_attr) + offset
        return unscaled * factor, unscaled

    start = getattr(element, f"{axis}_from")
    stop = getattr(element, f"{axis}_to")
    if start is not None and stop is not None:
        span = _span(element, registry, scale, axis, start, stop)
        if isinstance(span, DimensionResult):
            return span
        if span is not None:
            scaled = span + offset * factor
            return scaled, scaled / factor
    elif start is not None or stop is not None:
        logger.warning(
            "Element '%s' sets only one of %s_from/%s_to; using default size", element.name, axis, axis
        )

    return DEFAULT_SIZE * factor, DEFAULT_SIZE


def resolve_dimension(
    element: Element, registry: Registry, scale: Optional[ScaleConfig] = None
) -> DimensionResult:
    """Resolve width and height of ``element``.

    Per axis: literal value, same-axis reference plus offset, span between two
    referenced points plus offset, else a default of one unit.
    """

    scale = scale or ScaleConfig()
    width = _resolve_axis(element, registry, scale, "w")
    height = _resolve_axis(element, registry, scale, "h")

    problems = [axis for axis in (width, height) if isinstance(axis, DimensionResult)]
    failures = [p for p in problems if p.kind is ResultKind.FAILURE]
    if failures:
        return DimensionResult.failure("; ".join(p.message or "unresolved size" for p in failures))
    if problems:
        return problems[0]

    (w_scaled, w_unscaled), (h_scaled, h_unscaled) = width, height
    return DimensionResult.sized(Extent(w_scaled, h_scaled, w_unscaled, h_unscaled))
