"""Coordinate resolution for a single element."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Tuple

from ..anchors import element_anchor, resolve_anchor
from ..model import Coordinates, Element, ElementName, Point2D, Reference, ScaleConfig, SymbolicPosition
from .types import PositionResult, ResultKind

logger = logging.getLogger(__name__)

Registry = Mapping[ElementName, Element]


def _number(value: Optional[float]) -> float:
    return 0.0 if value is None else float(value)


def resolve_reference(
    registry: Registry,
    reference: Reference,
    offset: Point2D,
    scale: ScaleConfig,
) -> PositionResult:
    """Resolve ``reference`` to a point, shifted by an unscaled ``offset``.

    The scaled point is authoritative; the unscaled value is derived from it
    by dividing by the position factor.
    """

    dx, dy = offset
    offset_scaled = (dx * scale.position_x, dy * scale.position_y)

    target = registry.get(reference.element)
    if target is None:
        return PositionResult.failure(f"Reference element '{reference.element}' not found")
    if target.is_edge:
        return PositionResult.failure(
            f"Reference element '{reference.element}' is an edge and has no position"
        )

    position = target.position
    if position is None:
        return PositionResult.named(
            reference,
            offset,
            offset_scaled,
            deferred=True,
            message=f"position of '{reference.element}' is not resolved yet",
        )
    if isinstance(position, SymbolicPosition):
        # the target itself is placed by the backend, so is anything relative to it
        return PositionResult.named(reference, offset, offset_scaled, deferred=False)

    own = element_anchor(target.anchor)
    if reference.anchor is None:
        point = position.scaled
    else:
        wanted = resolve_anchor(reference.anchor)
        if wanted is None or own is None:
            symbolic = reference if wanted is None else Reference(reference.element, wanted.name)
            logger.debug("Passing anchor reference %s through to the backend", symbolic)
            return PositionResult.named(
                symbolic,
                offset,
                offset_scaled,
                deferred=False,
                message=f"anchor '{reference}' is resolved by the backend",
            )
        if wanted.name == own.name:
            point = position.scaled
        else:
            extent = target.dimension
            if extent is None:
                return PositionResult.named(
                    reference,
                    offset,
                    offset_scaled,
                    deferred=True,
                    message=f"size of '{reference.element}' is not resolved yet",
                )
            half_w = extent.w_scaled / 2.0
            half_h = extent.h_scaled / 2.0
            center_x = position.x_scaled - own.vector[0] * half_w
            center_y = position.y_scaled - own.vector[1] * half_h
            point = (center_x + wanted.vector[0] * half_w, center_y + wanted.vector[1] * half_h)

    coordinates = Coordinates.from_scaled(point[0] + offset_scaled[0], point[1] + offset_scaled[1], scale)
    return PositionResult.at(coordinates, reference)


def _axis_reference(
    registry: Registry,
    reference: Reference,
    offset: Point2D,
    scale: ScaleConfig,
    field_name: str,
) -> Tuple[Optional[Coordinates], Optional[PositionResult]]:
    result = resolve_reference(registry, reference, offset, scale)
    if result.kind is ResultKind.COORDINATES:
        return result.coordinates, None
    if result.is_symbolic:
        return None, PositionResult.failure(
            f"{field_name} '{reference}' has no geometric anchor to project onto one axis"
        )
    return None, result


def resolve_position(element: Element, registry: Registry, scale: Optional[ScaleConfig] = None) -> PositionResult:
    """Resolve the position of ``element`` against already placed elements.

    Precedence: explicit ``x``/``y``; a verbatim ``at`` position; ``position_of``;
    ``x_of``/``y_of``.
    Without any placement field the result is ``NOT_COMPUTED``.
    """

    scale = scale or ScaleConfig()

    if element.x is not None and element.y is not None:
        return PositionResult.at(Coordinates.from_unscaled(float(element.x), float(element.y), scale))

    if element.at:
        # handed to the backend verbatim, e.g. "n1.north" or "$(a)!0.5!(b)$"
        return PositionResult.named(Reference(element.at), (0.0, 0.0), (0.0, 0.0), deferred=False)

    adjust_x = _number(element.adjust_x)
    adjust_y = _number(element.adjust_y)

    if element.position_of is not None:
        return resolve_reference(registry, element.position_of, (adjust_x, adjust_y), scale)

    if element.x_of is None and element.y_of is None:
        return PositionResult.not_computed()

    literal_x = _number(element.x)
    literal_y = _number(element.y)
    x_scaled, x_unscaled = literal_x * scale.position_x, literal_x
    y_scaled, y_unscaled = literal_y * scale.position_y, literal_y

    if element.x_of is not None:
        coords, problem = _axis_reference(registry, element.x_of, (adjust_x, 0.0), scale, "x_of")
        if problem is not None:
            return problem
        x_scaled, x_unscaled = coords.x_scaled, coords.x_unscaled

    if element.y_of is not None:
        coords, problem = _axis_reference(registry, element.y_of, (0.0, adjust_y), scale, "y_of")
        if problem is not None:
            return problem
        y_scaled, y_unscaled = coords.y_scaled, coords.y_unscaled

    return PositionResult.at(Coordinates(x_scaled, y_scaled, x_unscaled, y_unscaled))
