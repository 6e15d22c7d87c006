"""Iterate-to-fixed-point layout over a name -> element mapping."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from ..bounding import BoundingBox
from ..config import DiagramOptions, get_default_options
from ..logging_utils import apply_debug_logging
from ..model import (
    Coordinates,
    Element,
    ElementName,
    Point2D,
    Reference,
    ResolvedPosition,
    RoutePoint,
    ScaleConfig,
    SymbolicPosition,
)
from .dimension import resolve_dimension
from .position import resolve_reference, resolve_position
from .types import CyclicDependencyError, LayoutReport, ResultKind, UnresolvedReferenceError

logger = logging.getLogger(__name__)

_DONE = "done"
_FAILED = "failed"
_PENDING = "pending"


def _default_position(element: Element, options: DiagramOptions, scale: ScaleConfig) -> Coordinates:
    default_x, default_y = options.default_position
    x = float(element.x) if element.x is not None else float(default_x)
    y = float(element.y) if element.y is not None else float(default_y)
    return Coordinates.from_unscaled(x, y, scale)


def _fail(element: Element, report: LayoutReport, message: str) -> None:
    # a failed element keeps no partial geometry
    element.position = None
    element.dimension = None
    report.failures[element.name] = message


def _step(
    element: Element,
    registry: Mapping[ElementName, Element],
    scale: ScaleConfig,
    options: DiagramOptions,
    report: LayoutReport,
    blocked_on: Dict[ElementName, ElementName],
) -> Tuple[str, bool]:
    """Advance one node as far as possible; returns (state, made_progress)."""

    progressed = False

    if element.dimension is None:
        dimension = resolve_dimension(element, registry, scale)
        if dimension.kind is ResultKind.FAILURE:
            _fail(element, report, dimension.message or "size could not be resolved")
            return _FAILED, True
        if dimension.success:
            element.dimension = dimension.extent
            progressed = True
        elif dimension.reference is not None:
            blocked_on[element.name] = dimension.reference.element

    if element.position is None:
        position = resolve_position(element, registry, scale)
        if position.kind is ResultKind.FAILURE:
            _fail(element, report, position.message or "position could not be resolved")
            return _FAILED, True
        if position.kind is ResultKind.COORDINATES:
            element.position = position.coordinates
            progressed = True
        elif position.kind is ResultKind.NOT_COMPUTED:
            element.position = _default_position(element, options, scale)
            report.defaulted.append(element.name)
            progressed = True
        elif position.is_symbolic:
            element.position = position.as_symbolic()
            report.symbolic.append(element.name)
            progressed = True
        else:
            blocked_on[element.name] = position.reference.element

    if element.dimension is not None and element.position is not None:
        blocked_on.pop(element.name, None)
        return _DONE, True
    return _PENDING, progressed


def _center_of(element: Element) -> Optional[Point2D]:
    box = BoundingBox.from_element(element)
    if box is not None:
        return box.center
    if isinstance(element.position, Coordinates):
        return element.position.scaled
    return None


def _endpoint(
    reference: Reference,
    toward: Optional[Point2D],
    registry: Mapping[ElementName, Element],
    scale: ScaleConfig,
) -> Tuple[Optional[ResolvedPosition], Optional[str]]:
    target = registry.get(reference.element)
    if target is None:
        return None, f"Reference element '{reference.element}' not found"
    if target.is_edge:
        return None, f"Reference element '{reference.element}' is an edge and cannot be an endpoint"

    if reference.anchor is not None:
        result = resolve_reference(registry, reference, (0.0, 0.0), scale)
        if result.kind is ResultKind.COORDINATES:
            return result.coordinates, None
        if result.is_symbolic:
            return result.as_symbolic(), None
        return None, result.message or f"endpoint '{reference}' could not be resolved"

    if isinstance(target.position, SymbolicPosition):
        return SymbolicPosition(reference), None
    if not isinstance(target.position, Coordinates):
        return None, f"endpoint '{reference}' has no resolved position"

    box = BoundingBox.from_element(target)
    if box is None or toward is None:
        return target.position, None
    cx, cy = box.center
    x, y = box.edge_point((toward[0] - cx, toward[1] - cy))
    return Coordinates.from_scaled(x, y, scale), None


def _route(
    edge: Element, start: ResolvedPosition, end: ResolvedPosition, scale: ScaleConfig
) -> Tuple[List[RoutePoint], Optional[str]]:
    route: List[RoutePoint] = []
    for waypoint in edge.waypoints or ():
        base = {"s": start, "e": end}.get(waypoint.kind)
        if waypoint.kind == "a":
            origin: Point2D = (0.0, 0.0)
        elif isinstance(base, Coordinates):
            origin = base.unscaled
        else:
            return [], (
                f"waypoint {waypoint.kind}({waypoint.x:g},{waypoint.y:g}) of '{edge.name}' "
                "needs an endpoint with coordinates"
            )
        point = Coordinates.from_unscaled(origin[0] + waypoint.x, origin[1] + waypoint.y, scale)
        route.append(RoutePoint(point, waypoint.control))
    return route, None


def resolve_edge(
    edge: Element, registry: Mapping[ElementName, Element], scale: Optional[ScaleConfig] = None
) -> Optional[str]:
    """Resolve both endpoints of ``edge``; returns an error message on failure.

    An endpoint without an anchor leaves its node's box in the direction of
    the other endpoint. Waypoints are placed relative to the start point, the
    end point or the origin, in unscaled units.
    """

    scale = scale or ScaleConfig()
    if edge.start is None or edge.end is None:
        return f"edge '{edge.name}' needs both start and end"

    start_target = registry.get(edge.start.element)
    end_target = registry.get(edge.end.element)
    start_center = _center_of(start_target) if start_target is not None else None
    end_center = _center_of(end_target) if end_target is not None else None

    start, problem = _endpoint(edge.start, end_center, registry, scale)
    if problem is not None:
        return problem
    end, problem = _endpoint(edge.end, start_center, registry, scale)
    if problem is not None:
        return problem
    route, problem = _route(edge, start, end, scale)
    if problem is not None:
        return problem
    edge.endpoints = (start, end)
    edge.route = route
    return None


def resolve_layout(
    elements: Mapping[ElementName, Element],
    scale: Optional[ScaleConfig] = None,
    options: Optional[DiagramOptions] = None,
) -> LayoutReport:
    """Resolve sizes and positions of every element in ``elements``.

    Nodes are processed in declaration order, pass after pass, until every
    node is placed. Deferred nodes are retried; a pass without progress or
    too many passes raises :class:`CyclicDependencyError`. Edges are resolved
    once all nodes are placed.
    """

    scale = scale or ScaleConfig()
    options = options or get_default_options()
    report = LayoutReport()

    pending: List[Element] = [e for e in elements.values() if not e.is_edge and not e.is_resolved]
    max_passes = options.max_passes or len(pending) + 1
    blocked_on: Dict[ElementName, ElementName] = {}

    while pending:
        if report.passes >= max_passes:
            raise CyclicDependencyError([e.name for e in pending], report.passes)
        report.passes += 1

        progress = False
        still_pending: List[Element] = []
        for element in pending:
            state, progressed = _step(element, elements, scale, options, report, blocked_on)
            progress = progress or progressed
            if state == _DONE:
                report.resolved.append(element.name)
            elif state == _PENDING:
                still_pending.append(element)

        if still_pending and not progress:
            # dependents of failed elements can never resolve
            orphaned = [e for e in still_pending if blocked_on.get(e.name) in report.failures]
            for element in orphaned:
                message = f"Reference element '{blocked_on[element.name]}' could not be resolved"
                _fail(element, report, message)
            if not orphaned:
                raise CyclicDependencyError([e.name for e in still_pending], report.passes)
            still_pending = [e for e in still_pending if e.name not in report.failures]

        logger.info(
            "Layout pass %d: %d resolved, %d pending, %d failed",
            report.passes,
            len(report.resolved),
            len(still_pending),
            len(report.failures),
        )
        pending = still_pending

    for edge in (e for e in elements.values() if e.is_edge and not e.is_resolved):
        problem = resolve_edge(edge, elements, scale)
        if problem is not None:
            report.failures[edge.name] = problem
        else:
            report.resolved.append(edge.name)

    for name, message in report.failures.items():
        logger.error("Element '%s' could not be resolved: %s", name, message)

    if report.failures and options.strict:
        raise UnresolvedReferenceError(report.failures)
    return report


apply_debug_logging(globals(), logger=logger)
