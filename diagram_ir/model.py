"""Core data structures shared by the layout and style engines."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

ElementName = str
Point2D = Tuple[float, float]

NODE = "node"
EDGE = "edge"
ELEMENT_KINDS = (NODE, EDGE)


class RecordError(ValueError):
    """Raised when an element record cannot be turned into an element."""

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


def is_blank(value: Any) -> bool:
    """``None`` and whitespace-only strings count as absent record values."""

    return value is None or (isinstance(value, str) and not value.strip())


def _factor(value: Any, label: str) -> float:
    try:
        factor = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"scale factor {label} must be numeric, got {value!r}") from None
    if factor == 0.0 or not math.isfinite(factor):
        raise ValueError(f"scale factor {label} must be finite and nonzero, got {value!r}")
    return factor


@dataclass(frozen=True)
class ScaleConfig:
    """Multiplicative factors from author units to rendering units."""

    position_x: float = 1.0
    position_y: float = 1.0
    size_w: float = 1.0
    size_h: float = 1.0

    def __post_init__(self) -> None:
        for attr in ("position_x", "position_y", "size_w", "size_h"):
            object.__setattr__(self, attr, _factor(getattr(self, attr), attr.replace("_", ".")))

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ScaleConfig":
        data = data or {}
        position = data.get("position") or {}
        size = data.get("size") or {}
        return cls(
            position_x=position.get("x", 1.0),
            position_y=position.get("y", 1.0),
            size_w=size.get("w", 1.0),
            size_h=size.get("h", 1.0),
        )

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "position": {"x": self.position_x, "y": self.position_y},
            "size": {"w": self.size_w, "h": self.size_h},
        }


@dataclass(frozen=True)
class PageConfig:
    scale: ScaleConfig = field(default_factory=ScaleConfig)
    margin_w: float = 1.0
    margin_h: float = 1.0
    grid: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "PageConfig":
        data = data or {}
        margin = data.get("margin") or {}
        grid = data.get("grid")
        return cls(
            scale=ScaleConfig.from_mapping(data.get("scale")),
            margin_w=float(margin.get("w", 1.0)),
            margin_h=float(margin.get("h", 1.0)),
            grid=float(grid) if grid is not None else None,
        )

    def as_dict(self) -> Dict[str, Any]:
        page: Dict[str, Any] = {
            "scale": self.scale.as_dict(),
            "margin": {"w": self.margin_w, "h": self.margin_h},
        }
        if self.grid is not None:
            page["grid"] = self.grid
        return page


@dataclass(frozen=True)
class Reference:
    """A reference to another element, optionally at one of its anchors."""

    element: ElementName
    anchor: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Reference":
        if not isinstance(text, str):
            raise RecordError(f"reference must be a string, got {text!r}")
        name, dot, anchor = text.strip().partition(".")
        name = name.strip()
        if not name:
            raise RecordError(f"reference {text!r} has no element name")
        anchor = anchor.strip()
        return cls(name, anchor if dot and anchor else None)

    def __str__(self) -> str:
        if self.anchor:
            return f"{self.element}.{self.anchor}"
        return self.element


@dataclass(frozen=True)
class Coordinates:
    """A point in both unit systems; ``scaled == unscaled * factor``."""

    x_scaled: float
    y_scaled: float
    x_unscaled: float
    y_unscaled: float

    @classmethod
    def from_unscaled(cls, x: float, y: float, scale: ScaleConfig) -> "Coordinates":
        return cls(x * scale.position_x, y * scale.position_y, float(x), float(y))

    @classmethod
    def from_scaled(cls, x_scaled: float, y_scaled: float, scale: ScaleConfig) -> "Coordinates":
        return cls(
            float(x_scaled),
            float(y_scaled),
            x_scaled / scale.position_x,
            y_scaled / scale.position_y,
        )

    @property
    def scaled(self) -> Point2D:
        return (self.x_scaled, self.y_scaled)

    @property
    def unscaled(self) -> Point2D:
        return (self.x_unscaled, self.y_unscaled)


@dataclass(frozen=True)
class Extent:
    """Width and height in both unit systems."""

    w_scaled: float
    h_scaled: float
    w_unscaled: float
    h_unscaled: float

    @property
    def scaled(self) -> Tuple[float, float]:
        return (self.w_scaled, self.h_scaled)

    @property
    def unscaled(self) -> Tuple[float, float]:
        return (self.w_unscaled, self.h_unscaled)


@dataclass(frozen=True)
class SymbolicPosition:
    """Position handed to the backend as ``reference`` plus a shift."""

    reference: Reference
    offset_unscaled: Point2D = (0.0, 0.0)
    offset_scaled: Point2D = (0.0, 0.0)

    @property
    def at(self) -> str:
        return str(self.reference)


ResolvedPosition = Union[Coordinates, SymbolicPosition]

WAYPOINT_KINDS = ("s", "e", "a")


@dataclass(frozen=True)
class Waypoint:
    """Intermediate edge point in unscaled units.

    ``kind`` is ``s`` (relative to the start point), ``e`` (relative to the end
    point) or ``a`` (absolute). Control points shape a curve without being
    passed through.
    """

    kind: str
    x: float
    y: float
    control: bool = False


@dataclass(frozen=True)
class RoutePoint:
    coordinates: Coordinates
    control: bool = False


# Declarative fields copied from a later declaration when it defines them.
PLACEMENT_FIELDS = ("x", "y", "at", "position_of", "x_of", "y_of", "adjust_x", "adjust_y")
SIZING_FIELDS = ("w", "h", "w_of", "h_of", "w_from", "h_from", "w_to", "h_to", "w_offset", "h_offset")
MERGE_FIELDS = PLACEMENT_FIELDS + SIZING_FIELDS + ("kind", "anchor", "style", "start", "end", "waypoints")


@dataclass
class Element:
    """A node or edge record, plus its resolved geometry once laid out."""

    name: ElementName
    kind: Optional[str] = None

    x: Optional[float] = None
    y: Optional[float] = None
    at: Optional[str] = None
    position_of: Optional[Reference] = None
    x_of: Optional[Reference] = None
    y_of: Optional[Reference] = None
    adjust_x: Optional[float] = None
    adjust_y: Optional[float] = None

    w: Optional[float] = None
    h: Optional[float] = None
    w_of: Optional[Reference] = None
    h_of: Optional[Reference] = None
    w_from: Optional[Reference] = None
    h_from: Optional[Reference] = None
    w_to: Optional[Reference] = None
    h_to: Optional[Reference] = None
    w_offset: Optional[float] = None
    h_offset: Optional[float] = None

    anchor: Optional[str] = None
    style: Optional[str] = None
    attributes: Optional[str] = None

    start: Optional[Reference] = None
    end: Optional[Reference] = None
    waypoints: Optional[Tuple[Waypoint, ...]] = None

    extras: Dict[str, Any] = field(default_factory=dict)
    records: List[Dict[str, Any]] = field(default_factory=list)

    position: Optional[ResolvedPosition] = None
    dimension: Optional[Extent] = None
    endpoints: Optional[Tuple[ResolvedPosition, ResolvedPosition]] = None
    route: Optional[List[RoutePoint]] = None

    @property
    def element_kind(self) -> str:
        return self.kind or NODE

    @property
    def is_edge(self) -> bool:
        return self.element_kind == EDGE

    @property
    def has_coordinates(self) -> bool:
        return isinstance(self.position, Coordinates)

    @property
    def is_resolved(self) -> bool:
        if self.is_edge:
            return self.endpoints is not None
        return self.position is not None and self.dimension is not None
