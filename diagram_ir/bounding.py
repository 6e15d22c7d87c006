"""Axis-aligned boxes derived from resolved elements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from .anchors import direction_vector, element_anchor
from .model import Coordinates, Element, Point2D

logger = logging.getLogger(__name__)

EPS = 1e-12

Direction = Union[str, Sequence[float]]


@dataclass(frozen=True)
class BoundingBox:
    left: float
    bottom: float
    right: float
    top: float

    def __post_init__(self) -> None:
        left, right = sorted((float(self.left), float(self.right)))
        bottom, top = sorted((float(self.bottom), float(self.top)))
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)
        object.__setattr__(self, "bottom", bottom)
        object.__setattr__(self, "top", top)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    @property
    def center(self) -> Point2D:
        return ((self.left + self.right) / 2.0, (self.bottom + self.top) / 2.0)

    def contains(self, point: Point2D) -> bool:
        x, y = point
        return self.left <= x <= self.right and self.bottom <= y <= self.top

    def overlaps(self, other: "BoundingBox") -> bool:
        return not (
            self.right < other.left
            or other.right < self.left
            or self.top < other.bottom
            or other.top < self.bottom
        )

    def edge_point(self, direction: Direction) -> Point2D:
        """Exit point of a ray cast from the center along ``direction``.

        ``direction`` is an anchor name or a vector. Returns the center when
        the vector is zero or meets no edge.
        """

        if isinstance(direction, str):
            vector = np.asarray(direction_vector(direction), dtype=float)
        else:
            vector = np.asarray(direction, dtype=float)
        center = np.asarray(self.center, dtype=float)
        if vector.shape != (2,) or not np.all(np.isfinite(vector)) or np.hypot(*vector) <= EPS:
            return self.center

        lower = np.array([self.left, self.bottom])
        upper = np.array([self.right, self.top])
        candidates = []
        for axis in (0, 1):
            component = vector[axis]
            if abs(component) <= EPS:
                continue
            bound = upper[axis] if component > 0 else lower[axis]
            t = (bound - center[axis]) / component
            if t < 0:
                continue
            hit = center + t * vector
            other = 1 - axis
            if lower[other] - 1e-9 <= hit[other] <= upper[other] + 1e-9:
                candidates.append((t, hit))
        if not candidates:
            return self.center
        _, nearest = min(candidates, key=lambda item: item[0])
        return (float(nearest[0]), float(nearest[1]))

    @classmethod
    def from_element(cls, element: Element) -> Optional["BoundingBox"]:
        """Box of a placed node, honouring its anchor; ``None`` if not computable."""

        if element.is_edge or not isinstance(element.position, Coordinates) or element.dimension is None:
            return None
        width, height = element.dimension.scaled
        if width <= 0 or height <= 0:
            return None
        anchor = element_anchor(element.anchor)
        if anchor is None:
            return None
        half_w = width / 2.0
        half_h = height / 2.0
        left = element.position.x_scaled - half_w - anchor.vector[0] * half_w
        bottom = element.position.y_scaled - half_h - anchor.vector[1] * half_h
        return cls(left, bottom, left + width, bottom + height)


def bounding_box_of(elements: Iterable[Element]) -> BoundingBox:
    """Smallest box around every element whose own box can be computed."""

    boxes = [box for box in (BoundingBox.from_element(element) for element in elements) if box is not None]
    if not boxes:
        raise ValueError("no element has a computable bounding box")
    corners = np.array([[box.left, box.bottom, box.right, box.top] for box in boxes], dtype=float)
    left, bottom = corners[:, 0].min(), corners[:, 1].min()
    right, top = corners[:, 2].max(), corners[:, 3].max()
    logger.debug("Aggregate bounding box over %d element(s)", len(boxes))
    return BoundingBox(float(left), float(bottom), float(right), float(top))
