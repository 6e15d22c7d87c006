"""Anchor names and the offset vectors they stand for.

An anchor vector is expressed in half-extents of an element's box: ``(1, 0)``
is the middle of the east edge, ``(1, 1)`` the north-east corner.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

Vector = Tuple[float, float]

CENTER = "center"

CANONICAL_VECTORS: Dict[str, Vector] = {
    "center": (0.0, 0.0),
    "north": (0.0, 1.0),
    "south": (0.0, -1.0),
    "east": (1.0, 0.0),
    "west": (-1.0, 0.0),
    "north east": (1.0, 1.0),
    "north west": (-1.0, 1.0),
    "south east": (1.0, -1.0),
    "south west": (-1.0, -1.0),
}

_ALIASES: Dict[str, str] = {
    "c": "center",
    "centre": "center",
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
    "ne": "north east",
    "nw": "north west",
    "se": "south east",
    "sw": "south west",
    "northeast": "north east",
    "northwest": "north west",
    "southeast": "south east",
    "southwest": "south west",
    # UI directions
    "u": "north",
    "d": "south",
    "r": "east",
    "l": "west",
    "ur": "north east",
    "ul": "north west",
    "dr": "south east",
    "dl": "south west",
    "up": "north",
    "down": "south",
    "right": "east",
    "left": "west",
    "up right": "north east",
    "up left": "north west",
    "down right": "south east",
    "down left": "south west",
}

_SEPARATORS_RE = re.compile(r"[\s_\-]+")


@dataclass(frozen=True)
class Anchor:
    name: str
    vector: Vector

    @property
    def is_center(self) -> bool:
        return self.name == CENTER


def canonical_anchor_name(text: Optional[str]) -> Optional[str]:
    """Return the canonical anchor name for *text*, or ``None`` if unknown."""

    if not isinstance(text, str):
        return None
    key = _SEPARATORS_RE.sub(" ", text.strip().lower())
    if not key:
        return None
    if key in CANONICAL_VECTORS:
        return key
    if key in _ALIASES:
        return _ALIASES[key]
    joined = key.replace(" ", "")
    return _ALIASES.get(joined)


def resolve_anchor(text: Optional[str]) -> Optional[Anchor]:
    """Resolve *text* to an :class:`Anchor`.

    Unknown names return ``None``; the caller keeps them as symbolic anchors
    for backends that resolve anchors natively.
    """

    name = canonical_anchor_name(text)
    if name is None:
        return None
    return Anchor(name, CANONICAL_VECTORS[name])


def element_anchor(text: Optional[str]) -> Optional[Anchor]:
    """Anchor of an element's own reference point; absent means center."""

    if text is None or (isinstance(text, str) and not text.strip()):
        return Anchor(CENTER, CANONICAL_VECTORS[CENTER])
    return resolve_anchor(text)


def direction_vector(text: Optional[str]) -> Vector:
    """Unit direction for *text*; zero for center or unknown names."""

    anchor = resolve_anchor(text)
    if anchor is None:
        return (0.0, 0.0)
    dx, dy = anchor.vector
    norm = math.hypot(dx, dy)
    if norm <= 1e-12:
        return (0.0, 0.0)
    return (dx / norm, dy / norm)
