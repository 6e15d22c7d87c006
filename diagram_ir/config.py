"""Options shared by the layout driver, the style cascade and the pipeline."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

# Most generic first; later namespaces override earlier ones.
DEFAULT_NAMESPACES: Tuple[str, ...] = ("common", "vector", "latex", "tikz")

# Geometry is owned by the layout engine, never by ad hoc attribute strings.
RESERVED_ATTRIBUTE_KEYS: FrozenSet[str] = frozenset(
    {
        "width",
        "height",
        "minimum width",
        "minimum height",
        "minimum size",
        "anchor",
        "shape",
    }
)


@dataclass
class DiagramOptions:
    """Knobs for one render pass."""

    max_passes: Optional[int] = None
    strict: bool = True
    default_position: Tuple[float, float] = (0.0, 0.0)
    namespaces: Tuple[str, ...] = DEFAULT_NAMESPACES
    reserved_keys: FrozenSet[str] = field(default_factory=lambda: RESERVED_ATTRIBUTE_KEYS)
    object_sub_category: str = "object"

    def __post_init__(self) -> None:
        if self.max_passes is not None and self.max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {self.max_passes}")
        if not self.namespaces:
            raise ValueError("at least one namespace is required")
        self.namespaces = tuple(self.namespaces)
        self.reserved_keys = frozenset(key.strip().lower() for key in self.reserved_keys)


_DEFAULT_OPTIONS = DiagramOptions()


def get_default_options() -> DiagramOptions:
    return copy.deepcopy(_DEFAULT_OPTIONS)


def set_default_options(options: DiagramOptions) -> None:
    global _DEFAULT_OPTIONS
    _DEFAULT_OPTIONS = copy.deepcopy(options)
