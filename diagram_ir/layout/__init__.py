"""Coordinate and dimension resolution."""

from .dimension import DEFAULT_SIZE, resolve_dimension
from .driver import resolve_edge, resolve_layout
from .position import resolve_position, resolve_reference
from .types import (
    CyclicDependencyError,
    DimensionResult,
    LayoutReport,
    PositionResult,
    ResultKind,
    UnresolvedReferenceError,
)

__all__ = [
    "DEFAULT_SIZE",
    "resolve_dimension",
    "resolve_edge",
    "resolve_layout",
    "resolve_position",
    "resolve_reference",
    "CyclicDependencyError",
    "DimensionResult",
    "LayoutReport",
    "PositionResult",
    "ResultKind",
    "UnresolvedReferenceError",
]
