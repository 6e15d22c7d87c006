"""Result variants produced by the position and dimension resolvers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..model import Coordinates, ElementName, Extent, Point2D, Reference, SymbolicPosition


class ResultKind(Enum):
    COORDINATES = "coordinates"
    NAMED = "named"
    FAILURE = "failure"
    NOT_COMPUTED = "not_computed"


class UnresolvedReferenceError(LookupError):
    """Raised when one or more elements reference elements that do not exist."""

    def __init__(self, failures: Dict[ElementName, str]):
        details = "; ".join(f"{name}: {message}" for name, message in failures.items())
        super().__init__(f"unresolved references: {details}")
        self.failures = dict(failures)


class CyclicDependencyError(RuntimeError):
    """Raised when deferred elements never become resolvable."""

    def __init__(self, pending: Sequence[ElementName], passes: int):
        names = ", ".join(pending)
        super().__init__(f"layout did not converge after {passes} pass(es); stuck elements: {names}")
        self.pending = list(pending)
        self.passes = passes


@dataclass(frozen=True)
class PositionResult:
    """Outcome of resolving one element position.

    ``NAMED`` results are either *deferred* (retry once more elements are
    resolved) or final symbolic positions carrying the raw reference.
    """

    kind: ResultKind
    coordinates: Optional[Coordinates] = None
    reference: Optional[Reference] = None
    offset_unscaled: Point2D = (0.0, 0.0)
    offset_scaled: Point2D = (0.0, 0.0)
    deferred: bool = False
    message: Optional[str] = None

    @classmethod
    def at(cls, coordinates: Coordinates, reference: Optional[Reference] = None) -> "PositionResult":
        return cls(ResultKind.COORDINATES, coordinates=coordinates, reference=reference)

    @classmethod
    def named(
        cls,
        reference: Reference,
        offset_unscaled: Point2D,
        offset_scaled: Point2D,
        *,
        deferred: bool,
        message: Optional[str] = None,
    ) -> "PositionResult":
        return cls(
            ResultKind.NAMED,
            reference=reference,
            offset_unscaled=offset_unscaled,
            offset_scaled=offset_scaled,
            deferred=deferred,
            message=message,
        )

    @classmethod
    def failure(cls, message: str) -> "PositionResult":
        return cls(ResultKind.FAILURE, message=message)

    @classmethod
    def not_computed(cls) -> "PositionResult":
        return cls(ResultKind.NOT_COMPUTED)

    @property
    def success(self) -> bool:
        return self.kind in (ResultKind.COORDINATES, ResultKind.NAMED)

    @property
    def is_deferred(self) -> bool:
        return self.kind is ResultKind.NAMED and self.deferred

    @property
    def is_symbolic(self) -> bool:
        return self.kind is ResultKind.NAMED and not self.deferred

    def as_symbolic(self) -> SymbolicPosition:
        if self.reference is None:
            raise ValueError("position result carries no reference")
        return SymbolicPosition(self.reference, self.offset_unscaled, self.offset_scaled)


@dataclass(frozen=True)
class DimensionResult:
    kind: ResultKind
    extent: Optional[Extent] = None
    reference: Optional[Reference] = None
    message: Optional[str] = None

    @classmethod
    def sized(cls, extent: Extent) -> "DimensionResult":
        return cls(ResultKind.COORDINATES, extent=extent)

    @classmethod
    def deferred(cls, reference: Reference, message: Optional[str] = None) -> "DimensionResult":
        return cls(ResultKind.NAMED, reference=reference, message=message)

    @classmethod
    def failure(cls, message: str) -> "DimensionResult":
        return cls(ResultKind.FAILURE, message=message)

    @property
    def success(self) -> bool:
        return self.kind is ResultKind.COORDINATES

    @property
    def is_deferred(self) -> bool:
        return self.kind is ResultKind.NAMED


@dataclass
class LayoutReport:
    """Summary of one layout run."""

    passes: int = 0
    resolved: List[ElementName] = field(default_factory=list)
    symbolic: List[ElementName] = field(default_factory=list)
    defaulted: List[ElementName] = field(default_factory=list)
    failures: Dict[ElementName, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failures
