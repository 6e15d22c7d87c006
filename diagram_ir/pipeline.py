"""End-to-end: raw documents in, resolved diagram model out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .bounding import BoundingBox, bounding_box_of
from .config import DiagramOptions, get_default_options
from .layout import LayoutReport, resolve_layout
from .merge import merge_all
from .model import Element, ElementName, Extent, PageConfig, ResolvedPosition
from .records import elements_from_records, split_documents
from .styles import ColorRegistry, RenderContext, StyleCascade, Stylesheet

logger = logging.getLogger(__name__)


@dataclass
class ResolvedElement:
    """Everything an emitter needs about one element."""

    element: Element
    position: Optional[ResolvedPosition]
    dimension: Optional[Extent]
    style: Dict[str, Any]
    bounding_box: Optional[BoundingBox]

    @property
    def name(self) -> ElementName:
        return self.element.name


@dataclass
class Diagram:
    elements: Dict[ElementName, ResolvedElement]
    page: PageConfig
    stylesheet: Stylesheet
    context: RenderContext
    report: LayoutReport
    bounds: Optional[BoundingBox] = None
    failures: Dict[ElementName, str] = field(default_factory=dict)

    @property
    def colors(self) -> ColorRegistry:
        return self.context.colors

    @property
    def warnings(self) -> List[str]:
        return self.context.warnings

    def __getitem__(self, name: ElementName) -> ResolvedElement:
        return self.elements[name]

    def __contains__(self, name: object) -> bool:
        return name in self.elements

    def nodes(self) -> List[ResolvedElement]:
        return [item for item in self.elements.values() if not item.element.is_edge]

    def edges(self) -> List[ResolvedElement]:
        return [item for item in self.elements.values() if item.element.is_edge]


def build_diagram(
    documents: Iterable[Mapping[str, Any]], options: Optional[DiagramOptions] = None
) -> Diagram:
    """Run records through merge, layout and the style cascade.

    With ``options.strict`` (the default) unresolved references raise
    :class:`~diagram_ir.layout.UnresolvedReferenceError`; otherwise the
    failing elements are reported in :attr:`Diagram.failures` and keep no
    geometry.
    """

    options = options or get_default_options()
    element_records, style_documents = split_documents(documents)

    stylesheet = Stylesheet.from_documents(style_documents)
    elements = merge_all(elements_from_records(element_records))
    report = resolve_layout(elements, stylesheet.page.scale, options)

    context = RenderContext()
    cascade = StyleCascade(stylesheet, options)
    resolved: Dict[ElementName, ResolvedElement] = {}
    for name, element in elements.items():
        resolved[name] = ResolvedElement(
            element=element,
            position=element.position,
            dimension=element.dimension,
            style=cascade.resolve_element(element, context),
            bounding_box=BoundingBox.from_element(element),
        )

    try:
        bounds: Optional[BoundingBox] = bounding_box_of(elements.values())
    except ValueError:
        logger.info("No element has a computable bounding box")
        bounds = None

    logger.info(
        "Built diagram: %d element(s), %d colour(s), %d warning(s), %d failure(s)",
        len(resolved),
        len(context.colors),
        len(context.warnings),
        len(report.failures),
    )
    return Diagram(
        elements=resolved,
        page=stylesheet.page,
        stylesheet=stylesheet,
        context=context,
        report=report,
        bounds=bounds,
        failures=dict(report.failures),
    )
