from .model import (
    Coordinates,
    Element,
    Extent,
    PageConfig,
    RecordError,
    Reference,
    ScaleConfig,
    SymbolicPosition,
    Waypoint,
)
from .config import DiagramOptions, get_default_options, set_default_options
from .anchors import Anchor, direction_vector, element_anchor, resolve_anchor
from .records import DocumentReader, element_from_record, elements_from_records, split_documents
from .merge import merge_all, merge_elements
from .bounding import BoundingBox, bounding_box_of
from .layout import (
    CyclicDependencyError,
    DimensionResult,
    LayoutReport,
    PositionResult,
    ResultKind,
    UnresolvedReferenceError,
    resolve_dimension,
    resolve_edge,
    resolve_layout,
    resolve_position,
    resolve_reference,
)
from .styles import (
    ColorRegistry,
    RenderContext,
    StyleCascade,
    Stylesheet,
    normalize_style_names,
    parse_attributes,
)
from .pipeline import Diagram, ResolvedElement, build_diagram

__all__ = [
    'Coordinates',
    'Element',
    'Extent',
    'PageConfig',
    'RecordError',
    'Reference',
    'ScaleConfig',
    'SymbolicPosition',
    'Waypoint',
    'DiagramOptions',
    'get_default_options',
    'set_default_options',
    'Anchor',
    'direction_vector',
    'element_anchor',
    'resolve_anchor',
    'DocumentReader',
    'element_from_record',
    'elements_from_records',
    'split_documents',
    'merge_all',
    'merge_elements',
    'BoundingBox',
    'bounding_box_of',
    'CyclicDependencyError',
    'DimensionResult',
    'LayoutReport',
    'PositionResult',
    'ResultKind',
    'UnresolvedReferenceError',
    'resolve_dimension',
    'resolve_edge',
    'resolve_layout',
    'resolve_position',
    'resolve_reference',
    'ColorRegistry',
    'RenderContext',
    'StyleCascade',
    'Stylesheet',
    'normalize_style_names',
    'parse_attributes',
    'Diagram',
    'ResolvedElement',
    'build_diagram',
]
