"""Final visual attributes of an element.

Two override axes are combined: the style stack (``base`` first, then the
requested names) and the namespace list (generic to backend specific). The
namespace axis is the outer loop, so a key set in a more specific namespace
wins regardless of which style defined it; within a namespace, later styles
win. Element colour fields and the raw attribute string are applied on top.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config import DiagramOptions, get_default_options
from ..logging_utils import apply_debug_logging
from ..model import Element
from .attributes import parse_attributes
from .colors import RenderContext, is_hex_color
from .stylesheet import Stylesheet, deep_merge, normalize_style_names

logger = logging.getLogger(__name__)

Layer = Tuple[str, str, str]

# record field -> attribute it sets; later entries win
COLOR_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("fillcolor", "fill"),
    ("color", "draw"),
    ("edge_color", "draw"),
    ("textcolor", "text"),
)


def replace_hex_colors(attributes: Dict[str, Any], context: RenderContext) -> Dict[str, Any]:
    """Swap hex colour literals for registered identifiers, recursing into mappings."""

    replaced: Dict[str, Any] = {}
    for key, value in attributes.items():
        if isinstance(value, dict):
            replaced[key] = replace_hex_colors(value, context)
        elif is_hex_color(value):
            replaced[key] = context.colors.register(value)
        else:
            replaced[key] = value
    return replaced


class StyleCascade:
    def __init__(self, stylesheet: Stylesheet, options: Optional[DiagramOptions] = None):
        self.stylesheet = stylesheet
        self.options = options or get_default_options()

    def layers(
        self,
        category: str,
        sub_category: str,
        style: Any = None,
        general: Optional[str] = None,
    ) -> List[Layer]:
        """``(namespace, style, sub-category)`` layers, lowest precedence first."""

        stack = normalize_style_names(style)
        subs = [sub_category]
        if general is not None and general != sub_category:
            subs = [general, sub_category]
        return [
            (namespace, style_name, sub)
            for namespace in self.options.namespaces
            for style_name in stack
            for sub in subs
        ]

    def compose(
        self,
        category: str,
        sub_category: str,
        style: Any = None,
        general: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Cascaded attributes before colour substitution."""

        result: Dict[str, Any] = {}
        for namespace, style_name, sub in self.layers(category, sub_category, style, general):
            layer = self.stylesheet.get(style_name, category, sub, namespace)
            if layer:
                result = deep_merge(result, layer)
        return result

    def resolve(
        self,
        category: str,
        sub_category: str,
        style: Any,
        context: RenderContext,
        general: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Cascaded attributes with hex colours registered in ``context``."""

        return replace_hex_colors(self.compose(category, sub_category, style, general), context)

    def resolve_element(self, element: Element, context: RenderContext) -> Dict[str, Any]:
        """Cascade, then element colour fields, then the raw attribute string."""

        attributes = self.compose(element.element_kind, self.options.object_sub_category, element.style)

        for field_name, key in COLOR_FIELDS:
            value = element.extras.get(field_name)
            if isinstance(value, str) and value.strip():
                attributes[key] = value.strip()

        local = parse_attributes(
            element.attributes, self.options.reserved_keys, context, owner=element.name
        )
        attributes.update(local)
        return replace_hex_colors(attributes, context)


apply_debug_logging(globals(), logger=logger)
