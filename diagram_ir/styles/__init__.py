"""Style cascade: stylesheet, attribute parsing and colour registry."""

from .attributes import format_attributes, parse_attributes, split_fragments
from .cascade import StyleCascade, replace_hex_colors
from .colors import ColorRegistry, RenderContext, is_hex_color, normalize_hex
from .stylesheet import BASE_STYLE, Stylesheet, deep_merge, normalize_style_names

__all__ = [
    "format_attributes",
    "parse_attributes",
    "split_fragments",
    "StyleCascade",
    "replace_hex_colors",
    "ColorRegistry",
    "RenderContext",
    "is_hex_color",
    "normalize_hex",
    "BASE_STYLE",
    "Stylesheet",
    "deep_merge",
    "normalize_style_names",
]
