"""Stylesheet assembled from ``type: style`` and ``type: page`` documents.

Layout of the style table::

    style name -> element category -> sub-category -> namespace -> attribute

``base`` is always consulted first. Documents are merged in declaration
order, later values replacing earlier ones at the leaf level.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..model import PageConfig

logger = logging.getLogger(__name__)

BASE_STYLE = "base"

_DELIMITERS_RE = re.compile(r"[,|&]+")
_STYLE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9 ]*$")

_ELEMENT_DOCUMENT_TYPES = ("node", "edge")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new mapping with ``override`` merged into ``base`` key by key.

    Nested mappings are merged recursively; any other value in ``override``
    replaces the one in ``base``. Neither argument is modified.
    """

    merged: Dict[str, Any] = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def normalize_style_names(names: Union[None, str, Sequence[str]]) -> List[str]:
    """Turn ``"bold, red | wide"`` (or a list of such strings) into a style stack.

    Invalid names are dropped. The stack always starts with ``base``.
    """

    if isinstance(names, str):
        names = [names]
    stack: List[str] = []
    for item in names or ():
        if not isinstance(item, str):
            continue
        for part in _DELIMITERS_RE.split(item):
            part = part.strip()
            if part and _STYLE_NAME_RE.match(part):
                stack.append(part)
    if not stack or stack[0] != BASE_STYLE:
        stack.insert(0, BASE_STYLE)
    return stack


class Stylesheet:
    """Read-only view over merged style and page documents."""

    def __init__(
        self,
        styles: Optional[Mapping[str, Mapping[str, Any]]] = None,
        page: Optional[Mapping[str, Any]] = None,
    ):
        self._styles: Dict[str, Dict[str, Any]] = {
            name: deep_merge({}, data) for name, data in (styles or {}).items()
        }
        self._page: Dict[str, Any] = deep_merge({}, page or {})
        self.page = PageConfig.from_mapping(self._page)

    @classmethod
    def from_documents(cls, documents: Iterable[Mapping[str, Any]]) -> "Stylesheet":
        styles: Dict[str, Dict[str, Any]] = {}
        page: Dict[str, Any] = {}
        for document in documents:
            if not document:
                continue
            kind = str(document.get("type") or "").strip().lower()
            body = {key: value for key, value in document.items() if key not in ("type", "name")}
            if kind == "page":
                page = deep_merge(page, body)
                logger.debug("Merged page document: %s", sorted(body))
            elif kind == "style":
                name = str(document.get("name") or BASE_STYLE).strip() or BASE_STYLE
                if name not in styles and not _STYLE_NAME_RE.match(name):
                    logger.warning(
                        "Style name %r can never be requested; names start with a letter "
                        "and contain only letters, digits and spaces",
                        name,
                    )
                styles[name] = deep_merge(styles.get(name, {}), body)
                logger.debug("Merged style document '%s'", name)
            elif kind in _ELEMENT_DOCUMENT_TYPES:
                continue
            else:
                logger.warning("Skipping document of unknown type %r", document.get("type"))
        logger.info("Stylesheet with %d style(s): %s", len(styles), ", ".join(styles) or "-")
        return cls(styles, page)

    @property
    def style_names(self) -> List[str]:
        return list(self._styles)

    def __contains__(self, style: object) -> bool:
        return style in self._styles

    def get(self, style: str, category: str, sub_category: str, namespace: str) -> Dict[str, Any]:
        """Attributes of one layer, as a fresh dict; empty when undefined."""

        node: Any = self._styles.get(style)
        for key in (category, sub_category, namespace):
            if not isinstance(node, Mapping):
                return {}
            node = node.get(key)
        if not isinstance(node, Mapping):
            return {}
        return copy.deepcopy(dict(node))

    def page_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._page)

    def as_dict(self) -> Dict[str, Any]:
        return {"page": self.page_dict(), "style": copy.deepcopy(self._styles)}
