"""Turning raw reader records into :class:`Element` objects.

Reading files is left to a :class:`DocumentReader`; this module only sees the
already-parsed documents, in declaration order.
"""

from __future__ import annotations

import logging
import numbers
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from .model import EDGE, ELEMENT_KINDS, NODE, WAYPOINT_KINDS, Element, RecordError, Reference, Waypoint, is_blank

logger = logging.getLogger(__name__)

STYLE_DOCUMENT_TYPES = ("page", "style")

_NUMBER_FIELDS: Dict[str, Tuple[str, ...]] = {
    "x": ("x",),
    "y": ("y",),
    "adjust_x": ("adjust_x", "x_offset"),
    "adjust_y": ("adjust_y", "y_offset"),
    "w": ("w", "width"),
    "h": ("h", "height"),
    "w_offset": ("w_offset",),
    "h_offset": ("h_offset",),
}

_REFERENCE_FIELDS = ("position_of", "x_of", "y_of", "w_of", "h_of", "w_from", "h_from", "w_to", "h_to")

_TEXT_FIELDS: Dict[str, Tuple[str, ...]] = {
    "at": ("at",),
    "anchor": ("anchor",),
    "style": ("style",),
    "attributes": ("attributes", "tikz_object_attributes"),
}

# s(1,2), sc(1,2), e(..), ec(..), a(..), ac(..), c(..) or a bare (x,y)
_WAYPOINT_RE = re.compile(r"^(s|sc|e|ec|a|ac|c)?\(([^,()]+),([^,()]+)\)$")
_WAYPOINT_TOKEN_RE = re.compile(r"[^\s(]*\([^)]*\)|\S+")

_EDGE_ENDPOINTS = {
    "start": ("from", "from_direction"),
    "end": ("to", "to_direction"),
}

_CONSUMED_KEYS = (
    {"name", "type", "kind"}
    | {alias for aliases in _NUMBER_FIELDS.values() for alias in aliases}
    | set(_REFERENCE_FIELDS)
    | {alias for aliases in _TEXT_FIELDS.values() for alias in aliases}
    | {key for pair in _EDGE_ENDPOINTS.values() for key in pair}
    | {"start", "end"}
    | {"waypoints"}
)


class DocumentReader(Protocol):
    """Source of raw documents (element records, style and page documents)."""

    def read(self) -> Iterable[Mapping[str, Any]]:
        ...


def coerce_float(value: Any, *, field_name: str = "value", name: Optional[str] = None) -> Optional[float]:
    """Parse a numeric record value; blank means absent."""

    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise RecordError(f"{field_name} must be numeric, got {value!r}", name)
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise RecordError(f"{field_name} must be numeric, got {value!r}", name)


def parse_waypoints(text: Any, *, name: Optional[str] = None) -> Optional[Tuple[Waypoint, ...]]:
    """Parse ``"s(1,1) c(2,2) e(-1,0)"`` into :class:`Waypoint` objects.

    A trailing ``c`` marks a control point; bare ``c`` and ``(x,y)`` are
    absolute. Blank means no waypoints were given.
    """

    if is_blank(text):
        return None
    waypoints = []
    for token in _WAYPOINT_TOKEN_RE.findall(str(text)):
        part = "".join(token.split())
        match = _WAYPOINT_RE.match(part)
        if not match:
            raise RecordError(f"invalid waypoint {part!r}", name)
        code = match.group(1) or "a"
        kind = code[0] if code[0] in WAYPOINT_KINDS else "a"
        x = coerce_float(match.group(2), field_name="waypoints", name=name)
        y = coerce_float(match.group(3), field_name="waypoints", name=name)
        waypoints.append(Waypoint(kind, x, y, control=code.endswith("c")))
    return tuple(waypoints)


def _first_present(record: Mapping[str, Any], aliases: Iterable[str]) -> Any:
    for alias in aliases:
        value = record.get(alias)
        if not is_blank(value):
            return value
    return None


def _reference(record: Mapping[str, Any], key: str, name: str) -> Optional[Reference]:
    value = record.get(key)
    if is_blank(value):
        return None
    try:
        return Reference.parse(str(value))
    except RecordError as exc:
        raise RecordError(f"{key}: {exc}", name) from exc


def _edge_endpoint(record: Mapping[str, Any], key: str, name: str) -> Optional[Reference]:
    if not is_blank(record.get(key)):
        return _reference(record, key, name)
    node_key, direction_key = _EDGE_ENDPOINTS[key]
    node = record.get(node_key)
    if is_blank(node):
        return None
    direction = record.get(direction_key)
    reference = Reference.parse(str(node))
    if not is_blank(direction):
        reference = Reference(reference.element, str(direction).strip())
    return reference


def record_kind(record: Mapping[str, Any]) -> Optional[str]:
    kind = record.get("type", record.get("kind"))
    if is_blank(kind):
        return None
    return str(kind).strip().lower()


def element_from_record(record: Mapping[str, Any], *, default_name: Optional[str] = None) -> Element:
    """Build an :class:`Element` from one raw record.

    References are tokenized here once; numeric fields are parsed; unknown
    keys go to :attr:`Element.extras` untouched.
    """

    raw_name = record.get("name")
    if is_blank(raw_name):
        if default_name is None:
            raise RecordError(f"record has no name: {dict(record)!r}")
        raw_name = default_name
    name = str(raw_name).strip()

    kind = record_kind(record)
    if kind is not None and kind not in ELEMENT_KINDS:
        raise RecordError(f"unknown element type {kind!r}", name)

    values: Dict[str, Any] = {"name": name, "kind": kind}
    for field_name, aliases in _NUMBER_FIELDS.items():
        values[field_name] = coerce_float(_first_present(record, aliases), field_name=field_name, name=name)
    for field_name in _REFERENCE_FIELDS:
        values[field_name] = _reference(record, field_name, name)
    for field_name, aliases in _TEXT_FIELDS.items():
        value = _first_present(record, aliases)
        values[field_name] = str(value).strip() if value is not None else None

    if kind == EDGE:
        values["start"] = _edge_endpoint(record, "start", name)
        values["end"] = _edge_endpoint(record, "end", name)
        values["waypoints"] = parse_waypoints(record.get("waypoints"), name=name)

    extras = {key: value for key, value in record.items() if key not in _CONSUMED_KEYS}
    return Element(extras=extras, records=[dict(record)], **values)


def split_documents(
    documents: Iterable[Mapping[str, Any]],
) -> Tuple[List[Mapping[str, Any]], List[Mapping[str, Any]]]:
    """Separate element records from style/page documents, keeping order."""

    element_records: List[Mapping[str, Any]] = []
    style_documents: List[Mapping[str, Any]] = []
    for document in documents:
        if not document:
            continue
        kind = record_kind(document)
        if kind in STYLE_DOCUMENT_TYPES:
            style_documents.append(document)
        elif kind in ELEMENT_KINDS or (kind is None and "name" in document):
            element_records.append(document)
        else:
            logger.warning("Skipping document of unknown type %r", kind)
    logger.info(
        "Split %d element record(s) and %d style document(s)", len(element_records), len(style_documents)
    )
    return element_records, style_documents


def elements_from_records(records: Iterable[Mapping[str, Any]]) -> List[Element]:
    """Convert records in declaration order; unnamed edges get positional names."""

    elements: List[Element] = []
    for index, record in enumerate(records):
        default_name = f"edge#{index}" if record_kind(record) == EDGE else None
        elements.append(element_from_record(record, default_name=default_name))
    nodes = sum(1 for element in elements if element.element_kind == NODE)
    logger.info("Read %d node record(s) and %d edge record(s)", nodes, len(elements) - nodes)
    return elements
