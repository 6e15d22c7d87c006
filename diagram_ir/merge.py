"""Combining declarations that share an element name."""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import replace
from typing import Dict, Iterable, Optional

from .model import MERGE_FIELDS, Element, ElementName, RecordError, is_blank

logger = logging.getLogger(__name__)

ATTRIBUTE_SEPARATOR = ", "


def _join_attributes(first: Optional[str], second: Optional[str]) -> Optional[str]:
    if first and second:
        return f"{first}{ATTRIBUTE_SEPARATOR}{second}"
    return second or first


def merge_elements(first: Element, second: Element) -> Element:
    """Return ``first`` overlaid with the defined fields of ``second``.

    ``attributes`` accumulate instead of being replaced, and ``records`` are
    concatenated in declaration order. Neither input is modified.
    """

    if first.name != second.name:
        raise RecordError(f"cannot merge '{first.name}' with '{second.name}'", first.name)
    if first.kind and second.kind and first.kind != second.kind:
        raise RecordError(
            f"'{first.name}' is declared both as {first.kind} and as {second.kind}", first.name
        )

    updates = {}
    for field_name in MERGE_FIELDS:
        value = getattr(second, field_name)
        if value is not None:
            updates[field_name] = value

    extras = dict(first.extras)
    extras.update({key: value for key, value in second.extras.items() if not is_blank(value)})

    return replace(
        first,
        **updates,
        attributes=_join_attributes(first.attributes, second.attributes),
        extras=extras,
        records=[*first.records, *second.records],
    )


def merge_all(elements: Iterable[Element]) -> Dict[ElementName, Element]:
    """Fold declarations by name, preserving first-declaration order."""

    merged: Dict[ElementName, Element] = OrderedDict()
    duplicates = 0
    for element in elements:
        existing = merged.get(element.name)
        if existing is None:
            merged[element.name] = element
        else:
            merged[element.name] = merge_elements(existing, element)
            duplicates += 1
    logger.info("Merged declarations into %d element(s) (%d duplicate(s))", len(merged), duplicates)
    return merged
