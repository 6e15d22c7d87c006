"""Parser for the free-text, comma separated attribute string of an element."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..config import RESERVED_ATTRIBUTE_KEYS
from .colors import RenderContext

logger = logging.getLogger(__name__)

AttributeValue = Union[str, bool]

_SPACES_RE = re.compile(r"\s+")


def _normalize_key(key: str) -> str:
    return _SPACES_RE.sub(" ", key.strip())


def split_fragments(text: str) -> List[Tuple[str, bool]]:
    """Split on top-level commas; each item is ``(fragment, balanced)``.

    Commas inside ``{...}`` do not split. A fragment with a stray ``}`` or an
    unclosed ``{`` is returned with ``balanced=False``.
    """

    fragments: List[Tuple[str, bool]] = []
    current: List[str] = []
    depth = 0
    balanced = True
    for ch in text:
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                balanced = False
            else:
                depth -= 1
        elif ch == "," and depth == 0:
            fragments.append(("".join(current), balanced))
            current = []
            balanced = True
            continue
        current.append(ch)
    fragments.append(("".join(current), balanced and depth == 0))
    return fragments


def _split_pair(fragment: str) -> Tuple[str, Optional[str]]:
    depth = 0
    for index, ch in enumerate(fragment):
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == "=" and depth == 0:
            return fragment[:index], fragment[index + 1 :]
    return fragment, None


def parse_attributes(
    text: Optional[str],
    reserved_keys: Iterable[str] = RESERVED_ATTRIBUTE_KEYS,
    context: Optional[RenderContext] = None,
    *,
    owner: Optional[str] = None,
) -> Dict[str, AttributeValue]:
    """Parse ``"draw=red, thick, label={a, b}"`` into an ordered mapping.

    Bare flags map to ``True``. Reserved geometry keys are ignored. Malformed
    fragments are dropped; the warning goes to ``context`` when one is given.
    """

    if not text or not text.strip():
        return {}

    reserved = {_normalize_key(key).lower() for key in reserved_keys}
    where = f" of '{owner}'" if owner else ""
    parsed: Dict[str, AttributeValue] = {}

    for raw, balanced in split_fragments(text):
        fragment = raw.strip()
        if not fragment:
            continue
        problem = None
        key, value = _split_pair(fragment)
        key = _normalize_key(key)
        if not balanced:
            problem = "unbalanced braces"
        elif not key:
            problem = "empty key"
        elif value is not None and not value.strip():
            problem = "empty value"
        if problem is not None:
            message = f"Dropping malformed attribute fragment {fragment!r}{where}: {problem}"
            if context is not None:
                context.warn(message)
            else:
                logger.warning(message)
            continue

        if key.lower() in reserved:
            logger.debug("Ignoring reserved attribute %r%s", key, where)
            continue
        parsed[key] = True if value is None else value.strip()

    return parsed


def format_attributes(attributes: Dict[str, AttributeValue]) -> str:
    """Inverse of :func:`parse_attributes` for flat mappings (flags as bare keys)."""

    parts = []
    for key, value in attributes.items():
        if value is True:
            parts.append(key)
        elif value is False or value is None:
            continue
        else:
            parts.append(f"{key}={value}")
    return ", ".join(parts)
