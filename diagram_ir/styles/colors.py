"""Generated colour identifiers and the per-render context that owns them."""

from __future__ import annotations

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


def normalize_hex(value: str) -> Optional[str]:
    """``'#a1b'`` -> ``'AA11BB'``; ``None`` if ``value`` is not a hex colour."""

    if not isinstance(value, str):
        return None
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1).upper()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return digits


def is_hex_color(value: object) -> bool:
    return isinstance(value, str) and normalize_hex(value) is not None


class ColorRegistry:
    """Append-only ``identifier -> hex`` table.

    Registering a colour that is already known returns the existing
    identifier; entries are never removed or renamed.
    """

    prefix = "color"

    def __init__(self) -> None:
        self._colors: "OrderedDict[str, str]" = OrderedDict()

    def register(self, value: str) -> str:
        digits = normalize_hex(value)
        if digits is None:
            raise ValueError(f"not a hex colour: {value!r}")
        identifier = f"{self.prefix}{digits}"
        if identifier not in self._colors:
            self._colors[identifier] = digits
            logger.debug("Registered colour %s -> %s", value, identifier)
        return identifier

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._colors)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._colors.items())

    def as_dict(self) -> Dict[str, str]:
        return dict(self._colors)

    def definitions(self) -> List[str]:
        """``\\definecolor`` lines in registration order."""

        return [rf"\definecolor{{{name}}}{{HTML}}{{{digits}}}" for name, digits in self._colors.items()]


@dataclass
class RenderContext:
    """State threaded through every style resolution of one render pass."""

    colors: ColorRegistry = field(default_factory=ColorRegistry)
    warnings: List[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)
