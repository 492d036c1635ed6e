"""Boundary between raw user text and the stake arithmetic.

The arithmetic never sees strings.  Form fields are parsed here into either
a finite ``float`` or ``None`` ("absent"), and :mod:`betwise.core.stake_math`
treats ``None`` as zero.  :func:`parse_field` additionally tells the caller
whether a field was left empty or held text that is not a number, so the UI
can flag the field without changing what the arithmetic computes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional

FieldStatus = Literal["empty", "valid", "invalid"]


@dataclass(frozen=True)
class ParsedInput:
    """Result of parsing one form field."""

    status: FieldStatus
    value: Optional[float] = None

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"


def parse_field(text: str | float | int | None) -> ParsedInput:
    """Parse a numeric form field.

    Parse '2.5'   → ParsedInput('valid', 2.5)
    Parse ''      → ParsedInput('empty')
    Parse 'abc'   → ParsedInput('invalid')
    Parse 'nan'   → ParsedInput('invalid')

    Numbers are accepted as-is so widgets that already return floats can
    share the same path.  NaN and infinities are invalid.
    """
    if text is None:
        return ParsedInput("empty")

    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        stripped = str(text).strip()
        if not stripped:
            return ParsedInput("empty")
        try:
            value = float(stripped)
        except ValueError:
            return ParsedInput("invalid")

    if not math.isfinite(value):
        return ParsedInput("invalid")
    return ParsedInput("valid", value)


def parse_stake(text: str | float | int | None) -> Optional[float]:
    """Parse a stake or odds field to a finite float, or ``None`` if absent/invalid."""
    return parse_field(text).value
