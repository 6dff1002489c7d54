"""
Text helpers shared by the printable value types (fractions, polynomials).
Output is always re-readable by the readers in this package.
"""
from __future__ import annotations

import re
from typing import Any

_ATOMIC = re.compile(r"-?[\w.]+")


def is_atomic(text: str) -> bool:
    """A single (optionally negated) number or identifier."""
    return _ATOMIC.fullmatch(text) is not None


def wrap(value: Any) -> str:
    text = str(value)
    return text if is_atomic(text) else f"({text})"
