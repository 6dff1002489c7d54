"""
Adapter: IntegerParser / DoubleParser
Implements port LeafParser for numeric literals produced by StringSymbolReader.
"""
from __future__ import annotations

from typing import Optional, Sequence

from contracts import ParseIssue, ParseResult, Symbol
from ports.conversion import IntegerConversion


def _joined(symbols: Sequence[Symbol]) -> str:
    return "".join(symbol.text for symbol in symbols)


def _rejected(symbols: Sequence[Symbol], expected: str) -> ParseResult:
    text = _joined(symbols)
    return ParseResult.fail(ParseIssue(
        code="INVALID_LEAF",
        message=f"{text!r} is not a valid {expected}.",
        position=symbols[0].position if symbols else None,
        expected=expected,
        found=text,
    ))


class IntegerParser:
    """
    Accepts a single "integer" symbol. With a conversion, the value is folded
    into the target ring through conversion.from_int.
    """

    def __init__(self, conversion: Optional[IntegerConversion] = None) -> None:
        self._conversion = conversion

    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult:
        if len(symbols) != 1 or symbols[0].kind != "integer" or not symbols[0].text.isdecimal():
            return _rejected(symbols, "integer")
        value = int(symbols[0].text)
        if self._conversion is not None:
            return ParseResult.ok(self._conversion.from_int(value))
        return ParseResult.ok(value)


class DoubleParser:
    """Accepts a single "integer" or "double" symbol."""

    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult[float]:
        if len(symbols) != 1 or symbols[0].kind not in ("integer", "double"):
            return _rejected(symbols, "number")
        try:
            return ParseResult.ok(float(symbols[0].text))
        except ValueError:
            return _rejected(symbols, "number")
