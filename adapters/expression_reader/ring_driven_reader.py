"""
Adapter: RingDrivenExpressionReader
ExpressionReader preconfigured with the arithmetic of a Ring.

Operator table (higher binds tighter):
  plus, minus            0   left-assoc
  unary minus            0   operand read at precedence 1, so -2^2 == -(2^2)
  times, over, mod       1   left-assoc
  hat                    2   right-assoc, exponent is an integer literal expression
                             or goes through IntegerConversion

`over` uses the field inverse when the ring is a Field, exact Euclidean division
when it is a EuclideanDomain, and raises DomainError otherwise.

Operands built only from integer literals keep their value in Z next to the
ring element, so an exponent such as `-1` or `7` in Z/7 is read as an integer
rather than through its residue.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

from config import get_settings
from contracts import (
    ConfigurationError,
    DivisionByZeroError,
    DomainError,
    ParseIssue,
    ParseResult,
    Symbol,
)
from ports.algebra import EuclideanDomain, Field, Ring
from ports.conversion import IntegerConversion
from ports.leaf_parser import LeafParser
from adapters.algebra.algorithms import power
from adapters.expression_reader.expression_reader import (
    ExpressionReader,
    ExpressionReaderBuilder,
    SourceLike,
)

logger = logging.getLogger("ringreader.ring_reader")

T = TypeVar("T")

ADDITIVE_PRECEDENCE = 0
MULTIPLICATIVE_PRECEDENCE = 1
POWER_PRECEDENCE = 2


@dataclass(frozen=True)
class _Operand(Generic[T]):
    value: T
    # value in Z when the operand is made of integer literals only
    exact: Optional[int] = None


def _integer_literal(symbols: Sequence[Symbol]) -> Optional[int]:
    if len(symbols) == 1 and symbols[0].kind == "integer" and symbols[0].text.isdecimal():
        return int(symbols[0].text)
    return None


def _both_exact(left: _Operand, right: _Operand) -> bool:
    return left.exact is not None and right.exact is not None


class _IntegerFoldingParser(Generic[T]):
    """
    Wraps leaf values as _Operand. Falls back to conversion.from_int for a bare
    integer literal the leaf parser rejects.
    """

    def __init__(self, inner: LeafParser[T], conversion: Optional[IntegerConversion[T]]) -> None:
        self._inner = inner
        self._conversion = conversion

    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult[_Operand[T]]:
        literal = _integer_literal(symbols)
        result = self._inner.try_parse(symbols)
        if result.success:
            return ParseResult.ok(_Operand(result.value, literal), result.issues)
        if self._conversion is None or literal is None:
            return ParseResult.fail(*result.issues)
        return ParseResult.ok(_Operand(self._conversion.from_int(literal), literal))


class RingDrivenExpressionReader(Generic[T]):
    def __init__(
        self,
        leaf_parser: LeafParser[T],
        ring: Ring[T],
        conversion: Optional[IntegerConversion[T]] = None,
        max_nesting_depth: Optional[int] = None,
    ) -> None:
        if leaf_parser is None:
            raise ConfigurationError("A leaf parser must be provided.", code="MISSING_LEAF_PARSER")
        if ring is None:
            raise ConfigurationError("A ring must be provided.", code="MISSING_RING")
        self._leaf_parser = leaf_parser
        self._ring = ring
        self._conversion = conversion
        self._max_nesting_depth = max_nesting_depth
        self._expression_delimiters: list[tuple[str, str]] = [("left_parenthesis", "right_parenthesis")]
        self._sequence_delimiters: list[tuple[str, str]] = []
        self._external_delimiters: list[tuple[str, str]] = []
        self._ignorable: list[str] = list(get_settings().ignorable_tags)
        self._reader = self._build()

    @property
    def ring(self) -> Ring[T]:
        return self._ring

    @property
    def conversion(self) -> Optional[IntegerConversion[T]]:
        return self._conversion

    # -- Configuration ------------------------------------------------------
    # Each call swaps in a freshly built reader; parses already running keep theirs.

    def register_expression_delimiters(self, open_tag: str, close_tag: str) -> None:
        self._expression_delimiters.append((open_tag, close_tag))
        self._rebuild(self._expression_delimiters.pop)

    def clear_expression_delimiters(self) -> None:
        previous, self._expression_delimiters = self._expression_delimiters, []
        self._rebuild(lambda: setattr(self, "_expression_delimiters", previous))

    def register_sequence_delimiters(self, open_tag: str, close_tag: str) -> None:
        self._sequence_delimiters.append((open_tag, close_tag))
        self._rebuild(self._sequence_delimiters.pop)

    def register_external_delimiters(self, open_tag: str, close_tag: str) -> None:
        self._external_delimiters.append((open_tag, close_tag))
        self._rebuild(self._external_delimiters.pop)

    def mark_ignorable(self, tag: str) -> None:
        self._ignorable.append(tag)
        self._rebuild(self._ignorable.pop)

    # -- Parsing ------------------------------------------------------------

    def try_parse(self, source: SourceLike) -> ParseResult[T]:
        result = self._reader.try_parse(source)
        if not result.success:
            return ParseResult.fail(*result.issues)
        return ParseResult.ok(result.value.value, result.issues)

    def parse(self, source: SourceLike, errors: Optional[list[ParseIssue]] = None) -> Optional[T]:
        result = self.try_parse(source)
        if errors is not None:
            errors.extend(result.issues)
        return result.value if result.success else None

    # -- Arithmetic ---------------------------------------------------------

    def add(self, left: T, right: T) -> T:
        return self._ring.add(left, right)

    def subtract(self, left: T, right: T) -> T:
        return self._ring.add(left, self._ring.additive_inverse(right))

    def multiply(self, left: T, right: T) -> T:
        return self._ring.multiply(left, right)

    def negate(self, operand: T) -> T:
        return self._ring.additive_inverse(operand)

    def divide(self, left: T, right: T) -> T:
        ring = self._ring
        if isinstance(ring, Field):
            if ring.is_additive_identity(right):
                raise DivisionByZeroError()
            return ring.multiply(left, ring.multiplicative_inverse(right))
        if isinstance(ring, EuclideanDomain):
            quotient, remainder = ring.quo_rem(left, right)
            if not ring.is_additive_identity(remainder):
                raise DomainError(f"{left} is not divisible by {right}.", code="INEXACT_DIVISION")
            return quotient
        raise DomainError("Division needs a field or a Euclidean domain.", code="NOT_A_FIELD")

    def remainder(self, left: T, right: T) -> T:
        ring = self._ring
        if not isinstance(ring, EuclideanDomain):
            raise DomainError("Remainder needs a Euclidean domain.", code="NOT_A_EUCLIDEAN_DOMAIN")
        return ring.rem(left, right)

    def raise_to_power(self, base: T, exponent: T) -> T:
        return power(base, self._exponent(_Operand(exponent)), self._ring)

    # -- Operand arithmetic -------------------------------------------------
    # Same operations over _Operand; `exact` follows along while it stays in Z.

    def _add(self, left: _Operand[T], right: _Operand[T]) -> _Operand[T]:
        exact = left.exact + right.exact if _both_exact(left, right) else None
        return _Operand(self.add(left.value, right.value), exact)

    def _subtract(self, left: _Operand[T], right: _Operand[T]) -> _Operand[T]:
        exact = left.exact - right.exact if _both_exact(left, right) else None
        return _Operand(self.subtract(left.value, right.value), exact)

    def _multiply(self, left: _Operand[T], right: _Operand[T]) -> _Operand[T]:
        exact = left.exact * right.exact if _both_exact(left, right) else None
        return _Operand(self.multiply(left.value, right.value), exact)

    def _negate(self, operand: _Operand[T]) -> _Operand[T]:
        exact = -operand.exact if operand.exact is not None else None
        return _Operand(self.negate(operand.value), exact)

    def _divide(self, left: _Operand[T], right: _Operand[T]) -> _Operand[T]:
        value = self.divide(left.value, right.value)
        exact = None
        if _both_exact(left, right) and right.exact != 0 and left.exact % right.exact == 0:
            exact = left.exact // right.exact
        return _Operand(value, exact)

    def _remainder(self, left: _Operand[T], right: _Operand[T]) -> _Operand[T]:
        return _Operand(self.remainder(left.value, right.value))

    def _power(self, base: _Operand[T], exponent: _Operand[T]) -> _Operand[T]:
        times = self._exponent(exponent)
        exact = base.exact ** times if base.exact is not None and times >= 0 else None
        return _Operand(power(base.value, times, self._ring), exact)

    def _exponent(self, operand: _Operand[T]) -> int:
        if self._conversion is None:
            raise DomainError(
                "Exponentiation needs an integer conversion for the exponent.",
                code="MISSING_CONVERSION",
            )
        if operand.exact is not None:
            return operand.exact
        if not self._conversion.can_convert_to_int(operand.value):
            raise DomainError(f"Exponent {operand.value} is not an integer.", code="NON_INTEGER_EXPONENT")
        return self._conversion.to_int(operand.value)

    # -- Private ------------------------------------------------------------

    def _rebuild(self, rollback: Callable[[], object]) -> None:
        try:
            self._reader = self._build()
        except ConfigurationError:
            rollback()
            raise

    def _build(self) -> ExpressionReader[_Operand[T]]:
        builder = ExpressionReaderBuilder(_IntegerFoldingParser(self._leaf_parser, self._conversion))
        builder.register_binary_operator("plus", self._add, ADDITIVE_PRECEDENCE)
        builder.register_binary_operator("minus", self._subtract, ADDITIVE_PRECEDENCE)
        builder.register_binary_operator("times", self._multiply, MULTIPLICATIVE_PRECEDENCE)
        builder.register_binary_operator("over", self._divide, MULTIPLICATIVE_PRECEDENCE)
        builder.register_binary_operator("mod", self._remainder, MULTIPLICATIVE_PRECEDENCE)
        builder.register_binary_operator("hat", self._power, POWER_PRECEDENCE, right_associative=True)
        builder.register_unary_operator("minus", self._negate, ADDITIVE_PRECEDENCE)
        for open_tag, close_tag in self._expression_delimiters:
            builder.register_expression_delimiters(open_tag, close_tag)
        for open_tag, close_tag in self._sequence_delimiters:
            builder.register_sequence_delimiters(open_tag, close_tag)
        for open_tag, close_tag in self._external_delimiters:
            builder.register_external_delimiters(open_tag, close_tag)
        builder.mark_ignorable(*self._ignorable)
        reader = builder.build(self._max_nesting_depth)
        logger.debug(
            "Built reader over %s: %d delimiter pair(s), %d ignorable tag(s)",
            type(self._ring).__name__,
            len(self._expression_delimiters),
            len(self._ignorable),
        )
        return reader
