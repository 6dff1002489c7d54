"""
Adapter: UnivariatePolynomialReader
Reads a sum of terms in one variable into UnivariatePolynomialNormalForm.

The expression engine runs over ParseItem values, a tagged union of
  INTEGER      plain int literal, not yet committed to the coefficient ring
  COEFFICIENT  element of the coefficient ring
  POLYNOMIAL   normal form in the reader's variable
Operators promote the narrower operand (INTEGER -> COEFFICIENT -> POLYNOMIAL)
before combining, so "x^2+3*x^2" merges into one term by ring addition and
"x - x" collapses to the zero polynomial.

Leaf order: integer literal, then the coefficient parser, then the variable.
With a nested UnivariatePolynomialReader as coefficient parser the result is a
polynomial whose coefficients are polynomials in another variable.
"""
from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, Sequence, TypeVar

from config import get_settings
from contracts import (
    ConfigurationError,
    DivisionByZeroError,
    DomainError,
    ParseIssue,
    ParseItem,
    ParseItemKind,
    ParseResult,
    Symbol,
)
from ports.algebra import EuclideanDomain, Field, Ring
from ports.conversion import IntegerConversion
from ports.leaf_parser import LeafParser
from adapters.algebra.algorithms import power
from adapters.algebra.polynomial import UnivariatePolynomialNormalForm
from adapters.algebra.polynomial_ring import UnivariatePolynomialRing
from adapters.expression_reader.expression_reader import (
    ExpressionReader,
    ExpressionReaderBuilder,
    SourceLike,
)
from adapters.leaf_parsers.simple_parsers import IntegerParser

logger = logging.getLogger("ringreader.polynomial_reader")

T = TypeVar("T")

INTEGER = ParseItemKind.INTEGER
COEFFICIENT = ParseItemKind.COEFFICIENT
POLYNOMIAL = ParseItemKind.POLYNOMIAL


class _ItemLeafParser(Generic[T]):
    def __init__(self, coefficient_parser: LeafParser[T], ring: UnivariatePolynomialRing[T]) -> None:
        self._integers = IntegerParser()
        self._coefficients = coefficient_parser
        self._ring = ring

    def try_parse(self, symbols: Sequence[Symbol]) -> ParseResult[ParseItem]:
        integer = self._integers.try_parse(symbols)
        if integer.success:
            return ParseResult.ok(ParseItem(INTEGER, integer.value))

        coefficient = self._coefficients.try_parse(symbols)
        if coefficient.success:
            return ParseResult.ok(ParseItem(COEFFICIENT, coefficient.value))

        variable = self._ring.variable
        if len(symbols) == 1 and symbols[0].text == variable:
            one = self._ring.coefficient_ring.multiplicative_identity
            return ParseResult.ok(ParseItem(POLYNOMIAL, self._ring.monomial(one, 1)))

        text = "".join(symbol.text for symbol in symbols)
        if len(symbols) == 1 and text.isidentifier():
            return ParseResult.fail(ParseIssue(
                code="UNKNOWN_VARIABLE",
                message=f"Unknown variable {text!r}; expected {variable!r}.",
                position=symbols[0].position,
                expected=variable,
                found=text,
            ))
        return ParseResult.fail(*coefficient.issues)


class _ItemArithmetic(Generic[T]):
    """Operator functions over ParseItem, bound to one conversion for one parse."""

    def __init__(self, ring: UnivariatePolynomialRing[T], conversion: IntegerConversion[T]) -> None:
        self._polynomials = ring
        self._coefficients = ring.coefficient_ring
        self._conversion = conversion

    def add(self, left: ParseItem, right: ParseItem) -> ParseItem:
        if left.kind is INTEGER and right.kind is INTEGER:
            return ParseItem(INTEGER, left.value + right.value)
        if POLYNOMIAL in (left.kind, right.kind):
            return ParseItem(POLYNOMIAL, self._polynomials.add(self.polynomial(left), self.polynomial(right)))
        return ParseItem(COEFFICIENT, self._coefficients.add(self.coefficient(left), self.coefficient(right)))

    def subtract(self, left: ParseItem, right: ParseItem) -> ParseItem:
        return self.add(left, self.negate(right))

    def multiply(self, left: ParseItem, right: ParseItem) -> ParseItem:
        if left.kind is INTEGER and right.kind is INTEGER:
            return ParseItem(INTEGER, left.value * right.value)
        if POLYNOMIAL in (left.kind, right.kind):
            return ParseItem(
                POLYNOMIAL, self._polynomials.multiply(self.polynomial(left), self.polynomial(right))
            )
        return ParseItem(
            COEFFICIENT, self._coefficients.multiply(self.coefficient(left), self.coefficient(right))
        )

    def negate(self, operand: ParseItem) -> ParseItem:
        if operand.kind is INTEGER:
            return ParseItem(INTEGER, -operand.value)
        if operand.kind is POLYNOMIAL:
            return ParseItem(POLYNOMIAL, self._polynomials.additive_inverse(operand.value))
        return ParseItem(COEFFICIENT, self._coefficients.additive_inverse(operand.value))

    def divide(self, left: ParseItem, right: ParseItem) -> ParseItem:
        if left.kind is INTEGER and right.kind is INTEGER:
            if right.value == 0:
                raise DivisionByZeroError()
            if left.value % right.value == 0:
                return ParseItem(INTEGER, left.value // right.value)

        if right.kind is POLYNOMIAL and not right.value.is_value:
            raise DomainError(
                f"Can't divide by the non-constant polynomial {right.value}.",
                code="POLYNOMIAL_DIVISOR",
            )
        divisor = self.coefficient(right)
        if self._coefficients.is_additive_identity(divisor):
            raise DivisionByZeroError()

        if left.kind is POLYNOMIAL:
            ring = self._coefficients
            return ParseItem(POLYNOMIAL, UnivariatePolynomialNormalForm(
                self._polynomials.variable,
                {degree: self._divide(value, divisor) for degree, value in left.value.terms.items()},
                ring,
            ))
        return ParseItem(COEFFICIENT, self._divide(self.coefficient(left), divisor))

    def raise_to_power(self, base: ParseItem, exponent: ParseItem) -> ParseItem:
        times = self._exponent(exponent)
        if base.kind is INTEGER and times >= 0:
            return ParseItem(INTEGER, base.value ** times)
        if base.kind is POLYNOMIAL and not base.value.is_value:
            if times < 0:
                raise DomainError(
                    f"Negative exponent {times} on the polynomial {base.value}.",
                    code="NEGATIVE_EXPONENT",
                )
            return ParseItem(POLYNOMIAL, power(base.value, times, self._polynomials))
        return ParseItem(COEFFICIENT, power(self.coefficient(base), times, self._coefficients))

    def coefficient(self, item: ParseItem) -> T:
        if item.kind is INTEGER:
            return self._conversion.from_int(item.value)
        if item.kind is POLYNOMIAL:
            # only constant polynomials reach here
            return item.value.constant_term(self._coefficients)
        return item.value

    def polynomial(self, item: ParseItem) -> UnivariatePolynomialNormalForm[T]:
        if item.kind is POLYNOMIAL:
            return item.value
        return self._polynomials.constant(self.coefficient(item))

    def _exponent(self, item: ParseItem) -> int:
        if item.kind is INTEGER:
            return item.value
        if item.kind is POLYNOMIAL and not item.value.is_value:
            raise DomainError(
                f"Polynomial exponent {item.value} is not allowed.", code="POLYNOMIAL_EXPONENT"
            )
        value = self.coefficient(item)
        if not self._conversion.can_convert_to_int(value):
            raise DomainError(f"Exponent {value} is not an integer.", code="NON_INTEGER_EXPONENT")
        return self._conversion.to_int(value)

    def _divide(self, dividend: T, divisor: T) -> T:
        ring = self._coefficients
        if isinstance(ring, Field):
            return ring.multiply(dividend, ring.multiplicative_inverse(divisor))
        if isinstance(ring, EuclideanDomain):
            quotient, remainder = ring.quo_rem(dividend, divisor)
            if not ring.is_additive_identity(remainder):
                raise DomainError(f"{dividend} is not divisible by {divisor}.", code="INEXACT_DIVISION")
            return quotient
        raise DomainError("Division needs field coefficients.", code="NOT_A_FIELD")


class UnivariatePolynomialReader(Generic[T]):
    def __init__(
        self,
        variable: str,
        coefficient_parser: LeafParser[T],
        ring: Ring[T],
        conversion: IntegerConversion[T],
        max_nesting_depth: Optional[int] = None,
    ) -> None:
        if coefficient_parser is None:
            raise ConfigurationError("A coefficient parser must be provided.", code="MISSING_LEAF_PARSER")
        if conversion is None:
            raise ConfigurationError("A degree conversion must be provided.", code="MISSING_CONVERSION")
        self._polynomials = UnivariatePolynomialRing(variable, ring)
        self._coefficient_parser = coefficient_parser
        self._conversion = conversion
        self._max_nesting_depth = max_nesting_depth
        self._expression_delimiters: list[tuple[str, str]] = [("left_parenthesis", "right_parenthesis")]
        self._sequence_delimiters: list[tuple[str, str]] = []
        self._external_delimiters: list[tuple[str, str]] = []
        self._ignorable: list[str] = list(get_settings().ignorable_tags)
        self._reader = self._build(conversion)

    @property
    def variable(self) -> str:
        return self._polynomials.variable

    @property
    def ring(self) -> UnivariatePolynomialRing[T]:
        return self._polynomials

    @property
    def conversion(self) -> IntegerConversion[T]:
        return self._conversion

    # -- Configuration ------------------------------------------------------

    def register_expression_delimiters(self, open_tag: str, close_tag: str) -> None:
        self._expression_delimiters.append((open_tag, close_tag))
        self._revalidate(self._expression_delimiters.pop)

    def clear_expression_delimiters(self) -> None:
        previous, self._expression_delimiters = self._expression_delimiters, []
        self._revalidate(lambda: setattr(self, "_expression_delimiters", previous))

    def register_sequence_delimiters(self, open_tag: str, close_tag: str) -> None:
        self._sequence_delimiters.append((open_tag, close_tag))
        self._revalidate(self._sequence_delimiters.pop)

    def register_external_delimiters(self, open_tag: str, close_tag: str) -> None:
        self._external_delimiters.append((open_tag, close_tag))
        self._revalidate(self._external_delimiters.pop)

    def mark_ignorable(self, tag: str) -> None:
        self._ignorable.append(tag)
        self._revalidate(self._ignorable.pop)

    # -- Parsing ------------------------------------------------------------

    def try_parse(
        self,
        source: SourceLike,
        conversion: Optional[IntegerConversion[T]] = None,
    ) -> ParseResult[UnivariatePolynomialNormalForm[T]]:
        """`conversion` overrides the constructor's degree conversion for this call."""
        if conversion is None or conversion is self._conversion:
            conversion, reader = self._conversion, self._reader
        else:
            reader = self._build(conversion)
        result = reader.try_parse(source)
        if not result.success:
            return ParseResult.fail(*result.issues)
        arithmetic = _ItemArithmetic(self._polynomials, conversion)
        polynomial = arithmetic.polynomial(result.value)
        logger.debug("Read polynomial in %r of degree %s", self.variable, polynomial.degree)
        return ParseResult.ok(polynomial)

    def parse(
        self,
        source: SourceLike,
        errors: Optional[list[ParseIssue]] = None,
        conversion: Optional[IntegerConversion[T]] = None,
    ) -> Optional[UnivariatePolynomialNormalForm[T]]:
        result = self.try_parse(source, conversion)
        if errors is not None:
            errors.extend(result.issues)
        return result.value if result.success else None

    # -- Private ------------------------------------------------------------

    def _revalidate(self, rollback: Callable[[], object]) -> None:
        try:
            self._reader = self._build(self._conversion)
        except ConfigurationError:
            rollback()
            raise

    def _build(self, conversion: IntegerConversion[T]) -> ExpressionReader[ParseItem]:
        arithmetic = _ItemArithmetic(self._polynomials, conversion)
        builder = ExpressionReaderBuilder(_ItemLeafParser(self._coefficient_parser, self._polynomials))
        builder.register_binary_operator("plus", arithmetic.add, 0)
        builder.register_binary_operator("minus", arithmetic.subtract, 0)
        builder.register_binary_operator("times", arithmetic.multiply, 1)
        builder.register_binary_operator("over", arithmetic.divide, 1)
        builder.register_binary_operator("hat", arithmetic.raise_to_power, 2, right_associative=True)
        builder.register_unary_operator("minus", arithmetic.negate, 0)
        for open_tag, close_tag in self._expression_delimiters:
            builder.register_expression_delimiters(open_tag, close_tag)
        for open_tag, close_tag in self._sequence_delimiters:
            builder.register_sequence_delimiters(open_tag, close_tag)
        for open_tag, close_tag in self._external_delimiters:
            builder.register_external_delimiters(open_tag, close_tag)
        builder.mark_ignorable(*self._ignorable)
        return builder.build(self._max_nesting_depth)
