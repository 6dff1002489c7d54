"""
Adapter: Fraction / FractionField
Implements port Field as the field of fractions over any EuclideanDomain.

Invariants (hold for every Fraction ever constructed):
  - the denominator is never the additive identity,
  - gcd(numerator, denominator) is a unit,
  - the denominator is normalized by its unit part (positive for integers,
    monic for polynomials over a field),
  - the zero fraction is stored as 0/1.
"""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

from contracts import ConfigurationError, DivisionByZeroError
from ports.algebra import EuclideanDomain
from adapters.algebra.algorithms import greatest_common_divisor
from adapters.algebra.formatting import is_atomic, wrap

T = TypeVar("T")


class Fraction(Generic[T]):
    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: T, denominator: T, domain: EuclideanDomain[T]) -> None:
        if domain is None:
            raise ConfigurationError("A fraction needs a Euclidean domain.", code="MISSING_DOMAIN")
        if domain.is_additive_identity(denominator):
            raise DivisionByZeroError("Fraction denominator can't be the additive identity.")

        if domain.is_additive_identity(numerator):
            self._numerator = numerator
            self._denominator = domain.multiplicative_identity
            return

        gcd = greatest_common_divisor(numerator, denominator, domain)
        if not domain.is_multiplicative_identity(gcd):
            numerator = domain.quo(numerator, gcd)
            denominator = domain.quo(denominator, gcd)

        unit = domain.unit_part(denominator)
        if not domain.is_multiplicative_identity(unit):
            numerator = domain.quo(numerator, unit)
            denominator = domain.quo(denominator, unit)

        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> T:
        return self._numerator

    @property
    def denominator(self) -> T:
        return self._denominator

    def decompose(self, domain: EuclideanDomain[T]) -> tuple[T, "Fraction[T]"]:
        """
        Splits into integral and fractional parts: self = integral + fractional,
        where the fractional numerator is the Euclidean remainder.
        """
        integral, remainder = domain.quo_rem(self._numerator, self._denominator)
        return integral, Fraction(remainder, self._denominator, domain)

    def integral_part(self, domain: EuclideanDomain[T]) -> T:
        return self.decompose(domain)[0]

    def fractional_part(self, domain: EuclideanDomain[T]) -> "Fraction[T]":
        return self.decompose(domain)[1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fraction):
            return NotImplemented
        return self._numerator == other._numerator and self._denominator == other._denominator

    def __hash__(self) -> int:
        return hash((self._numerator, self._denominator))

    def __str__(self) -> str:
        numerator = str(self._numerator)
        denominator = str(self._denominator)
        if denominator == "1":
            return numerator
        if not is_atomic(numerator):
            numerator = f"({numerator})"
        return f"{numerator}/{wrap(self._denominator)}"

    def __repr__(self) -> str:
        return f"Fraction({self._numerator!r}, {self._denominator!r})"


class FractionField(Generic[T]):
    """Arithmetic on Fraction values over `domain`; results are re-reduced at every step."""

    def __init__(self, domain: EuclideanDomain[T]) -> None:
        if domain is None:
            raise ConfigurationError("A fraction field needs a Euclidean domain.", code="MISSING_DOMAIN")
        self._domain = domain

    @property
    def domain(self) -> EuclideanDomain[T]:
        return self._domain

    @property
    def additive_identity(self) -> Fraction[T]:
        return Fraction(self._domain.additive_identity, self._domain.multiplicative_identity, self._domain)

    @property
    def multiplicative_identity(self) -> Fraction[T]:
        one = self._domain.multiplicative_identity
        return Fraction(one, one, self._domain)

    def fraction(self, numerator: T, denominator: Optional[T] = None) -> Fraction[T]:
        if denominator is None:
            denominator = self._domain.multiplicative_identity
        return Fraction(numerator, denominator, self._domain)

    def add(self, left: Fraction[T], right: Fraction[T]) -> Fraction[T]:
        domain = self._domain
        gcd = greatest_common_divisor(left.denominator, right.denominator, domain)
        left_factor = domain.quo(right.denominator, gcd)
        right_factor = domain.quo(left.denominator, gcd)
        numerator = domain.add(
            domain.multiply(left.numerator, left_factor),
            domain.multiply(right.numerator, right_factor),
        )
        denominator = domain.multiply(left.denominator, left_factor)
        return Fraction(numerator, denominator, domain)

    def subtract(self, left: Fraction[T], right: Fraction[T]) -> Fraction[T]:
        return self.add(left, self.additive_inverse(right))

    def multiply(self, left: Fraction[T], right: Fraction[T]) -> Fraction[T]:
        domain = self._domain
        if domain.is_additive_identity(left.numerator) or domain.is_additive_identity(right.numerator):
            return self.additive_identity
        # cross-cancel before multiplying to keep intermediates small
        first = greatest_common_divisor(left.numerator, right.denominator, domain)
        second = greatest_common_divisor(right.numerator, left.denominator, domain)
        numerator = domain.multiply(domain.quo(left.numerator, first), domain.quo(right.numerator, second))
        denominator = domain.multiply(domain.quo(left.denominator, second), domain.quo(right.denominator, first))
        return Fraction(numerator, denominator, domain)

    def divide(self, left: Fraction[T], right: Fraction[T]) -> Fraction[T]:
        return self.multiply(left, self.multiplicative_inverse(right))

    def additive_inverse(self, element: Fraction[T]) -> Fraction[T]:
        return Fraction(self._domain.additive_inverse(element.numerator), element.denominator, self._domain)

    def multiplicative_inverse(self, element: Fraction[T]) -> Fraction[T]:
        if self._domain.is_additive_identity(element.numerator):
            raise DivisionByZeroError("Zero fraction has no inverse.")
        return Fraction(element.denominator, element.numerator, self._domain)

    def is_additive_identity(self, element: Fraction[T]) -> bool:
        return self._domain.is_additive_identity(element.numerator)

    def is_multiplicative_identity(self, element: Fraction[T]) -> bool:
        return (
            self._domain.is_multiplicative_identity(element.numerator)
            and self._domain.is_multiplicative_identity(element.denominator)
        )
