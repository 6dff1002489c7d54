"""
Adapter: integer conversions
Implements port IntegerConversion for every element type the readers ship with.
Conversions compose: the fraction and polynomial bridges wrap the bridge of
their inner element type.
"""
from __future__ import annotations

import math
from typing import Generic, Optional, TypeVar

from contracts import ConfigurationError, DomainError
from ports.algebra import EuclideanDomain, Ring
from ports.conversion import IntegerConversion
from adapters.algebra.fraction import Fraction
from adapters.algebra.modular_field import ModularIntegerField
from adapters.algebra.polynomial import UnivariatePolynomialNormalForm

T = TypeVar("T")


def _not_an_integer(element: object) -> DomainError:
    return DomainError(f"{element} has no integer representation.", code="NOT_AN_INTEGER")


class IntegerIdentityConversion:
    def can_convert_to_int(self, element: int) -> bool:
        return isinstance(element, int)

    def to_int(self, element: int) -> int:
        if not self.can_convert_to_int(element):
            raise _not_an_integer(element)
        return element

    def from_int(self, value: int) -> int:
        return value


class DoubleToIntegerConversion:
    """Floats within `precision` of an integer convert to it."""

    def __init__(self, precision: float = 0.0) -> None:
        if precision < 0:
            raise ConfigurationError("Precision can't be negative.", code="INVALID_PRECISION")
        self._precision = precision

    def can_convert_to_int(self, element: float) -> bool:
        return math.isfinite(element) and abs(element - round(element)) <= self._precision

    def to_int(self, element: float) -> int:
        if not self.can_convert_to_int(element):
            raise _not_an_integer(element)
        return int(round(element))

    def from_int(self, value: int) -> float:
        return float(value)


class ModularIntegerConversion:
    def __init__(self, field: ModularIntegerField) -> None:
        if field is None:
            raise ConfigurationError("A modular conversion needs its field.", code="MISSING_RING")
        self._field = field

    def can_convert_to_int(self, element: int) -> bool:
        return isinstance(element, int)

    def to_int(self, element: int) -> int:
        if not self.can_convert_to_int(element):
            raise _not_an_integer(element)
        return self._field.element(element)

    def from_int(self, value: int) -> int:
        return self._field.element(value)


class FractionConversion(Generic[T]):
    """Fractions whose denominator is one map to the integer of their numerator."""

    def __init__(
        self,
        domain: EuclideanDomain[T],
        element_conversion: Optional[IntegerConversion[T]] = None,
    ) -> None:
        if domain is None:
            raise ConfigurationError("A fraction conversion needs a Euclidean domain.", code="MISSING_DOMAIN")
        self._domain = domain
        self._elements = element_conversion or IntegerIdentityConversion()

    def can_convert_to_int(self, element: Fraction[T]) -> bool:
        return (
            self._domain.is_multiplicative_identity(element.denominator)
            and self._elements.can_convert_to_int(element.numerator)
        )

    def to_int(self, element: Fraction[T]) -> int:
        if not self._domain.is_multiplicative_identity(element.denominator):
            raise _not_an_integer(element)
        return self._elements.to_int(element.numerator)

    def from_int(self, value: int) -> Fraction[T]:
        return Fraction(self._elements.from_int(value), self._domain.multiplicative_identity, self._domain)


class PolynomialConversion(Generic[T]):
    """Constant polynomials map to the integer of their constant coefficient."""

    def __init__(
        self,
        variable: str,
        coefficient_conversion: IntegerConversion[T],
        coefficient_ring: Ring[T],
    ) -> None:
        if coefficient_conversion is None or coefficient_ring is None:
            raise ConfigurationError(
                "A polynomial conversion needs a coefficient conversion and ring.",
                code="MISSING_RING",
            )
        if not variable or not variable.strip():
            raise ConfigurationError("Polynomial variable name can't be blank.", code="INVALID_VARIABLE")
        self._variable = variable
        self._coefficients = coefficient_conversion
        self._ring = coefficient_ring

    def can_convert_to_int(self, element: UnivariatePolynomialNormalForm[T]) -> bool:
        return element.is_value and self._coefficients.can_convert_to_int(element.constant_term(self._ring))

    def to_int(self, element: UnivariatePolynomialNormalForm[T]) -> int:
        if not element.is_value:
            raise _not_an_integer(element)
        return self._coefficients.to_int(element.constant_term(self._ring))

    def from_int(self, value: int) -> UnivariatePolynomialNormalForm[T]:
        return UnivariatePolynomialNormalForm(
            self._variable, {0: self._coefficients.from_int(value)}, self._ring
        )
