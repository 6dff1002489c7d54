"""
Adapter: UnivariatePolynomialRing / UnivariatePolynomialEuclideanDomain
Implements port Ring (and EuclideanDomain when the coefficients form a field)
over UnivariatePolynomialNormalForm values in one fixed variable.
"""
from __future__ import annotations

from typing import Generic, TypeVar

from contracts import ConfigurationError, DivisionByZeroError, DomainError
from ports.algebra import Field, Ring
from adapters.algebra.algorithms import multiply_by_integer
from adapters.algebra.polynomial import UnivariatePolynomialNormalForm

T = TypeVar("T")

Polynomial = UnivariatePolynomialNormalForm


class UnivariatePolynomialRing(Generic[T]):
    def __init__(self, variable: str, coefficient_ring: Ring[T]) -> None:
        if coefficient_ring is None:
            raise ConfigurationError("A polynomial ring needs a coefficient ring.", code="MISSING_RING")
        if not variable or not variable.strip():
            raise ConfigurationError("Polynomial variable name can't be blank.", code="INVALID_VARIABLE")
        self._variable = variable
        self._coefficients = coefficient_ring

    @property
    def variable(self) -> str:
        return self._variable

    @property
    def coefficient_ring(self) -> Ring[T]:
        return self._coefficients

    @property
    def additive_identity(self) -> Polynomial[T]:
        return Polynomial.zero(self._variable)

    @property
    def multiplicative_identity(self) -> Polynomial[T]:
        return self.constant(self._coefficients.multiplicative_identity)

    def constant(self, coefficient: T) -> Polynomial[T]:
        return Polynomial(self._variable, {0: coefficient}, self._coefficients)

    def monomial(self, coefficient: T, degree: int) -> Polynomial[T]:
        return Polynomial(self._variable, {degree: coefficient}, self._coefficients)

    def add(self, left: Polynomial[T], right: Polynomial[T]) -> Polynomial[T]:
        self._check_variable(left, right)
        terms = dict(left.terms)
        for degree, coefficient in right.terms.items():
            if degree in terms:
                terms[degree] = self._coefficients.add(terms[degree], coefficient)
            else:
                terms[degree] = coefficient
        return Polynomial(self._variable, terms, self._coefficients)

    def subtract(self, left: Polynomial[T], right: Polynomial[T]) -> Polynomial[T]:
        return self.add(left, self.additive_inverse(right))

    def multiply(self, left: Polynomial[T], right: Polynomial[T]) -> Polynomial[T]:
        self._check_variable(left, right)
        ring = self._coefficients
        terms: dict[int, T] = {}
        for left_degree, left_coefficient in left.terms.items():
            for right_degree, right_coefficient in right.terms.items():
                degree = left_degree + right_degree
                product = ring.multiply(left_coefficient, right_coefficient)
                terms[degree] = ring.add(terms[degree], product) if degree in terms else product
        return Polynomial(self._variable, terms, ring)

    def scale(self, polynomial: Polynomial[T], coefficient: T) -> Polynomial[T]:
        ring = self._coefficients
        return Polynomial(
            self._variable,
            {degree: ring.multiply(value, coefficient) for degree, value in polynomial.terms.items()},
            ring,
        )

    def additive_inverse(self, element: Polynomial[T]) -> Polynomial[T]:
        ring = self._coefficients
        return Polynomial(
            self._variable,
            {degree: ring.additive_inverse(value) for degree, value in element.terms.items()},
            ring,
        )

    def is_additive_identity(self, element: Polynomial[T]) -> bool:
        return element.is_zero

    def is_multiplicative_identity(self, element: Polynomial[T]) -> bool:
        return element.degree == 0 and self._coefficients.is_multiplicative_identity(element.terms[0])

    def evaluate(self, polynomial: Polynomial[T], value: T) -> T:
        """Horner evaluation at a coefficient-ring element."""
        ring = self._coefficients
        if polynomial.is_zero:
            return ring.additive_identity
        result = ring.additive_identity
        for degree in range(polynomial.degree, -1, -1):
            result = ring.add(ring.multiply(result, value), polynomial.coefficient(degree, ring))
        return result

    def derivative(self, polynomial: Polynomial[T]) -> Polynomial[T]:
        ring = self._coefficients
        return Polynomial(
            self._variable,
            {
                degree - 1: multiply_by_integer(coefficient, degree, ring)
                for degree, coefficient in polynomial.terms.items()
                if degree > 0
            },
            ring,
        )

    def _check_variable(self, *polynomials: Polynomial[T]) -> None:
        for polynomial in polynomials:
            if polynomial.variable != self._variable:
                raise DomainError(
                    f"Polynomial in {polynomial.variable!r} used in the ring over {self._variable!r}.",
                    code="VARIABLE_MISMATCH",
                )


class UnivariatePolynomialEuclideanDomain(UnivariatePolynomialRing[T]):
    """Polynomials over a field, with long division. unit_part is the leading coefficient."""

    def __init__(self, variable: str, coefficient_field: Field[T]) -> None:
        if coefficient_field is not None and not isinstance(coefficient_field, Field):
            raise ConfigurationError(
                "Polynomial long division needs field coefficients.",
                code="NOT_A_FIELD",
            )
        super().__init__(variable, coefficient_field)

    def quo_rem(
        self, dividend: Polynomial[T], divisor: Polynomial[T]
    ) -> tuple[Polynomial[T], Polynomial[T]]:
        self._check_variable(dividend, divisor)
        if divisor.is_zero:
            raise DivisionByZeroError()

        field = self._coefficients
        divisor_degree = divisor.degree
        inverse_lead = field.multiplicative_inverse(divisor.leading_coefficient(field))
        quotient: dict[int, T] = {}
        remainder = dividend
        while not remainder.is_zero and remainder.degree >= divisor_degree:
            shift = remainder.degree - divisor_degree
            factor = field.multiply(remainder.leading_coefficient(field), inverse_lead)
            quotient[shift] = factor
            leading = remainder.degree
            remainder = self.subtract(remainder, self.multiply(self.monomial(factor, shift), divisor))
            # the leading term cancels by construction; drop any rounding residue
            remainder = Polynomial(
                self._variable,
                {degree: value for degree, value in remainder.terms.items() if degree != leading},
                field,
            )
        return Polynomial(self._variable, quotient, field), remainder

    def quo(self, dividend: Polynomial[T], divisor: Polynomial[T]) -> Polynomial[T]:
        return self.quo_rem(dividend, divisor)[0]

    def rem(self, dividend: Polynomial[T], divisor: Polynomial[T]) -> Polynomial[T]:
        return self.quo_rem(dividend, divisor)[1]

    def degree(self, element: Polynomial[T]) -> int:
        return -1 if element.is_zero else element.degree

    def unit_part(self, element: Polynomial[T]) -> Polynomial[T]:
        if element.is_zero:
            return self.multiplicative_identity
        return self.constant(element.leading_coefficient(self._coefficients))

    def monic(self, element: Polynomial[T]) -> Polynomial[T]:
        if element.is_zero:
            return element
        field = self._coefficients
        return self.scale(element, field.multiplicative_inverse(element.leading_coefficient(field)))
