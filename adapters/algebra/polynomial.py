"""
Adapter: UnivariatePolynomialNormalForm
Immutable univariate polynomial value: a variable name and a sparse map
degree -> coefficient with no zero coefficients stored.
Any terms given must come with their coefficient ring; only the zero
polynomial can be built without one.
Arithmetic lives in adapters.algebra.polynomial_ring.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Generic, Iterator, Mapping, Optional, TypeVar

from contracts import ConfigurationError
from ports.algebra import Ring
from adapters.algebra.formatting import is_atomic

T = TypeVar("T")


class UnivariatePolynomialNormalForm(Generic[T]):
    __slots__ = ("_variable", "_terms")

    def __init__(
        self,
        variable: str,
        terms: Optional[Mapping[int, T]] = None,
        ring: Optional[Ring[T]] = None,
    ) -> None:
        if not variable or not variable.strip():
            raise ConfigurationError("Polynomial variable name can't be blank.", code="INVALID_VARIABLE")
        if terms and ring is None:
            raise ConfigurationError(
                "Polynomial terms need the coefficient ring to drop zero coefficients.",
                code="MISSING_RING",
            )
        cleaned: dict[int, T] = {}
        for degree, coefficient in (terms or {}).items():
            if degree < 0:
                raise ValueError(f"Negative degree {degree} in polynomial term.")
            if ring.is_additive_identity(coefficient):
                continue
            cleaned[degree] = coefficient
        self._variable = variable
        self._terms = MappingProxyType(cleaned)

    @classmethod
    def zero(cls, variable: str) -> "UnivariatePolynomialNormalForm[T]":
        return cls(variable)

    @classmethod
    def monomial(
        cls, coefficient: T, degree: int, variable: str, ring: Ring[T]
    ) -> "UnivariatePolynomialNormalForm[T]":
        return cls(variable, {degree: coefficient}, ring)

    @property
    def variable(self) -> str:
        return self._variable

    @property
    def terms(self) -> Mapping[int, T]:
        return self._terms

    @property
    def degree(self) -> Optional[int]:
        """None for the zero polynomial."""
        return max(self._terms) if self._terms else None

    @property
    def is_zero(self) -> bool:
        return not self._terms

    @property
    def is_value(self) -> bool:
        """True for constants (including zero)."""
        return not self._terms or self.degree == 0

    def coefficient(self, degree: int, ring: Ring[T]) -> T:
        return self._terms.get(degree, ring.additive_identity)

    def leading_coefficient(self, ring: Ring[T]) -> T:
        if not self._terms:
            return ring.additive_identity
        return self._terms[max(self._terms)]

    def constant_term(self, ring: Ring[T]) -> T:
        return self.coefficient(0, ring)

    def items(self) -> Iterator[tuple[int, T]]:
        """Terms in descending degree."""
        for degree in sorted(self._terms, reverse=True):
            yield degree, self._terms[degree]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnivariatePolynomialNormalForm):
            return NotImplemented
        return self._variable == other._variable and dict(self._terms) == dict(other._terms)

    def __hash__(self) -> int:
        return hash((self._variable, frozenset(self._terms.items())))

    def __str__(self) -> str:
        if not self._terms:
            return "0"
        text = ""
        for degree, coefficient in self.items():
            term = _format_term(coefficient, degree, self._variable)
            if text and not term.startswith("-"):
                text += "+"
            text += term
        return text

    def __repr__(self) -> str:
        return f"UnivariatePolynomialNormalForm({self._variable!r}, {dict(self._terms)!r})"


def _format_term(coefficient: object, degree: int, variable: str) -> str:
    text = str(coefficient)
    if degree == 0:
        return text if is_atomic(text) else f"({text})"

    monomial = variable if degree == 1 else f"{variable}^{degree}"
    if text == "1":
        return monomial
    if text == "-1":
        return f"-{monomial}"
    if not is_atomic(text):
        text = f"({text})"
    return f"{text}*{monomial}"
