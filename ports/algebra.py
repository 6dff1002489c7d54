"""
Port: Ring / Field / EuclideanDomain
Responsibility: the algebraic capabilities the readers delegate every arithmetic step to.
Readers never inspect element types; they only call these operations.
"""
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Ring(Protocol[T]):
    @property
    def additive_identity(self) -> T:
        ...

    @property
    def multiplicative_identity(self) -> T:
        ...

    def add(self, left: T, right: T) -> T:
        ...

    def multiply(self, left: T, right: T) -> T:
        ...

    def additive_inverse(self, element: T) -> T:
        ...

    def is_additive_identity(self, element: T) -> bool:
        ...

    def is_multiplicative_identity(self, element: T) -> bool:
        ...


@runtime_checkable
class Field(Ring[T], Protocol[T]):
    def multiplicative_inverse(self, element: T) -> T:
        """
        Returns the inverse of a non-zero element.
        Raises DivisionByZeroError for the additive identity.
        """
        ...


@runtime_checkable
class EuclideanDomain(Ring[T], Protocol[T]):
    def quo(self, dividend: T, divisor: T) -> T:
        ...

    def rem(self, dividend: T, divisor: T) -> T:
        ...

    def quo_rem(self, dividend: T, divisor: T) -> tuple[T, T]:
        """
        Euclidean division. Raises DivisionByZeroError when divisor is the additive identity.
        """
        ...

    def degree(self, element: T) -> int:
        """Euclidean norm used to terminate the remainder sequence."""
        ...

    def unit_part(self, element: T) -> T:
        """
        Unit u such that element = u * canonical(element).
        Fractions divide both terms by the unit part of the denominator so the
        denominator is the canonical representative of its unit class.
        """
        ...
