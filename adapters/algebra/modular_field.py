"""
Adapter: ModularIntegerField
Implements port Field over the integers modulo a prime. Elements are plain ints
kept in the range [0, modulus).
"""
from __future__ import annotations

from contracts import ConfigurationError, DivisionByZeroError, DomainError
from adapters.algebra.algorithms import extended_greatest_common_divisor
from adapters.algebra.integer_domain import IntegerDomain


class ModularIntegerField:
    def __init__(self, modulus: int) -> None:
        if not isinstance(modulus, int) or modulus < 2:
            raise ConfigurationError(
                f"Modulus must be an integer greater than one, got {modulus!r}.",
                code="INVALID_MODULUS",
            )
        self._modulus = modulus
        self._integers = IntegerDomain()

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def additive_identity(self) -> int:
        return 0

    @property
    def multiplicative_identity(self) -> int:
        return 1 % self._modulus

    def element(self, value: int) -> int:
        return value % self._modulus

    def add(self, left: int, right: int) -> int:
        return (left + right) % self._modulus

    def multiply(self, left: int, right: int) -> int:
        return (left * right) % self._modulus

    def additive_inverse(self, element: int) -> int:
        return (-element) % self._modulus

    def multiplicative_inverse(self, element: int) -> int:
        element %= self._modulus
        if element == 0:
            raise DivisionByZeroError()
        gcd, inverse, _ = extended_greatest_common_divisor(element, self._modulus, self._integers)
        if abs(gcd) != 1:
            raise DomainError(
                f"{element} has no inverse modulo {self._modulus}.",
                code="NOT_INVERTIBLE",
            )
        return (inverse * gcd) % self._modulus

    def is_additive_identity(self, element: int) -> bool:
        return element % self._modulus == 0

    def is_multiplicative_identity(self, element: int) -> bool:
        return element % self._modulus == 1 % self._modulus
