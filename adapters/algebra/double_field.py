"""
Adapter: DoubleField
Implements port Field over Python float. Only used when a caller explicitly
opts into floating semantics; every other structure here is exact.
"""
from __future__ import annotations

from contracts import DivisionByZeroError


class DoubleField:
    def __init__(self, precision: float = 0.0) -> None:
        # values within `precision` of zero count as the additive identity
        self._precision = abs(precision)

    @property
    def additive_identity(self) -> float:
        return 0.0

    @property
    def multiplicative_identity(self) -> float:
        return 1.0

    def add(self, left: float, right: float) -> float:
        return left + right

    def multiply(self, left: float, right: float) -> float:
        return left * right

    def additive_inverse(self, element: float) -> float:
        return -element

    def multiplicative_inverse(self, element: float) -> float:
        if self.is_additive_identity(element):
            raise DivisionByZeroError()
        return 1.0 / element

    def is_additive_identity(self, element: float) -> bool:
        return abs(element) <= self._precision

    def is_multiplicative_identity(self, element: float) -> bool:
        return abs(element - 1.0) <= self._precision
