"""
Adapter: IntegerDomain
Implements port EuclideanDomain over Python int (arbitrary precision, so it
covers the int/long/big-integer variants at once).
"""
from __future__ import annotations

from contracts import DivisionByZeroError


class IntegerDomain:
    @property
    def additive_identity(self) -> int:
        return 0

    @property
    def multiplicative_identity(self) -> int:
        return 1

    def add(self, left: int, right: int) -> int:
        return left + right

    def multiply(self, left: int, right: int) -> int:
        return left * right

    def additive_inverse(self, element: int) -> int:
        return -element

    def is_additive_identity(self, element: int) -> bool:
        return element == 0

    def is_multiplicative_identity(self, element: int) -> bool:
        return element == 1

    def quo_rem(self, dividend: int, divisor: int) -> tuple[int, int]:
        if divisor == 0:
            raise DivisionByZeroError()
        return divmod(dividend, divisor)

    def quo(self, dividend: int, divisor: int) -> int:
        return self.quo_rem(dividend, divisor)[0]

    def rem(self, dividend: int, divisor: int) -> int:
        return self.quo_rem(dividend, divisor)[1]

    def degree(self, element: int) -> int:
        return abs(element)

    def unit_part(self, element: int) -> int:
        return -1 if element < 0 else 1
