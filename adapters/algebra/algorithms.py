"""
Generic algorithms over the algebraic ports: exponentiation, integer scaling,
greatest common divisor and its extended form.
"""
from __future__ import annotations

from typing import TypeVar

from contracts import DomainError
from ports.algebra import EuclideanDomain, Field, Ring

T = TypeVar("T")


def power(base: T, exponent: int, ring: Ring[T]) -> T:
    """Exponentiation by squaring. Negative exponents go through the field inverse."""
    if exponent < 0:
        if not isinstance(ring, Field):
            raise DomainError(
                f"Negative exponent {exponent} requires a field.",
                code="NEGATIVE_EXPONENT",
            )
        base = ring.multiplicative_inverse(base)
        exponent = -exponent

    result = ring.multiplicative_identity
    while exponent > 0:
        if exponent & 1:
            result = ring.multiply(result, base)
        exponent >>= 1
        if exponent:
            base = ring.multiply(base, base)
    return result


def multiply_by_integer(element: T, times: int, ring: Ring[T]) -> T:
    """element added to itself `times` times (double-and-add)."""
    if times < 0:
        element = ring.additive_inverse(element)
        times = -times

    result = ring.additive_identity
    while times > 0:
        if times & 1:
            result = ring.add(result, element)
        times >>= 1
        if times:
            element = ring.add(element, element)
    return result


def greatest_common_divisor(left: T, right: T, domain: EuclideanDomain[T]) -> T:
    while not domain.is_additive_identity(right):
        left, right = right, domain.rem(left, right)
    return left


def extended_greatest_common_divisor(
    left: T, right: T, domain: EuclideanDomain[T]
) -> tuple[T, T, T]:
    """Returns (g, s, t) with s*left + t*right = g."""
    previous_s, s = domain.multiplicative_identity, domain.additive_identity
    previous_t, t = domain.additive_identity, domain.multiplicative_identity
    while not domain.is_additive_identity(right):
        quotient, remainder = domain.quo_rem(left, right)
        left, right = right, remainder
        previous_s, s = s, domain.add(previous_s, domain.additive_inverse(domain.multiply(quotient, s)))
        previous_t, t = t, domain.add(previous_t, domain.additive_inverse(domain.multiply(quotient, t)))
    return left, previous_s, previous_t
