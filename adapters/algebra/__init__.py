"""
Algebraic structures used by the readers.

Public import:
    from adapters.algebra import IntegerDomain, FractionField, UnivariatePolynomialRing
"""
from adapters.algebra.algorithms import (
    extended_greatest_common_divisor,
    greatest_common_divisor,
    multiply_by_integer,
    power,
)
from adapters.algebra.double_field import DoubleField
from adapters.algebra.fraction import Fraction, FractionField
from adapters.algebra.integer_domain import IntegerDomain
from adapters.algebra.modular_field import ModularIntegerField
from adapters.algebra.polynomial import UnivariatePolynomialNormalForm
from adapters.algebra.polynomial_ring import (
    UnivariatePolynomialEuclideanDomain,
    UnivariatePolynomialRing,
)

__all__ = [
    "DoubleField",
    "Fraction",
    "FractionField",
    "IntegerDomain",
    "ModularIntegerField",
    "UnivariatePolynomialEuclideanDomain",
    "UnivariatePolynomialNormalForm",
    "UnivariatePolynomialRing",
    "extended_greatest_common_divisor",
    "greatest_common_divisor",
    "multiply_by_integer",
    "power",
]
