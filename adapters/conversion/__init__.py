"""
Integer conversion bridges.

Public import:
    from adapters.conversion import IntegerIdentityConversion, FractionConversion
"""
from adapters.conversion.conversions import (
    DoubleToIntegerConversion,
    FractionConversion,
    IntegerIdentityConversion,
    ModularIntegerConversion,
    PolynomialConversion,
)

__all__ = [
    "DoubleToIntegerConversion",
    "FractionConversion",
    "IntegerIdentityConversion",
    "ModularIntegerConversion",
    "PolynomialConversion",
]
