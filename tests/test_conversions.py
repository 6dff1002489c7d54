import pytest

from adapters.algebra import Fraction, IntegerDomain, ModularIntegerField, UnivariatePolynomialNormalForm
from adapters.conversion import (
    DoubleToIntegerConversion,
    FractionConversion,
    IntegerIdentityConversion,
    ModularIntegerConversion,
    PolynomialConversion,
)
from contracts import ConfigurationError, DomainError

INTEGERS = IntegerDomain()


def test_integer_identity_conversion():
    conversion = IntegerIdentityConversion()

    assert conversion.from_int(-4) == -4
    assert conversion.to_int(9) == 9
    assert conversion.can_convert_to_int(1.5) is False


def test_double_conversion_uses_tolerance():
    conversion = DoubleToIntegerConversion(precision=1e-9)

    assert conversion.can_convert_to_int(2.0000000001)
    assert conversion.to_int(-3.0) == -3
    assert conversion.from_int(2) == 2.0
    assert conversion.can_convert_to_int(float("inf")) is False


def test_double_conversion_rejects_fractional_values():
    with pytest.raises(DomainError) as info:
        DoubleToIntegerConversion().to_int(2.5)

    assert info.value.code == "NOT_AN_INTEGER"


def test_negative_precision_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        DoubleToIntegerConversion(precision=-0.1)


def test_fraction_conversion_accepts_integral_fractions_only():
    conversion = FractionConversion(INTEGERS)

    assert conversion.to_int(Fraction(6, 3, INTEGERS)) == 2
    assert conversion.from_int(5) == Fraction(5, 1, INTEGERS)
    assert conversion.can_convert_to_int(Fraction(1, 2, INTEGERS)) is False
    with pytest.raises(DomainError):
        conversion.to_int(Fraction(1, 2, INTEGERS))


def test_polynomial_conversion_accepts_constants_only():
    conversion = PolynomialConversion("y", IntegerIdentityConversion(), INTEGERS)
    constant = UnivariatePolynomialNormalForm("y", {0: 7}, INTEGERS)
    linear = UnivariatePolynomialNormalForm("y", {1: 1}, INTEGERS)

    assert conversion.to_int(constant) == 7
    assert conversion.to_int(UnivariatePolynomialNormalForm.zero("y")) == 0
    assert conversion.from_int(0).is_zero
    assert conversion.can_convert_to_int(linear) is False
    with pytest.raises(DomainError):
        conversion.to_int(linear)


def test_modular_conversion_reduces_into_range():
    conversion = ModularIntegerConversion(ModularIntegerField(5))

    assert conversion.from_int(-1) == 4
    assert conversion.to_int(12) == 2
