import pytest

from adapters.algebra import (
    DoubleField,
    Fraction,
    FractionField,
    IntegerDomain,
    ModularIntegerField,
    extended_greatest_common_divisor,
    greatest_common_divisor,
    multiply_by_integer,
    power,
)
from contracts import ConfigurationError, DivisionByZeroError, DomainError
from ports.algebra import EuclideanDomain, Field

INTEGERS = IntegerDomain()
RATIONALS = FractionField(INTEGERS)


def test_structures_satisfy_their_ports():
    assert isinstance(INTEGERS, EuclideanDomain)
    assert not isinstance(INTEGERS, Field)
    assert isinstance(RATIONALS, Field)
    assert isinstance(ModularIntegerField(7), Field)
    assert isinstance(DoubleField(), Field)


def test_power_by_squaring():
    assert power(3, 4, INTEGERS) == 81
    assert power(5, 0, INTEGERS) == 1
    assert power(Fraction(2, 3, INTEGERS), -2, RATIONALS) == Fraction(9, 4, INTEGERS)


def test_negative_power_needs_a_field():
    with pytest.raises(DomainError) as info:
        power(2, -1, INTEGERS)

    assert info.value.code == "NEGATIVE_EXPONENT"


def test_multiply_by_integer():
    third = Fraction(1, 3, INTEGERS)

    assert multiply_by_integer(third, 3, RATIONALS) == RATIONALS.multiplicative_identity
    assert multiply_by_integer(third, -6, RATIONALS) == Fraction(-2, 1, INTEGERS)
    assert multiply_by_integer(7, 0, INTEGERS) == 0


def test_greatest_common_divisor():
    assert greatest_common_divisor(48, 18, INTEGERS) == 6
    assert greatest_common_divisor(0, 5, INTEGERS) == 5


def test_extended_greatest_common_divisor_gives_bezout_coefficients():
    g, s, t = extended_greatest_common_divisor(240, 46, INTEGERS)

    assert g == 2
    assert s * 240 + t * 46 == g


def test_integer_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        INTEGERS.quo_rem(1, 0)


def test_integer_unit_part_is_sign():
    assert INTEGERS.unit_part(-5) == -1
    assert INTEGERS.unit_part(0) == 1
    assert INTEGERS.degree(-5) == 5


def test_modular_field_inverse():
    field = ModularIntegerField(7)

    assert field.multiplicative_inverse(3) == 5
    assert field.multiply(3, field.multiplicative_inverse(3)) == 1
    assert field.additive_inverse(2) == 5


def test_modular_field_rejects_zero_and_non_units():
    with pytest.raises(DivisionByZeroError):
        ModularIntegerField(7).multiplicative_inverse(14)
    with pytest.raises(DomainError) as info:
        ModularIntegerField(6).multiplicative_inverse(2)

    assert info.value.code == "NOT_INVERTIBLE"


def test_modulus_must_exceed_one():
    with pytest.raises(ConfigurationError):
        ModularIntegerField(1)


def test_double_field_zero_tolerance():
    field = DoubleField(precision=1e-12)

    assert field.is_additive_identity(1e-13)
    with pytest.raises(DivisionByZeroError):
        field.multiplicative_inverse(0.0)
