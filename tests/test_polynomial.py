import pytest

from adapters.algebra import (
    Fraction,
    FractionField,
    IntegerDomain,
    UnivariatePolynomialEuclideanDomain,
    UnivariatePolynomialNormalForm,
    UnivariatePolynomialRing,
)
from contracts import ConfigurationError, DivisionByZeroError, DomainError

INTEGERS = IntegerDomain()
RATIONALS = FractionField(INTEGERS)


def _poly(terms, variable="x", ring=INTEGERS):
    return UnivariatePolynomialNormalForm(variable, terms, ring)


def test_zero_coefficients_are_never_stored():
    polynomial = _poly({2: 0, 1: 3})

    assert dict(polynomial.terms) == {1: 3}
    assert polynomial.degree == 1


def test_terms_without_a_coefficient_ring_are_rejected():
    with pytest.raises(ConfigurationError) as info:
        UnivariatePolynomialNormalForm("x", {2: 0, 0: 1})

    assert info.value.code == "MISSING_RING"
    assert UnivariatePolynomialNormalForm("x", {}).is_zero


def test_zero_polynomial_has_no_degree():
    zero = UnivariatePolynomialNormalForm.zero("x")

    assert zero.is_zero
    assert zero.degree is None
    assert zero.leading_coefficient(INTEGERS) == 0
    assert str(zero) == "0"


def test_blank_variable_is_rejected():
    with pytest.raises(ConfigurationError):
        UnivariatePolynomialNormalForm(" ")


def test_string_form_lists_terms_by_descending_degree():
    assert str(_poly({0: 5, 3: 1, 1: -2})) == "x^3-2*x+5"
    assert str(_poly({2: -1})) == "-x^2"
    assert str(_poly({0: -4})) == "-4"


def test_string_form_wraps_compound_coefficients():
    polynomial = _poly({1: Fraction(1, 2, INTEGERS), 0: Fraction(-3, 4, INTEGERS)}, ring=RATIONALS)

    assert str(polynomial) == "(1/2)*x+(-3/4)"


def test_equality_and_hash_use_variable_and_terms():
    assert _poly({1: 1}) == _poly({1: 1, 0: 0})
    assert _poly({1: 1}) != _poly({1: 1}, variable="y")
    assert len({_poly({1: 1}), _poly({1: 1, 0: 0})}) == 1


def test_ring_multiplication_and_addition():
    ring = UnivariatePolynomialRing("x", INTEGERS)

    product = ring.multiply(_poly({1: 1, 0: 1}), _poly({1: 1, 0: -1}))

    assert product == _poly({2: 1, 0: -1})
    assert ring.add(product, _poly({0: 1})) == _poly({2: 1})
    assert ring.is_additive_identity(ring.subtract(product, product))


def test_evaluate_and_derivative():
    ring = UnivariatePolynomialRing("x", INTEGERS)
    polynomial = _poly({3: 1, 1: 2, 0: -1})

    assert ring.evaluate(polynomial, 2) == 11
    assert ring.evaluate(ring.additive_identity, 5) == 0
    assert ring.derivative(polynomial) == _poly({2: 3, 0: 2})


def test_mixing_variables_is_a_domain_error():
    ring = UnivariatePolynomialRing("x", INTEGERS)

    with pytest.raises(DomainError) as info:
        ring.add(_poly({1: 1}), _poly({1: 1}, variable="y"))

    assert info.value.code == "VARIABLE_MISMATCH"


def test_long_division_over_rationals():
    domain = UnivariatePolynomialEuclideanDomain("x", RATIONALS)
    one = RATIONALS.multiplicative_identity
    minus_one = RATIONALS.additive_inverse(one)
    two = Fraction(2, 1, INTEGERS)

    quotient, remainder = domain.quo_rem(
        _poly({2: one, 0: one}, ring=RATIONALS),
        _poly({1: one, 0: one}, ring=RATIONALS),
    )

    assert quotient == _poly({1: one, 0: minus_one}, ring=RATIONALS)
    assert remainder == _poly({0: two}, ring=RATIONALS)
    assert domain.degree(remainder) == 0
    assert domain.degree(domain.additive_identity) == -1


def test_long_division_by_zero_polynomial_raises():
    domain = UnivariatePolynomialEuclideanDomain("x", RATIONALS)

    with pytest.raises(DivisionByZeroError):
        domain.quo_rem(domain.multiplicative_identity, domain.additive_identity)


def test_euclidean_domain_requires_field_coefficients():
    with pytest.raises(ConfigurationError):
        UnivariatePolynomialEuclideanDomain("x", INTEGERS)


def test_monic_scales_by_leading_coefficient():
    domain = UnivariatePolynomialEuclideanDomain("x", RATIONALS)
    two = Fraction(2, 1, INTEGERS)
    one = RATIONALS.multiplicative_identity

    monic = domain.monic(_poly({1: two, 0: one}, ring=RATIONALS))

    assert monic.leading_coefficient(RATIONALS) == one
    assert monic.constant_term(RATIONALS) == Fraction(1, 2, INTEGERS)
