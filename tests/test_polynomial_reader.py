import pytest

from adapters.algebra import Fraction, FractionField, IntegerDomain
from adapters.conversion import FractionConversion, IntegerIdentityConversion, PolynomialConversion
from adapters.leaf_parsers import ElementFractionParser, IntegerParser
from adapters.leaf_parsers.polynomial_parser import PolynomialCoefficientParser
from adapters.polynomial_reader import UnivariatePolynomialReader
from contracts import ConfigurationError, DivisionByZeroError, DomainError, ParseIssue

INTEGERS = IntegerDomain()
RATIONALS = FractionField(INTEGERS)


def _integer_reader(variable="x"):
    return UnivariatePolynomialReader(variable, IntegerParser(), INTEGERS, IntegerIdentityConversion())


def _rational_reader():
    return UnivariatePolynomialReader(
        "x",
        ElementFractionParser(IntegerParser(), INTEGERS),
        RATIONALS,
        FractionConversion(INTEGERS),
    )


def _nested_reader():
    inner = _integer_reader("y")
    outer = UnivariatePolynomialReader(
        "x",
        PolynomialCoefficientParser(inner),
        inner.ring,
        PolynomialConversion("y", IntegerIdentityConversion(), INTEGERS),
    )
    return inner, outer


def _q(numerator, denominator=1):
    return Fraction(numerator, denominator, INTEGERS)


def test_like_terms_merge_by_ring_addition():
    polynomial = _integer_reader().parse("x^2+3*x^2")

    assert dict(polynomial.terms) == {2: 4}


def test_cancelling_terms_leave_the_zero_polynomial():
    polynomial = _integer_reader().parse("x - x")

    assert polynomial.is_zero
    assert dict(polynomial.terms) == {}


def test_sparse_high_degree_polynomial_round_trips_through_text():
    text = "x^1000-2*x^550+1000*x^10+50"

    polynomial = _integer_reader().parse(text)

    assert dict(polynomial.terms) == {1000: 1, 550: -2, 10: 1000, 0: 50}
    assert str(polynomial) == text


@pytest.mark.parametrize(
    "text, terms",
    [
        ("(x+1)^2", {2: 1, 1: 2, 0: 1}),
        ("2*(x-3)", {1: 2, 0: -6}),
        ("-x^2", {2: -1}),
        ("4*x/2", {1: 2}),
        ("7", {0: 7}),
        ("x^0", {0: 1}),
    ],
)
def test_integer_coefficient_forms(text, terms):
    assert dict(_integer_reader().parse(text).terms) == terms


def test_unknown_identifier_is_a_syntax_failure():
    result = _integer_reader().try_parse("y+1")

    assert result.success is False
    assert result.issues[0].code == "UNKNOWN_VARIABLE"
    assert result.issues[0].expected == "x"


def test_unbalanced_input_is_a_syntax_failure():
    errors: list[ParseIssue] = []

    assert _integer_reader().parse("(x+1", errors) is None
    assert errors[0].code == "MISSING_CLOSE_DELIMITER"


@pytest.mark.parametrize(
    "text, code",
    [
        ("x^x", "POLYNOMIAL_EXPONENT"),
        ("1/x", "POLYNOMIAL_DIVISOR"),
        ("x/2", "INEXACT_DIVISION"),
        ("x^-1", "NEGATIVE_EXPONENT"),
    ],
)
def test_semantic_problems_raise_domain_errors(text, code):
    with pytest.raises(DomainError) as info:
        _integer_reader().parse(text)

    assert info.value.code == code


def test_division_by_zero_raises():
    with pytest.raises(DivisionByZeroError):
        _integer_reader().parse("x/0")


def test_fraction_coefficients():
    polynomial = _rational_reader().parse("1/2*x^5+3/4*x^4-2/7*x^3+5/3*x^2+1/5*x+9")

    assert dict(polynomial.terms) == {
        5: _q(1, 2),
        4: _q(3, 4),
        3: _q(-2, 7),
        2: _q(5, 3),
        1: _q(1, 5),
        0: _q(9),
    }


def test_fraction_coefficient_polynomial_round_trips_through_text():
    reader = _rational_reader()
    polynomial = reader.parse("1/2*x^5+3/4*x^4-2/7*x^3+5/3*x^2+1/5*x+9")

    assert reader.parse(str(polynomial)) == polynomial


def test_fraction_coefficients_from_division_and_negative_powers():
    reader = _rational_reader()

    assert dict(reader.parse("x/2").terms) == {1: _q(1, 2)}
    assert dict(reader.parse("2^-1*x").terms) == {1: _q(1, 2)}
    assert dict(reader.parse("(x+1)*(x-1)").terms) == {2: _q(1), 0: _q(-1)}


def test_nested_polynomial_coefficients():
    inner, outer = _nested_reader()

    polynomial = outer.parse("(y^2+y+1)*x^3-2*x^2*y+x*(y^5-3)+4")

    assert dict(polynomial.terms) == {
        3: inner.parse("y^2+y+1"),
        2: inner.parse("-2*y"),
        1: inner.parse("y^5-3"),
        0: inner.parse("4"),
    }


def test_nested_polynomial_round_trips_through_text():
    _, outer = _nested_reader()
    polynomial = outer.parse("(y^2+y+1)*x^3-2*x^2*y+x*(y^5-3)+4")

    assert outer.parse(str(polynomial)) == polynomial


def test_nested_reader_rejects_third_variable():
    _, outer = _nested_reader()

    result = outer.try_parse("z*x")

    assert result.issues[0].code == "UNKNOWN_VARIABLE"


def test_nested_exponent_must_be_constant():
    _, outer = _nested_reader()

    with pytest.raises(DomainError) as info:
        outer.parse("x^y")

    assert info.value.code == "NON_INTEGER_EXPONENT"


def test_configuration_is_validated_at_construction():
    with pytest.raises(ConfigurationError):
        UnivariatePolynomialReader("", IntegerParser(), INTEGERS, IntegerIdentityConversion())
    with pytest.raises(ConfigurationError):
        UnivariatePolynomialReader("x", IntegerParser(), INTEGERS, None)
    with pytest.raises(ConfigurationError):
        UnivariatePolynomialReader("x", None, INTEGERS, IntegerIdentityConversion())


def test_bracket_delimiters_can_be_added():
    reader = _integer_reader()
    reader.register_expression_delimiters("left_bracket", "right_bracket")

    assert dict(reader.parse("[x+1]*2").terms) == {1: 2, 0: 2}


def test_cleared_expression_delimiters_stop_grouping():
    reader = _integer_reader()
    reader.register_expression_delimiters("left_bracket", "right_bracket")

    reader.clear_expression_delimiters()

    assert reader.try_parse("(x+1)").success is False
    assert reader.try_parse("[x]").success is False
    assert dict(reader.parse("x+1").terms) == {1: 1, 0: 1}


def test_built_reader_is_reused_until_a_conversion_override(monkeypatch):
    reader = _integer_reader()
    builds = []
    build = reader._build
    monkeypatch.setattr(reader, "_build", lambda conversion: builds.append(conversion) or build(conversion))

    reader.parse("x^2+1")
    reader.parse("2*x", conversion=reader.conversion)
    assert builds == []

    override = IntegerIdentityConversion()
    assert dict(reader.parse("x^3", conversion=override).terms) == {3: 1}
    assert builds == [override]
