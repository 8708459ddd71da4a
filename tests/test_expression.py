"""Tests for the polynomial expression algebra."""

import pytest

from primitives.expression import Expr, linear_combination
from primitives.field import FF, FIELD_MODULUS, felt, to_int


def _values(*ints: int) -> FF:
    return FF([i % FIELD_MODULUS for i in ints])


class TestExprConstruction:

    def test_zero_constant_is_empty(self) -> None:
        assert Expr.constant(0).terms == {}
        assert Expr.constant(FIELD_MODULUS).terms == {}

    def test_constant(self) -> None:
        c = Expr.constant(7)
        assert c.is_constant
        assert c.degree == 0
        assert c.constant_value == FF(7)

    def test_variable(self) -> None:
        x = Expr.variable(3)
        assert not x.is_constant
        assert x.degree == 1
        assert x.variables == [3]
        assert x.single_variable == 3

    def test_lift_keeps_expr(self) -> None:
        x = Expr.variable(0)
        assert Expr.lift(x) is x
        assert Expr.lift(5).constant_value == FF(5)

    def test_constant_value_of_variable_raises(self) -> None:
        with pytest.raises(ValueError, match="not constant"):
            Expr.variable(0).constant_value


class TestExprArithmetic:

    def test_add_and_cancel(self) -> None:
        """x - x cancels to the zero polynomial."""
        x = Expr.variable(0)
        assert (x - x).terms == {}
        assert (x + x).terms == {(0,): FF(2)}

    def test_int_mixing(self) -> None:
        """Ints lift on either side of an operator."""
        x = Expr.variable(0)
        e = 1 - x * 3 + 2
        assert to_int(e.evaluate(_values(5))) == (3 - 15) % FIELD_MODULUS

    def test_product_degree(self) -> None:
        x, y = Expr.variable(0), Expr.variable(1)
        assert (x * y).degree == 2
        assert (x * y * x).degree == 3
        assert (x * y).terms == (y * x).terms

    def test_repeated_variable_monomial(self) -> None:
        x = Expr.variable(2)
        assert (x * x).terms == {(2, 2): FF(1)}

    def test_scale_by_zero(self) -> None:
        x = Expr.variable(0)
        assert (x * 0).terms == {}
        assert (0 * x).terms == {}

    def test_negation(self) -> None:
        x = Expr.variable(0)
        assert to_int((-x).evaluate(_values(4))) == FIELD_MODULUS - 4

    def test_single_variable_rejects_scaled(self) -> None:
        x = Expr.variable(0)
        assert (2 * x).single_variable is None
        assert (x + 1).single_variable is None

    def test_evaluate(self) -> None:
        """(x0 + 2) * x1 - 3 at x0 = 4, x1 = 5."""
        x0, x1 = Expr.variable(0), Expr.variable(1)
        e = (x0 + 2) * x1 - 3
        assert e.evaluate(_values(4, 5)) == FF(27)

    def test_repr(self) -> None:
        assert repr(Expr()) == "Expr(0)"
        assert "x0" in repr(Expr.variable(0) + 1)


class TestLinearCombination:

    def test_matches_chained_sum(self) -> None:
        xs = [Expr.variable(i) for i in range(5)]
        chained = Expr()
        for i, x in enumerate(xs):
            chained = chained + x * (1 << i)
        combined = linear_combination((1 << i, x) for i, x in enumerate(xs))
        assert combined.terms == chained.terms

    def test_skips_zero_coefficients(self) -> None:
        combined = linear_combination([(0, Expr.variable(0)), (3, Expr.variable(1))])
        assert combined.variables == [1]

    def test_accepts_int_expressions(self) -> None:
        combined = linear_combination([(2, 5), (1, Expr.variable(0))])
        assert combined.evaluate(_values(1)) == felt(11)

    def test_rejects_expr_coefficient(self) -> None:
        with pytest.raises(TypeError):
            linear_combination([(Expr.variable(0), Expr.variable(1))])
