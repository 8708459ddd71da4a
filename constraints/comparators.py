"""Zero test, equality test and bounded strict comparison."""

from constraints.base import ConstraintSystem, Gadget, require
from constraints.bits import Decompose
from primitives.expression import Expr
from primitives.field import LESS_THAN_MAX_BITS
from witness.comparators import zero_test_inverse


class IsZero(Gadget):
    """out = 1 if in == 0 else 0.

    The hint inv is 1/in (0 at the zero point). The constraints
        out = 1 - in * inv
        in * out = 0
    force out = 0 whenever in != 0, and then out = 1 when in == 0 whatever
    inv was set to.
    """

    name = "is_zero"
    inputs = ("in",)

    def define(self, cs: ConstraintSystem, x: Expr) -> Expr:
        inv = cs.hint("inv", zero_test_inverse, x)
        out = cs.define("out", 1 - x * inv)
        cs.assert_zero(x * out, "in_times_out")
        return out


class IsEqual(Gadget):
    """out = 1 if in[0] == in[1] else 0."""

    name = "is_equal"
    inputs = ("in[0]", "in[1]")

    def define(self, cs: ConstraintSystem, x: Expr, y: Expr) -> Expr:
        return IsZero()(cs, y - x)


class LessThan(Gadget):
    """out = 1 if in[0] < in[1] else 0, for operands in [0, 2^n).

    in[0] + 2^n - in[1] lies in [1, 2^n) when in[0] < in[1] and in
    [2^n, 2^(n+1)) otherwise, so its bit n is the complement of the answer.
    """

    name = "less_than"
    inputs = ("in[0]", "in[1]")

    def __init__(self, n: int) -> None:
        require(1 <= n <= LESS_THAN_MAX_BITS, f"LessThan needs 1 <= n <= {LESS_THAN_MAX_BITS}, got {n}")
        self.n = n

    def define(self, cs: ConstraintSystem, lhs: Expr, rhs: Expr) -> Expr:
        bits = Decompose(self.n + 1)(cs, lhs + (1 << self.n) - rhs)
        return cs.define("out", 1 - bits[self.n])
