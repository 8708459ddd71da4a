"""Most-significant non-zero bit as a one-hot vector."""

from typing import List

from constraints.base import ConstraintSystem, Gadget, require
from constraints.bits import DecomposeWithSkipChecks
from constraints.comparators import IsZero
from constraints.logic import Or
from primitives.expression import Expr
from primitives.field import MAX_DECOMPOSITION_BITS


class MSNZB(Gadget):
    """one_hot[i] = 1 exactly at the highest set bit of a non-zero b-bit input.

    Sweeps from bit b-1 down carrying found = "a higher bit was set":
        one_hot[i] = (1 - found) * bits[i]
        found     := found OR bits[i]
    Every position is evaluated and constrained; there is no early exit.

    With skip_checks == 1 neither non-zeroness nor the decomposition is
    enforced and one_hot is at most one-hot.
    """

    name = "msnzb"
    inputs = ("in", "skip_checks")
    outputs = ("one_hot",)

    def __init__(self, b: int) -> None:
        require(
            1 <= b <= MAX_DECOMPOSITION_BITS,
            f"MSNZB width must be in [1, {MAX_DECOMPOSITION_BITS}], got {b}",
        )
        self.b = b

    def define(self, cs: ConstraintSystem, x: Expr, skip_checks: Expr) -> List[Expr]:
        is_zero = IsZero()(cs, x)
        cs.assert_zero(is_zero * (1 - skip_checks), "nonzero")

        bits = DecomposeWithSkipChecks(self.b)(cs, x, skip_checks, scope="bits")

        one_hot: List[Expr] = [Expr()] * self.b
        found = Expr()
        for i in reversed(range(self.b)):
            one_hot[i] = cs.define(f"one_hot[{i}]", (1 - found) * bits[i])
            if i > 0:
                found = Or()(cs, found, bits[i], scope=f"found[{i}]")
        return one_hot
