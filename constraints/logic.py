"""Boolean and selector primitives.

None of these range-check their inputs: callers guarantee that a, b,
cond and sel are 0 or 1. Outside {0, 1} the outputs are still well-defined
field values, just meaningless.
"""

from constraints.base import ConstraintSystem, Gadget
from primitives.expression import Expr


class And(Gadget):
    """out = a * b."""

    name = "and"
    inputs = ("a", "b")

    def define(self, cs: ConstraintSystem, a: Expr, b: Expr) -> Expr:
        return cs.define("out", a * b)


class Or(Gadget):
    """out = a + b - a * b."""

    name = "or"
    inputs = ("a", "b")

    def define(self, cs: ConstraintSystem, a: Expr, b: Expr) -> Expr:
        return cs.define("out", a + b - a * b)


class Select(Gadget):
    """out = L if cond == 1 else R, as cond * (L - R) + R."""

    name = "select"
    inputs = ("cond", "L", "R")

    def define(self, cs: ConstraintSystem, cond: Expr, left: Expr, right: Expr) -> Expr:
        return cs.define("out", cond * (left - right) + right)


class Swap(Gadget):
    """(outL, outR) = (R, L) if sel == 1 else (L, R).

    One auxiliary variable aux = sel * (R - L) carries the only
    multiplication; both outputs are linear in it.
    """

    name = "swap"
    inputs = ("sel", "L", "R")
    outputs = ("outL", "outR")

    def define(self, cs: ConstraintSystem, sel: Expr, left: Expr, right: Expr):
        aux = cs.define("aux", sel * (right - left))
        return aux + left, right - aux
