"""Fixed-amount right shift and circuit-chosen left shift."""

from functools import partial

from constraints.base import ConstraintSystem, Gadget, require
from constraints.bits import Decompose
from constraints.comparators import IsEqual
from primitives.expression import Expr, linear_combination
from primitives.field import MAX_DECOMPOSITION_BITS
from witness.shift import power_of_two, right_shift_quotient


class RightShift(Gadget):
    """y = x >> shift for a b-bit x, with shift fixed at definition time.

    The hint y and the derived rem = x - y * 2^shift are range-checked to
    b - shift and shift bits. Only the true quotient keeps rem in range.
    """

    name = "right_shift"
    inputs = ("x",)
    outputs = ("y",)

    def __init__(self, b: int, shift: int) -> None:
        require(
            1 <= b <= MAX_DECOMPOSITION_BITS,
            f"RightShift width must be in [1, {MAX_DECOMPOSITION_BITS}], got {b}",
        )
        require(0 <= shift < b, f"RightShift needs 0 <= shift < b, got shift={shift}, b={b}")
        self.b = b
        self.shift = shift

    def define(self, cs: ConstraintSystem, x: Expr) -> Expr:
        y = cs.hint("y", partial(right_shift_quotient, self.shift), x)
        Decompose(self.b - self.shift)(cs, y, scope="y_bits")
        rem = cs.define("rem", x - y * (1 << self.shift))
        Decompose(self.shift)(cs, rem, scope="rem_bits")
        return y


class LeftShift(Gadget):
    """y = x * 2^shift for a circuit value 0 <= shift < shift_bound.

    A variable shift amount cannot be a constant multiplier, so every
    candidate i gets an equality test shift == i. Their sum says whether
    shift is in range, and sum((shift == i) * 2^i) rebuilds 2^shift, which
    the hint shifted1 has to match. Cost is linear in shift_bound.

    With skip_checks == 1 neither assertion is enforced and y may be
    garbage: the branch using it is known to be discarded.
    """

    name = "left_shift"
    inputs = ("x", "shift", "skip_checks")
    outputs = ("y",)

    def __init__(self, shift_bound: int) -> None:
        require(
            1 <= shift_bound <= MAX_DECOMPOSITION_BITS,
            f"LeftShift bound must be in [1, {MAX_DECOMPOSITION_BITS}], got {shift_bound}",
        )
        self.shift_bound = shift_bound

    def define(self, cs: ConstraintSystem, x: Expr, shift: Expr, skip_checks: Expr) -> Expr:
        shifted1 = cs.hint("shifted1", power_of_two, shift)

        matches = [IsEqual()(cs, shift, i, scope=f"is_eq[{i}]") for i in range(self.shift_bound)]
        in_range = linear_combination((1, match) for match in matches)
        pow_two = linear_combination((1 << i, match) for i, match in enumerate(matches))

        cs.assert_zero((in_range - 1) * (1 - skip_checks), "shift_in_range")
        cs.assert_zero((pow_two - shifted1) * (1 - skip_checks), "power_of_two")
        return cs.define("y", x * shifted1)
