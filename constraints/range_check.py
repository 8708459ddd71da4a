"""Cheap range check: does a value fit in b bits?"""

from functools import partial

from constraints.base import ConstraintSystem, Gadget, require
from constraints.comparators import IsEqual, LessThan
from constraints.logic import And
from primitives.expression import Expr
from primitives.field import LESS_THAN_MAX_BITS
from witness.comparators import bit_length_remainder


class CheckBitLength(Gadget):
    """out = 1 if 0 <= in < 2^b, without decomposing `in`.

    The hint rem = 2^b - (in mod 2^b) completes `in` to exactly 2^b when
    it fits. Two bounded comparisons pin rem to [1, 2^b], so
    in + rem == 2^b leaves `in` in [0, 2^b) as the only option.

    out = 1 is sound: no assignment reports an out-of-range value as
    fitting. out = 0 is only as good as the hint, so consumers assert
    out == 1 rather than branch on a 0. Never use this where the bits
    themselves are needed downstream; use Decompose.

    b is limited to 1..251, two bits short of the field's decomposition
    capacity: the bounds on rem are LessThan(b + 1) comparisons, which
    decompose b + 2 bits. Wider values need Decompose.
    """

    name = "check_bit_length"
    inputs = ("in",)

    def __init__(self, b: int) -> None:
        require(
            1 <= b and b + 1 <= LESS_THAN_MAX_BITS,
            f"CheckBitLength needs 1 <= b <= {LESS_THAN_MAX_BITS - 1}, got {b}",
        )
        self.b = b

    def define(self, cs: ConstraintSystem, x: Expr) -> Expr:
        b = self.b
        rem = cs.hint("rem", partial(bit_length_remainder, b), x)
        rem_gt0 = LessThan(b + 1)(cs, 0, rem, scope="rem_gt0")
        rem_le_max = LessThan(b + 1)(cs, rem, (1 << b) + 1, scope="rem_le_max")
        completes = IsEqual()(cs, x + rem, 1 << b, scope="completes")
        rem_in_range = And()(cs, rem_gt0, rem_le_max, scope="rem_in_range")
        return And()(cs, rem_in_range, completes, scope="fits")
