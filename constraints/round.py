"""Rounding from precision P down to p with carry into the exponent."""

from typing import Tuple

from constraints.base import ConstraintSystem, Gadget, require
from constraints.comparators import LessThan
from constraints.logic import Select
from constraints.shift import RightShift
from primitives.expression import Expr
from primitives.field import LESS_THAN_MAX_BITS, MAX_DECOMPOSITION_BITS


class RoundAndCheck(Gadget):
    """Round a normalized (P+1)-bit mantissa half up to p+1 bits.

    Adding 2^(P-p-1) and shifting right by P-p rounds. If the biased
    mantissa reaches 2^(P+1) the result would be p+2 bits wide, so the
    overflow case instead increments e and resets m to 2^p. Both cases
    are computed; `no_overflow` selects one.

    k keeps the (k, p, P) signature shared with Normalize and is unused: the
    incremented exponent may reach 2^k, and FloatAdd range-checks the
    exponent it finally selects.
    """

    name = "round_and_check"
    inputs = ("e", "m")
    outputs = ("e_out", "m_out")

    def __init__(self, k: int, p: int, P: int) -> None:
        require(P > p, f"RoundAndCheck needs P > p, got P={P}, p={p}")
        require(
            P + 1 <= LESS_THAN_MAX_BITS and P + 2 <= MAX_DECOMPOSITION_BITS,
            f"RoundAndCheck needs P + 1 <= {LESS_THAN_MAX_BITS}, got P={P}",
        )
        self.p = p
        self.P = P

    def define(self, cs: ConstraintSystem, e: Expr, m: Expr) -> Tuple[Expr, Expr]:
        p, P = self.p, self.P
        round_amt = P - p
        half = 1 << (round_amt - 1)

        no_overflow = LessThan(P + 1)(cs, m, (1 << (P + 1)) - half, scope="no_overflow")

        # Case I: no overflow. m + half is P+2 bits wide when it does overflow,
        # so the shift is sized to stay satisfiable in both cases.
        m_rounded = RightShift(P + 2, round_amt)(cs, m + half)

        # Case II: overflow, e + 1 and 2^p
        e_out = Select()(cs, no_overflow, e, e + 1, scope="select_e")
        m_out = Select()(cs, no_overflow, m_rounded, 1 << p, scope="select_m")
        return e_out, m_out
