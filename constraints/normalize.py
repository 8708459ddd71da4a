"""Normalization of an unnormalized mantissa."""

from typing import Tuple

from constraints.base import ConstraintSystem, Gadget, require
from constraints.bits import Compose
from constraints.msnzb import MSNZB
from primitives.expression import Expr, linear_combination
from primitives.field import MAX_DECOMPOSITION_BITS
from witness.normalize import guarded_inverse


class Normalize(Gadget):
    """Re-express (e, m) with m moved to P+1 bits and its top bit set.

    Given a non-zero (P+1)-bit m with highest set bit ell:
        m_out = m * 2^P / 2^ell
        e_out = e + ell - p

    2^ell comes from composing the MSNZB one-hot vector (only one weight
    survives the sum), and the left shift is a multiplication by its
    inverse. The inverse hint is 0 when skip_checks == 1, and the inverse
    identity is only enforced when skip_checks == 0.

    k keeps the (k, p, P) signature shared with RoundAndCheck and is
    unused: e_out is not range-checked here, the caller bounds the
    exponent it keeps.
    """

    name = "normalize"
    inputs = ("e", "m", "skip_checks")
    outputs = ("e_out", "m_out")

    def __init__(self, k: int, p: int, P: int) -> None:
        require(P > p, f"Normalize needs P > p, got P={P}, p={p}")
        require(
            P + 1 <= MAX_DECOMPOSITION_BITS,
            f"Normalize needs P + 1 <= {MAX_DECOMPOSITION_BITS}, got P={P}",
        )
        self.p = p
        self.P = P

    def define(self, cs: ConstraintSystem, e: Expr, m: Expr, skip_checks: Expr) -> Tuple[Expr, Expr]:
        P = self.P
        one_hot = MSNZB(P + 1)(cs, m, skip_checks)
        ell = linear_combination((i, bit) for i, bit in enumerate(one_hot))
        pow_ell = Compose(P + 1)(cs, one_hot, scope="pow_ell")

        inv = cs.hint("inv_pow_ell", guarded_inverse, pow_ell, skip_checks)
        product = cs.define("pow_ell_times_inv", pow_ell * inv)
        cs.assert_zero((product - 1) * (1 - skip_checks), "inverse")

        m_out = cs.define("m_out", m * inv * (1 << P))
        e_out = cs.define("e_out", e + ell - self.p)
        return e_out, m_out
