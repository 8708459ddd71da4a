"""Addition of two normalized floats."""

from typing import Tuple

from constraints.base import ConstraintSystem, Gadget, require
from constraints.comparators import IsZero, LessThan
from constraints.logic import Or, Select, Swap
from constraints.normalize import Normalize
from constraints.range_check import CheckBitLength
from constraints.round import RoundAndCheck
from constraints.shift import LeftShift
from constraints.well_formedness import CheckWellFormedness
from primitives.expression import Expr
from primitives.field import LESS_THAN_MAX_BITS, MAX_DECOMPOSITION_BITS


class FloatAdd(Gadget):
    """(e_out, m_out) = (e[0], m[0]) + (e[1], m[1]) at exponent width k, precision p.

    Inputs that are not well-formed make the circuit unsatisfiable.

    1. Order the operands by packed magnitude e * 2^(p+1) + m into alpha
       (larger) and beta (smaller).
    2. diff = alpha_e - beta_e.
    3. If diff > p + 1 or alpha_e == 0, beta cannot affect the rounded
       result (or both are zero) and the answer is alpha. The shift and
       normalization on the other path then run with skip_checks = 1.
    4. Otherwise shift alpha_m left by diff onto beta's scale, add beta_m,
       normalize to 2p+1 bits of precision and round back to p.
    5. Select between the two results.
    6. Assert the selected exponent still fits in k bits. A sum that carries
       past exponent 2^k - 1 has no encoding, so that input is rejected.
    """

    name = "float_add"
    inputs = ("e[0]", "m[0]", "e[1]", "m[1]")
    outputs = ("e_out", "m_out")

    def __init__(self, k: int, p: int) -> None:
        require(k >= 1 and p >= 1, f"FloatAdd needs k, p >= 1, got k={k}, p={p}")
        require(p + 1 < (1 << k), f"FloatAdd needs p + 1 < 2^k to compare exponent gaps, got k={k}, p={p}")
        require(
            k + p + 1 <= LESS_THAN_MAX_BITS and 2 * p + 3 <= MAX_DECOMPOSITION_BITS,
            f"FloatAdd(k={k}, p={p}) exceeds the field's bit capacity",
        )
        self.k = k
        self.p = p

    def define(self, cs: ConstraintSystem, e0: Expr, m0: Expr, e1: Expr, m1: Expr) -> Tuple[Expr, Expr]:
        k, p = self.k, self.p
        P = 2 * p + 1

        CheckWellFormedness(k, p)(cs, e0, m0, scope="check_input[0]")
        CheckWellFormedness(k, p)(cs, e1, m1, scope="check_input[1]")

        # Pack into one magnitude so a single comparison orders the operands
        magnitude0 = e0 * (1 << (p + 1)) + m0
        magnitude1 = e1 * (1 << (p + 1)) + m1
        left_larger = LessThan(k + p + 1)(cs, magnitude1, magnitude0, scope="is_left_larger")

        alpha_e, beta_e = Swap()(cs, 1 - left_larger, e0, e1, scope="switch_e")
        alpha_m, beta_m = Swap()(cs, 1 - left_larger, m0, m1, scope="switch_m")

        diff = alpha_e - beta_e
        diff_too_large = LessThan(k)(cs, p + 1, diff, scope="is_diff_large")
        alpha_e_zero = IsZero()(cs, alpha_e, scope="is_alpha_e_zero")
        degenerate = Or()(cs, diff_too_large, alpha_e_zero, scope="or_condition")

        alpha_m_shifted = LeftShift(p + 2)(cs, alpha_m, diff, degenerate, scope="align")
        mantissa = alpha_m_shifted + beta_m

        e_norm, m_norm = Normalize(k, p, P)(cs, beta_e, mantissa, degenerate)
        e_round, m_round = RoundAndCheck(k, p, P)(cs, e_norm, m_norm)

        e_out = Select()(cs, degenerate, alpha_e, e_round, scope="select_e")
        m_out = Select()(cs, degenerate, alpha_m, m_round, scope="select_m")

        # Only the selected exponent is bounded; the skipped branch carries an unbounded e_norm
        e_out_fits = CheckBitLength(k)(cs, e_out, scope="e_out_bits")
        cs.assert_equal(e_out_fits, 1, "e_out_fits")
        return e_out, m_out
