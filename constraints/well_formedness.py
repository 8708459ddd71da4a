"""Normalized float encoding check."""

from constraints.base import ConstraintSystem, Gadget, require
from constraints.comparators import IsZero
from constraints.logic import And, Select
from constraints.range_check import CheckBitLength
from primitives.expression import Expr


class CheckWellFormedness(Gadget):
    """Assert that (e, m) is a normalized float with exponent width k and precision p.

    Accepted: e == 0 and m == 0, or 1 <= e < 2^k and 2^p <= m < 2^(p+1).

    Both cases are always instantiated; Select keyed on "e is zero" picks
    which verdict must be 1. Anything else leaves the circuit unsatisfiable.
    """

    name = "check_well_formedness"
    inputs = ("e", "m")
    outputs = ()

    def __init__(self, k: int, p: int) -> None:
        require(k >= 1, f"Exponent width k must be positive, got {k}")
        require(p >= 1, f"Precision p must be positive, got {p}")
        # CheckBitLength(k) and CheckBitLength(p) bound these further
        self.k = k
        self.p = p

    def define(self, cs: ConstraintSystem, e: Expr, m: Expr) -> None:
        is_e_zero = IsZero()(cs, e, scope="is_e_zero")

        # Case I: e == 0, so m must be zero too
        is_m_zero = IsZero()(cs, m, scope="is_m_zero")

        # Case II: e != 0, so e has k bits and m has p+1 bits with the top one set,
        # i.e. m - 2^p has p bits
        e_fits = CheckBitLength(self.k)(cs, e, scope="e_bits")
        m_fits = CheckBitLength(self.p)(cs, m - (1 << self.p), scope="m_bits")
        nonzero_case = And()(cs, e_fits, m_fits, scope="nonzero_case")

        verdict = Select()(cs, is_e_zero, is_m_zero, nonzero_case, scope="select_case")
        cs.assert_equal(verdict, 1, "well_formed")
