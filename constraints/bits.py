"""Bit codec: decomposition into a fixed-width bit vector and back.

Bit vectors are least-significant first; the reconstruction of bits is
sum(bits[i] * 2^i).
"""

from functools import partial
from typing import List

from constraints.base import ConstraintSystem, Gadget, require
from primitives.expression import Expr, linear_combination
from primitives.field import MAX_DECOMPOSITION_BITS
from witness.bits import bit_decompose


def weighted_sum(bits: List[Expr]) -> Expr:
    """sum(bits[i] * 2^i) as a linear expression."""
    return linear_combination((1 << i, bit) for i, bit in enumerate(bits))


def _check_width(b: int) -> None:
    require(
        0 <= b <= MAX_DECOMPOSITION_BITS,
        f"Bit width must be in [0, {MAX_DECOMPOSITION_BITS}] for a unique decomposition, got {b}",
    )


def _allocate_bits(cs: ConstraintSystem, b: int, x: Expr) -> List[Expr]:
    bits = cs.hint([f"bits[{i}]" for i in range(b)], partial(bit_decompose, b), x)
    for i, bit in enumerate(bits):
        cs.assert_boolean(bit, f"bits[{i}].boolean")
    return bits


class Decompose(Gadget):
    """Num2Bits: the b-bit vector of `in`, range-checking it to [0, 2^b).

    This is the full range check. When only a yes/no answer is needed,
    CheckBitLength is cheaper.
    """

    name = "num2bits"
    inputs = ("in",)

    def __init__(self, b: int) -> None:
        _check_width(b)
        self.b = b

    def define(self, cs: ConstraintSystem, x: Expr) -> List[Expr]:
        bits = _allocate_bits(cs, self.b, x)
        cs.assert_equal(weighted_sum(bits), x, "reconstruction")
        return bits


class DecomposeWithSkipChecks(Gadget):
    """Num2Bits whose reconstruction check is waived when skip_checks == 1.

    The bits are boolean either way; with checks skipped they are simply
    the low b bits of the input's representative and need not add up to it.
    """

    name = "num2bits"
    inputs = ("in", "skip_checks")

    def __init__(self, b: int) -> None:
        _check_width(b)
        self.b = b

    def define(self, cs: ConstraintSystem, x: Expr, skip_checks: Expr) -> List[Expr]:
        bits = _allocate_bits(cs, self.b, x)
        cs.assert_zero((weighted_sum(bits) - x) * (1 - skip_checks), "reconstruction")
        return bits


class Compose(Gadget):
    """Bits2Num: the reconstruction of a b-bit vector."""

    name = "bits2num"

    def __init__(self, b: int) -> None:
        _check_width(b)
        self.b = b

    def input_names(self) -> List[str]:
        return [f"bits[{i}]" for i in range(self.b)]

    def pack_inputs(self, flat: List[Expr]) -> list:
        return [flat]

    def define(self, cs: ConstraintSystem, bits: List[Expr]) -> Expr:
        if len(bits) != self.b:
            raise ValueError(f"Compose({self.b}) got {len(bits)} bits")
        return cs.define("out", weighted_sum(bits))
