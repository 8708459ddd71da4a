"""MSNZB and normalization witness formulas.

Reference models work on plain integers and mirror the gadgets' contracts,
so tests can compare circuit outputs against them directly.
"""

from typing import List, Tuple

from primitives.field import FF, ZERO, felt, inverse_or_zero


def guarded_inverse(value, skip_checks) -> FF:
    """Hint for Normalize: 1/value, forced to 0 when checks are skipped.

    The zero point also maps to 0; the gated inverse constraint then
    rejects the witness unless checks are skipped.
    """
    if felt(skip_checks) != ZERO:
        return ZERO
    return inverse_or_zero(value)


def msnzb_index(width: int, value: int) -> int:
    """Position of the highest set bit of a non-zero value below 2^width."""
    if not 0 < value < (1 << width):
        raise ValueError(f"MSNZB needs a non-zero {width}-bit value, got {value}")
    return value.bit_length() - 1


def one_hot(width: int, index: int) -> List[int]:
    return [1 if i == index else 0 for i in range(width)]


def normalize(p: int, P: int, e: int, m: int) -> Tuple[int, int]:
    """Reference model for Normalize(k, p, P).

    Shifts the (P+1)-bit mantissa m left until its top bit sits at
    position P and compensates the exponent.
    """
    ell = msnzb_index(P + 1, m)
    return e + ell - p, m << (P - ell)
