"""Bit codec witness formulas."""

from typing import List

from primitives.field import to_int


def bit_decompose(width: int, value) -> List[int]:
    """The low `width` bits of value's integer representative, LSB first."""
    n = to_int(value)
    return [(n >> i) & 1 for i in range(width)]


def bit_compose(bits: List[int]) -> int:
    """Reconstruction sum(bits[i] * 2^i)."""
    return sum(int(b) << i for i, b in enumerate(bits))
