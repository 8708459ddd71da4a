"""Equality, zero-test and range-check witness formulas."""

from primitives.field import FF, inverse_or_zero, to_int


def zero_test_inverse(value) -> FF:
    """Hint for IsZero: 1/value, or 0 at the zero point."""
    return inverse_or_zero(value)


def bit_length_remainder(width: int, value) -> int:
    """Hint for CheckBitLength: 2^width - (value mod 2^width).

    Always lands in [1, 2^width]; it completes value to exactly 2^width
    only when value already fits in `width` bits.
    """
    return (1 << width) - (to_int(value) % (1 << width))


def fits_bits(width: int, value: int) -> bool:
    """Reference model for CheckBitLength."""
    return 0 <= value < (1 << width)


def less_than(width: int, lhs: int, rhs: int) -> bool:
    """Reference model for LessThan(width), defined for operands below 2^width."""
    return lhs < rhs
