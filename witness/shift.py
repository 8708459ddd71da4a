"""Shift witness formulas."""

from primitives.field import FF, pow2, to_int


def right_shift_quotient(shift: int, value) -> int:
    """Hint for RightShift: value >> shift on the integer representative."""
    return to_int(value) >> shift


def power_of_two(shift) -> FF:
    """Hint for LeftShift: 2^shift.

    Computed in the field so an out-of-range shift on a skipped branch
    still yields a value instead of an enormous integer.
    """
    return pow2(to_int(shift))


def left_shift(value: int, shift: int) -> int:
    """Reference model for LeftShift."""
    return value << shift
