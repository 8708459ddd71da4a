"""Primitives - field arithmetic and the polynomial expression algebra."""

from primitives.expression import Expr, ExprLike, linear_combination
from primitives.field import (
    FF,
    FIELD_BITS,
    FIELD_MODULUS,
    LESS_THAN_MAX_BITS,
    MAX_DECOMPOSITION_BITS,
    ONE,
    ZERO,
    felt,
    inverse_or_zero,
    pow2,
    to_int,
    to_signed,
)

__all__ = [
    # Field
    "FF",
    "FIELD_MODULUS",
    "FIELD_BITS",
    "MAX_DECOMPOSITION_BITS",
    "LESS_THAN_MAX_BITS",
    "ZERO",
    "ONE",
    "felt",
    "to_int",
    "to_signed",
    "inverse_or_zero",
    "pow2",
    # Expressions
    "Expr",
    "ExprLike",
    "linear_combination",
]
