"""Float encoding, rounding and addition reference models.

A float is a pair (e, m): e = 0 with m = 0 is zero, otherwise
1 <= e < 2^k and m has exactly p+1 bits with the top one set. These
functions operate on that structural encoding only; how (e, m) maps to a
real value is a convention left to the caller.
"""

from typing import Tuple

from witness.normalize import normalize


def is_well_formed(k: int, p: int, e: int, m: int) -> bool:
    """Reference model for CheckWellFormedness(k, p)."""
    if e == 0:
        return m == 0
    return 0 < e < (1 << k) and (1 << p) <= m < (1 << (p + 1))


def round_and_check(p: int, P: int, e: int, m: int) -> Tuple[int, int]:
    """Reference model for RoundAndCheck(k, p, P): round half up from P to p bits."""
    round_amt = P - p
    half = 1 << (round_amt - 1)
    if m < (1 << (P + 1)) - half:
        return e, (m + half) >> round_amt
    # Rounding carried out of the top bit: 1.11..1 -> 10.00..0
    return e + 1, 1 << p


def float_add(k: int, p: int, e0: int, m0: int, e1: int, m1: int) -> Tuple[int, int]:
    """Reference model for FloatAdd(k, p) on well-formed inputs."""
    if (e1 << (p + 1)) + m1 < (e0 << (p + 1)) + m0:
        (alpha_e, alpha_m), (beta_e, beta_m) = (e0, m0), (e1, m1)
    else:
        (alpha_e, alpha_m), (beta_e, beta_m) = (e1, m1), (e0, m0)

    diff = alpha_e - beta_e
    if diff > p + 1 or alpha_e == 0:
        return alpha_e, alpha_m

    P = 2 * p + 1
    mantissa = (alpha_m << diff) + beta_m
    e, m = normalize(p, P, beta_e, mantissa)
    return round_and_check(p, P, e, m)
