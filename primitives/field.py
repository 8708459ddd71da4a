"""BN254 scalar field GF(p).

Uses galois library for all field arithmetic. FF is the field type.

The prime is the scalar-field order of BN254, the field circuits for
Groth16/PLONK backends are expressed over. It is ~2^253.6, far wider than
any bit-width a gadget works with, so sums and differences of small
integers never wrap.

galois would otherwise search for a primitive element by factoring p-1
(slow for a 254-bit prime), so the known generator 5 is passed in.
"""

import galois

# --- Field Construction ---

FIELD_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
MULTIPLICATIVE_GENERATOR = 5

FF = galois.GF(FIELD_MODULUS, primitive_element=MULTIPLICATIVE_GENERATOR, verify=False)
"""Base field GF(p) - BN254 scalar field."""

# --- Bit Capacity ---

FIELD_BITS = FIELD_MODULUS.bit_length()  # 254

# A bit vector of this many entries reconstructs to a value below p, so the
# decomposition of any field element that fits is unique.
MAX_DECOMPOSITION_BITS = FIELD_BITS - 1

# LessThan(n) decomposes in0 + 2^n - in1 into n+1 bits.
LESS_THAN_MAX_BITS = FIELD_BITS - 2

ZERO = FF(0)
ONE = FF(1)


def felt(value) -> FF:
    """Reduce a Python int (or field element) into FF.

    Negative integers map to their additive inverse, so felt(-1) == p - 1.
    """
    if isinstance(value, FF):
        return value
    return FF(int(value) % FIELD_MODULUS)


def to_int(value) -> int:
    """Canonical integer representative in [0, p)."""
    return int(value) % FIELD_MODULUS


def to_signed(value) -> int:
    """Representative in (-p/2, p/2], for readable error messages."""
    n = to_int(value)
    return n - FIELD_MODULUS if n > FIELD_MODULUS // 2 else n


def inverse_or_zero(value) -> FF:
    """Multiplicative inverse, with the zero point mapped to zero."""
    value = felt(value)
    if value == ZERO:
        return ZERO
    return value ** -1


def pow2(exponent: int) -> FF:
    """2^exponent as a field element."""
    return FF(pow(2, int(exponent), FIELD_MODULUS))
