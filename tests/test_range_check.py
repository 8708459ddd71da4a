"""Tests for CheckBitLength, the cheap b-bit range check."""

import pytest

from constraints.base import StaticPreconditionError
from constraints.range_check import CheckBitLength
from primitives.field import FIELD_MODULUS, LESS_THAN_MAX_BITS
from protocol.circuit import build_circuit
from witness.comparators import bit_length_remainder, fits_bits


@pytest.fixture(scope="module")
def check3():
    return build_circuit(CheckBitLength(3))


class TestBitLengthRemainder:

    @pytest.mark.parametrize("value,expected", [(0, 8), (5, 3), (7, 1), (8, 8), (13, 3)])
    def test_remainder(self, value: int, expected: int) -> None:
        assert bit_length_remainder(3, value) == expected


class TestCheckBitLength:

    @pytest.mark.parametrize("value,expected", [(5, 1), (8, 0), (0, 1), (7, 1), (13, 0), (1000, 0)])
    def test_honest(self, check3, value: int, expected: int) -> None:
        witness = check3.prove({"in": value})
        assert witness.output("out") == expected
        assert expected == int(fits_bits(3, value))

    @pytest.mark.parametrize("value", [-1, -3, -8, FIELD_MODULUS - 5])
    def test_negative_does_not_fit(self, check3, value: int) -> None:
        assert check3.prove({"in": value}).output("out") == 0

    def test_negative_cannot_complete(self, check3) -> None:
        """rem = 11 completes -3 to 8, but the upper bound on rem catches it."""
        witness = check3.generate_witness({"in": -3}, overrides={"check_bit_length.rem": 11})
        assert witness.value("check_bit_length.completes.is_zero.out") == 1
        assert witness.value("check_bit_length.rem_le_max.out") == 0
        assert check3.is_satisfied(witness)
        assert witness.output("out") == 0

    def test_overflow_cannot_complete(self, check3) -> None:
        """rem = -3 completes 11 to 8, but the lower bound on rem catches it."""
        witness = check3.generate_witness({"in": 11}, overrides={"check_bit_length.rem": -3})
        assert witness.value("check_bit_length.completes.is_zero.out") == 1
        assert witness.value("check_bit_length.rem_gt0.out") == 0
        assert check3.is_satisfied(witness)
        assert witness.output("out") == 0

    @pytest.mark.parametrize("value", [8, 9, 100, -1])
    @pytest.mark.parametrize("rem", [0, 1, 8, 9, 2**200])
    def test_out_of_range_never_reports_fit(self, check3, value: int, rem: int) -> None:
        """No remainder makes an out-of-range value report out = 1."""
        witness = check3.generate_witness({"in": value}, overrides={"check_bit_length.rem": rem})
        assert not (check3.is_satisfied(witness) and witness.output("out") == 1)

    def test_sweep_against_reference(self) -> None:
        circuit = build_circuit(CheckBitLength(5))
        for value in range(-4, 40):
            expected = int(fits_bits(5, value))
            assert circuit.prove({"in": value}).output("out") == expected, value

    @pytest.mark.parametrize("b", [0, LESS_THAN_MAX_BITS, LESS_THAN_MAX_BITS + 1])
    def test_width_precondition(self, b: int) -> None:
        with pytest.raises(StaticPreconditionError, match="CheckBitLength"):
            CheckBitLength(b)

    def test_widest(self) -> None:
        b = LESS_THAN_MAX_BITS - 1
        circuit = build_circuit(CheckBitLength(b))
        assert circuit.prove({"in": (1 << b) - 1}).output("out") == 1
        assert circuit.prove({"in": 1 << b}).output("out") == 0
