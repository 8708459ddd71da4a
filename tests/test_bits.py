"""Tests for the bit codec: Decompose, DecomposeWithSkipChecks and Compose."""

import pytest

from constraints.base import ConstraintSystem, StaticPreconditionError
from constraints.bits import Compose, Decompose, DecomposeWithSkipChecks
from primitives.field import FIELD_MODULUS, MAX_DECOMPOSITION_BITS
from protocol.checker import UnsatisfiedConstraintError
from protocol.circuit import build_circuit
from witness.bits import bit_compose, bit_decompose


class TestBitFormulas:

    def test_decompose_lsb_first(self) -> None:
        assert bit_decompose(5, 6) == [0, 1, 1, 0, 0]

    def test_decompose_truncates(self) -> None:
        assert bit_decompose(2, 7) == [1, 1]

    def test_compose(self) -> None:
        assert bit_compose([0, 1, 1, 0, 0]) == 6
        assert bit_compose([]) == 0


class TestDecompose:

    @pytest.fixture(scope="class")
    def circuit(self):
        return build_circuit(Decompose(8))

    @pytest.mark.parametrize("value", [0, 1, 6, 128, 255])
    def test_bits(self, circuit, value: int) -> None:
        witness = circuit.prove({"in": value})
        bits = witness.values_of([f"out[{i}]" for i in range(8)])
        assert bits == bit_decompose(8, value)

    @pytest.mark.parametrize("value", [256, 1000, -1])
    def test_out_of_range_rejected(self, circuit, value: int) -> None:
        with pytest.raises(UnsatisfiedConstraintError, match="reconstruction"):
            circuit.prove({"in": value})

    def test_non_boolean_bit_rejected(self, circuit) -> None:
        """A bit of 2 with a compensating lower bit still fails the boolean check."""
        witness = circuit.generate_witness(
            {"in": 4},
            overrides={"num2bits.bits[1]": 2, "num2bits.bits[2]": 0},
        )
        labels = [label for label, _ in circuit.violations(witness)]
        assert labels == ["num2bits.bits[1].boolean"]

    def test_zero_width(self) -> None:
        """A zero-width decomposition only accepts 0."""
        circuit = build_circuit(Decompose(0))
        assert circuit.accepts({"in": 0})
        assert not circuit.accepts({"in": 1})

    @pytest.mark.parametrize("b", [-1, MAX_DECOMPOSITION_BITS + 1])
    def test_width_precondition(self, b: int) -> None:
        with pytest.raises(StaticPreconditionError):
            Decompose(b)

    def test_max_width(self) -> None:
        circuit = build_circuit(Decompose(MAX_DECOMPOSITION_BITS))
        assert circuit.accepts({"in": (1 << MAX_DECOMPOSITION_BITS) - 1})
        assert not circuit.accepts({"in": FIELD_MODULUS - 1})


class TestDecomposeWithSkipChecks:

    @pytest.fixture(scope="class")
    def circuit(self):
        return build_circuit(DecomposeWithSkipChecks(4))

    def test_checked(self, circuit) -> None:
        assert circuit.accepts({"in": 9, "skip_checks": 0})
        assert not circuit.accepts({"in": 17, "skip_checks": 0})

    def test_skipped(self, circuit) -> None:
        """With checks skipped the bits are the low bits and need not add up."""
        witness = circuit.prove({"in": 17, "skip_checks": 1})
        assert witness.values_of([f"out[{i}]" for i in range(4)]) == [1, 0, 0, 0]

    def test_bits_stay_boolean_when_skipped(self, circuit) -> None:
        witness = circuit.generate_witness(
            {"in": 17, "skip_checks": 1}, overrides={"num2bits.bits[0]": 3},
        )
        assert not circuit.is_satisfied(witness)


class TestCompose:

    def test_compose(self) -> None:
        circuit = build_circuit(Compose(4))
        assert circuit.input_names == [f"bits[{i}]" for i in range(4)]
        inputs = {f"bits[{i}]": bit for i, bit in enumerate([1, 0, 1, 1])}
        assert circuit.prove(inputs).output("out") == 13

    def test_length_mismatch(self) -> None:
        cs = ConstraintSystem()
        bits = [cs.input(f"b{i}") for i in range(3)]
        with pytest.raises(ValueError, match="got 3 bits"):
            Compose(4)(cs, bits)

    @pytest.mark.parametrize("value", [0, 1, 77, 1023])
    def test_decompose_then_compose(self, value: int) -> None:
        """Compose(Decompose(x)) reproduces x for any 10-bit x."""
        cs = ConstraintSystem()
        x = cs.input("x")
        bits = Decompose(10)(cs, x)
        cs.output("out", Compose(10)(cs, bits))
        circuit = cs.finalize()
        assert circuit.prove({"x": value}).output("out") == value
