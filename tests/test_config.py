"""Tests for FloatAddConfig, the gadget registry and the profiling helpers."""

import json

import pytest

from constraints import GADGET_REGISTRY, FloatAdd, LessThan, get_gadget
from constraints.base import StaticPreconditionError
from profile_gadgets import gadget_params, print_float_add_breakdown, print_gadget_table
from protocol.circuit import build_circuit
from protocol.config import FLOAT_ADD_INPUTS, FloatAddConfig, build_float_add_circuit


class TestFloatAddConfig:

    def test_fields(self) -> None:
        config = FloatAddConfig(exponent_bits=8, precision=23)
        assert (config.k, config.p) == (8, 23)
        assert config.to_dict() == {"exponent_bits": 8, "precision": 23}

    def test_from_dict(self) -> None:
        config = FloatAddConfig.from_dict({"exponent_bits": "5", "precision": 4})
        assert config == FloatAddConfig(5, 4)

    def test_from_dict_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="bias"):
            FloatAddConfig.from_dict({"exponent_bits": 8, "precision": 23, "bias": 127})

    def test_from_dict_missing_key(self) -> None:
        with pytest.raises(KeyError):
            FloatAddConfig.from_dict({"exponent_bits": 8})

    def test_from_json(self, tmp_path) -> None:
        path = tmp_path / "float_add.json"
        path.write_text(json.dumps({"exponent_bits": 11, "precision": 52}))
        assert FloatAddConfig.from_json(path) == FloatAddConfig(11, 52)
        assert FloatAddConfig.from_json(str(path)).k == 11

    @pytest.mark.parametrize("k,p", [(0, 4), (8, 0), (2, 3)])
    def test_invalid(self, k: int, p: int) -> None:
        with pytest.raises(StaticPreconditionError):
            FloatAddConfig(k, p)

    def test_circuit_interface(self) -> None:
        circuit = build_float_add_circuit(FloatAddConfig(3, 2))
        assert tuple(circuit.input_names) == FLOAT_ADD_INPUTS
        assert circuit.output_names == ["e_out", "m_out"]


class TestGadgetRegistry:

    def test_registry_names_match_classes(self) -> None:
        for name, cls in GADGET_REGISTRY.items():
            assert cls.__name__ == name

    def test_get_gadget(self) -> None:
        gadget = get_gadget("LessThan", n=8)
        assert isinstance(gadget, LessThan)
        assert gadget.n == 8
        assert repr(gadget) == "LessThan(n=8)"

    def test_get_gadget_unknown(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_gadget("FloatMul")

    def test_get_gadget_precondition(self) -> None:
        with pytest.raises(StaticPreconditionError):
            get_gadget("FloatAdd", k=2, p=3)

    @pytest.mark.parametrize("name", sorted(GADGET_REGISTRY))
    def test_every_gadget_compiles(self, name: str) -> None:
        """Every registered gadget builds stand-alone at small FloatAdd parameters."""
        circuit = build_circuit(get_gadget(name, **gadget_params(name, 3, 2)))
        assert circuit.stats().n_constraints > 0
        assert circuit.input_names


class TestProfiling:

    def test_gadget_params(self) -> None:
        assert gadget_params("FloatAdd", 8, 23) == {"k": 8, "p": 23}
        assert gadget_params("MSNZB", 8, 23) == {"b": 48}
        assert gadget_params("And", 8, 23) == {}

    def test_stats_scope_totals(self) -> None:
        circuit = build_circuit(FloatAdd(3, 2))
        stats = circuit.stats()
        assert sum(c for _, c in stats.by_scope.values()) == stats.n_constraints
        assert sum(v for v, _ in stats.by_scope.values()) == sum(stats.n_variables.values())
        assert stats.by_scope["float_add"][1] > stats.by_scope["e_out"][1]

    def test_reports(self, capsys: pytest.CaptureFixture) -> None:
        print_gadget_table(3, 2)
        print_float_add_breakdown(FloatAddConfig(3, 2))
        out = capsys.readouterr().out
        assert "RoundAndCheck" in out
        assert "normalize" in out
        assert "TOTAL" in out
