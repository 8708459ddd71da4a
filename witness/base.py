"""Witness generation.

The witness generator walks a finalized circuit's rules in definition
order, which is a topological order of the gadget instantiation DAG, and
produces exactly one field value per variable:

    InputRule   value taken from the caller's inputs
    DefineRule  the defining expression evaluated over earlier values
    HintRule    the host formula applied to its evaluated arguments

Overrides replace honest hint values by name. Constrained variables
downstream are re-derived from the substituted values, which is how a
dishonest prover is simulated in the soundness tests.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

import numpy as np

from constraints.base import DefineRule, HintRule, InputRule, VariableKind
from primitives.field import FF, felt, to_int

if TYPE_CHECKING:
    from protocol.circuit import Circuit

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Witness:
    """A complete assignment: one FF value per circuit variable.

    Attributes:
        circuit: The circuit the assignment belongs to
        values: FF array indexed by variable index
    """
    circuit: "Circuit"
    values: FF

    def field_value(self, name: str) -> FF:
        return self.values[self.circuit.index(name)]

    def value(self, name: str) -> int:
        """Canonical integer value of the variable with this qualified name."""
        return to_int(self.field_value(name))

    def values_of(self, names: List[str]) -> List[int]:
        return [self.value(n) for n in names]

    def output(self, name: str) -> int:
        if name not in self.circuit.output_names:
            raise KeyError(f"'{name}' is not an output. Available: {self.circuit.output_names}")
        return self.value(name)

    @property
    def outputs(self) -> Dict[str, int]:
        return {name: self.value(name) for name in self.circuit.output_names}


class WitnessGenerator:
    """Evaluates a circuit's witness rules for one concrete input."""

    def __init__(self, circuit: "Circuit") -> None:
        self.circuit = circuit

    def _validate(self, inputs: Mapping[str, int], overrides: Mapping[str, int]) -> None:
        expected = set(self.circuit.input_names)
        missing = expected - set(inputs)
        if missing:
            raise KeyError(f"Missing inputs: {sorted(missing)}")
        unknown = set(inputs) - expected
        if unknown:
            raise ValueError(f"Unknown inputs: {sorted(unknown)}. Expected: {sorted(expected)}")
        for name in overrides:
            if self.circuit.variable(name).kind != VariableKind.HINT:
                raise ValueError(f"Only hint variables can be overridden, '{name}' is not a hint")

    def generate(
        self,
        inputs: Mapping[str, int],
        overrides: Optional[Mapping[str, int]] = None,
    ) -> Witness:
        """Compute the witness for the given inputs.

        Args:
            inputs: Value for every input variable, keyed by name
            overrides: Replacement values for hint variables, keyed by name

        Returns:
            Witness holding every variable's value. It is not checked
            against the constraints here; see Circuit.check.

        Raises:
            KeyError: If an input is missing or an override names no variable
            ValueError: If an input is unknown or an override is not a hint
        """
        overrides = overrides or {}
        self._validate(inputs, overrides)

        variables = self.circuit.variables
        n = len(variables)
        values = FF.Zeros(n)
        assigned = np.zeros(n, dtype=bool)

        def assign(index: int, value) -> None:
            assert not assigned[index], f"Variable '{variables[index].name}' assigned twice"
            values[index] = felt(value)
            assigned[index] = True

        for rule in self.circuit.rules:
            if isinstance(rule, InputRule):
                assign(rule.index, inputs[rule.name])
            elif isinstance(rule, DefineRule):
                assign(rule.index, rule.expr.evaluate(values))
            elif isinstance(rule, HintRule):
                args = [arg.evaluate(values) for arg in rule.args]
                result = rule.fn(*args)
                results = list(result) if isinstance(result, (list, tuple)) else [result]
                assert len(results) == len(rule.indices), \
                    f"Hint returned {len(results)} values for {len(rule.indices)} variables"
                for index, value in zip(rule.indices, results):
                    assign(index, overrides.get(variables[index].name, value))
            else:
                raise TypeError(f"Unknown witness rule: {rule!r}")

        assert assigned.all(), "Witness rules left variables unassigned"
        logger.debug("Generated witness for %d variables (%d overridden)", n, len(overrides))
        return Witness(self.circuit, values)
