"""Finalized circuits.

A Circuit is what ConstraintSystem.finalize() hands over to an external
proving backend: the variables, the constraints, and the witness rules,
all frozen. It also offers the witness-phase entry points:

    circuit = build_circuit(LessThan(8))
    witness = circuit.prove({'in[0]': 3, 'in[1]': 5})
    witness.output('out')  # 1

prove() generates the honest witness and checks it; an input violating a
gadget precondition raises UnsatisfiedConstraintError.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from constraints.base import (
    Constraint,
    ConstraintSystem,
    Gadget,
    Variable,
    VariableKind,
    WitnessRule,
)
from primitives.expression import Expr
from protocol.checker import check_witness, find_violations
from witness.base import Witness, WitnessGenerator


@dataclass(frozen=True)
class CircuitStats:
    """Size breakdown of a circuit.

    Attributes:
        n_variables: Total variables, by kind
        n_constraints: Total constraints
        by_scope: (variables, constraints) per top-level gadget scope
    """
    n_variables: Dict[str, int]
    n_constraints: int
    by_scope: Dict[str, Tuple[int, int]]


@dataclass(frozen=True)
class Circuit:
    """Immutable constraint system plus the rules that generate its witness."""
    variables: Tuple[Variable, ...]
    constraints: Tuple[Constraint, ...]
    rules: Tuple[WitnessRule, ...]
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {v.name: v.index for v in self.variables})

    # --- Lookup ---

    def index(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"No variable named '{name}'") from None

    def variable(self, name: str) -> Variable:
        return self.variables[self.index(name)]

    def _names_of(self, kind: VariableKind) -> List[str]:
        return [v.name for v in self.variables if v.kind == kind]

    @property
    def input_names(self) -> List[str]:
        return self._names_of(VariableKind.INPUT)

    @property
    def output_names(self) -> List[str]:
        return self._names_of(VariableKind.OUTPUT)

    @property
    def hint_names(self) -> List[str]:
        return self._names_of(VariableKind.HINT)

    # --- Witness Phase ---

    def generate_witness(
        self,
        inputs: Mapping[str, int],
        overrides: Optional[Mapping[str, int]] = None,
    ) -> Witness:
        """Evaluate the witness rules without checking the constraints."""
        return WitnessGenerator(self).generate(inputs, overrides)

    def check(self, witness: Witness) -> None:
        """Raise UnsatisfiedConstraintError unless witness satisfies every constraint."""
        check_witness(self, witness)

    def violations(self, witness: Witness) -> List[Tuple[str, int]]:
        return find_violations(self, witness)

    def is_satisfied(self, witness: Witness) -> bool:
        return not self.violations(witness)

    def accepts(self, inputs: Mapping[str, int], overrides: Optional[Mapping[str, int]] = None) -> bool:
        """Whether the (possibly overridden) witness for inputs satisfies the circuit."""
        return self.is_satisfied(self.generate_witness(inputs, overrides))

    def prove(self, inputs: Mapping[str, int]) -> Witness:
        """Generate the honest witness and check it.

        Raises:
            UnsatisfiedConstraintError: If the input is rejected
        """
        witness = self.generate_witness(inputs)
        self.check(witness)
        return witness

    # --- Inspection ---

    def stats(self) -> CircuitStats:
        kinds = Counter(v.kind.value for v in self.variables)
        scope_vars = Counter(v.name.split(".")[0] for v in self.variables)
        scope_constraints = Counter(c.label.split(".")[0] for c in self.constraints)
        scopes = sorted(set(scope_vars) | set(scope_constraints))
        return CircuitStats(
            n_variables=dict(kinds),
            n_constraints=len(self.constraints),
            by_scope={s: (scope_vars[s], scope_constraints[s]) for s in scopes},
        )


# --- Stand-alone Compilation ---

def _name_outputs(names: Tuple[str, ...], result) -> List[Tuple[str, Expr]]:
    """Pair a gadget's return value with output names, flattening vectors."""
    if result is None:
        return []
    if isinstance(result, Expr):
        result = (result,)
    elif isinstance(result, list):
        result = (result,)
    named = []
    for name, value in zip(names, result):
        if isinstance(value, list):
            named.extend((f"{name}[{i}]", v) for i, v in enumerate(value))
        else:
            named.append((name, value))
    return named


def build_circuit(gadget: Gadget) -> Circuit:
    """Compile one gadget on its own, with its inputs and outputs exposed.

    Inputs are named after gadget.input_names(), outputs after
    gadget.outputs (vector outputs become name[i]).
    """
    cs = ConstraintSystem()
    flat = [cs.input(name) for name in gadget.input_names()]
    result = gadget(cs, *gadget.pack_inputs(flat))
    for name, expr in _name_outputs(gadget.outputs, result):
        cs.output(name, expr)
    return cs.finalize()
