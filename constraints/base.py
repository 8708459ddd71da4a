"""Base classes for constraint emission.

ConstraintSystem is the append-only builder every gadget writes into. A
gadget never evaluates anything at definition time: it allocates variables,
records how the witness generator will compute each of them, and emits the
polynomial equalities a valid witness has to satisfy.

Three kinds of variable can be allocated:

    input        supplied externally when the witness is generated
    constrained  fixed by an equation `var = expr`; its witness value is
                 expr evaluated over earlier variables
    hint         assigned by an arbitrary host formula (shift, bit
                 extraction, inverse); only the separately emitted
                 constraints make it trustworthy

Example:
    cs = ConstraintSystem()
    x = cs.input('x')
    inv = cs.hint('inv', inverse_or_zero, x)
    out = cs.define('out', 1 - x * inv)
    cs.assert_zero(x * out, 'in_times_out')
    circuit = cs.finalize()
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Sequence, Tuple, Union

from primitives.expression import Expr, ExprLike
from primitives.field import ZERO, to_signed

logger = logging.getLogger(__name__)

# Every emitted constraint is at most quadratic (R1CS/PLONK-style backends).
MAX_CONSTRAINT_DEGREE = 2


class StaticPreconditionError(ValueError):
    """A gadget was instantiated with parameters that violate its assumptions.

    Raised at definition time, before any input is processed.
    """


class VariableKind(Enum):
    INPUT = "input"
    CONSTRAINED = "constrained"
    HINT = "hint"
    OUTPUT = "output"


@dataclass(frozen=True)
class Variable:
    """A named field-valued quantity, identified by its witness-vector index."""
    index: int
    name: str
    kind: VariableKind

    @property
    def expr(self) -> Expr:
        return Expr.variable(self.index)


@dataclass(frozen=True)
class Constraint:
    """Polynomial equality `expr == 0`."""
    expr: Expr
    label: str


# --- Witness Rules ---
# Recorded in definition order, which is a topological order of the
# instantiation DAG: a rule only reads variables allocated before it.

HintFn = Callable[..., object]


@dataclass(frozen=True)
class InputRule:
    index: int
    name: str


@dataclass(frozen=True)
class DefineRule:
    index: int
    expr: Expr


@dataclass(frozen=True)
class HintRule:
    indices: Tuple[int, ...]
    fn: HintFn
    args: Tuple[Expr, ...]


WitnessRule = Union[InputRule, DefineRule, HintRule]


# --- Builder ---

class ConstraintSystem:
    """Append-only constraint builder, created once per circuit definition.

    Attributes:
        variables: Every allocated variable, indexed by witness position
        constraints: Emitted polynomial equalities
        rules: Witness rules in evaluation order
    """

    def __init__(self) -> None:
        self.variables: List[Variable] = []
        self.constraints: List[Constraint] = []
        self.rules: List[WitnessRule] = []
        self._names: Dict[str, int] = {}
        self._scopes: List[str] = []
        self._scope_counts: List[Dict[str, int]] = [{}]
        self._finalized = False

    # --- Naming ---

    @contextmanager
    def scope(self, name: str) -> Iterator[str]:
        """Open a named scope; nested names are joined with '.'.

        Re-opening a name already used at the same level appends a counter
        (`is_equal`, `is_equal_1`, ...), so loops can reuse one scope name.
        """
        counts = self._scope_counts[-1]
        seen = counts.get(name, 0)
        counts[name] = seen + 1
        scoped = name if seen == 0 else f"{name}_{seen}"
        self._scopes.append(scoped)
        self._scope_counts.append({})
        try:
            yield self.qualify("")
        finally:
            self._scopes.pop()
            self._scope_counts.pop()

    def qualify(self, name: str) -> str:
        parts = self._scopes + ([name] if name else [])
        return ".".join(parts)

    # --- Allocation ---

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("ConstraintSystem is finalized; no further emission allowed")

    def _allocate(self, name: str, kind: VariableKind) -> Variable:
        self._check_open()
        qualified = self.qualify(name)
        if qualified in self._names:
            raise ValueError(f"Duplicate variable name '{qualified}'")
        var = Variable(len(self.variables), qualified, kind)
        self.variables.append(var)
        self._names[qualified] = var.index
        return var

    def input(self, name: str) -> Expr:
        """Allocate a variable supplied externally at witness time."""
        var = self._allocate(name, VariableKind.INPUT)
        self.rules.append(InputRule(var.index, var.name))
        return var.expr

    def define(self, name: str, expr: ExprLike) -> Expr:
        """Allocate a variable constrained to equal expr."""
        return self._define(name, expr, VariableKind.CONSTRAINED)

    def output(self, name: str, expr: ExprLike) -> Expr:
        """Allocate a constrained variable the finalized circuit exposes."""
        return self._define(name, expr, VariableKind.OUTPUT)

    def _define(self, name: str, expr: ExprLike, kind: VariableKind) -> Expr:
        expr = Expr.lift(expr)
        self._check_degree(expr, name)
        var = self._allocate(name, kind)
        self.rules.append(DefineRule(var.index, expr))
        self.constraints.append(Constraint(var.expr - expr, var.name))
        return var.expr

    def hint(self, names: Union[str, Sequence[str]], fn: HintFn, *args: ExprLike):
        """Allocate witness-hint variables computed by fn.

        Args:
            names: One name, or a sequence of names for a multi-valued hint
            fn: Host formula called with the evaluated args (FF scalars);
                returns one value, or one value per name
            args: Expressions whose values fn receives

        Returns:
            An Expr for a single name, else a list of Exprs
        """
        single = isinstance(names, str)
        name_list = [names] if single else list(names)
        variables = [self._allocate(n, VariableKind.HINT) for n in name_list]
        self.rules.append(HintRule(
            tuple(v.index for v in variables),
            fn,
            tuple(Expr.lift(a) for a in args),
        ))
        exprs = [v.expr for v in variables]
        return exprs[0] if single else exprs

    # --- Constraints ---

    def _check_degree(self, expr: Expr, label: str) -> None:
        if expr.degree > MAX_CONSTRAINT_DEGREE:
            raise ValueError(
                f"Constraint '{self.qualify(label)}' has degree {expr.degree}, "
                f"max is {MAX_CONSTRAINT_DEGREE}; introduce an intermediate variable"
            )

    def assert_zero(self, expr: ExprLike, label: str) -> None:
        """Emit the constraint expr == 0."""
        self._check_open()
        expr = Expr.lift(expr)
        self._check_degree(expr, label)
        if expr.is_constant:
            value = expr.constant_value
            if value != ZERO:
                raise ValueError(
                    f"Constraint '{self.qualify(label)}' is the constant {to_signed(value)} "
                    f"and can never hold"
                )
            return
        self.constraints.append(Constraint(expr, self.qualify(label)))

    def assert_equal(self, lhs: ExprLike, rhs: ExprLike, label: str) -> None:
        self.assert_zero(Expr.lift(lhs) - rhs, label)

    def assert_boolean(self, expr: ExprLike, label: str) -> None:
        expr = Expr.lift(expr)
        self.assert_zero(expr * (1 - expr), label)

    # --- Lifecycle ---

    def finalize(self):
        """Freeze the builder and return the immutable Circuit."""
        from protocol.circuit import Circuit

        self._check_open()
        self._finalized = True
        circuit = Circuit(
            variables=tuple(self.variables),
            constraints=tuple(self.constraints),
            rules=tuple(self.rules),
        )
        logger.debug(
            "Finalized circuit: %d variables, %d constraints",
            len(circuit.variables), len(circuit.constraints),
        )
        return circuit


# --- Gadgets ---

def require(condition: bool, message: str) -> None:
    """Raise StaticPreconditionError unless condition holds."""
    if not condition:
        raise StaticPreconditionError(message)


def _lift_inputs(value):
    if isinstance(value, (list, tuple)):
        return [Expr.lift(v) for v in value]
    return Expr.lift(value)


class Gadget(ABC):
    """Parameterized constraint template.

    Static parameters are fixed and validated in __init__; each call
    instantiates the template into a ConstraintSystem under its own scope
    and returns the output expressions.

    Subclasses set `name` (default scope name), and `inputs`/`outputs`
    (names used when the gadget is compiled stand-alone by build_circuit).
    """

    name: str = "gadget"
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ("out",)

    def __call__(self, cs: ConstraintSystem, *inputs, scope: str = None):
        with cs.scope(scope or self.name):
            return self.define(cs, *[_lift_inputs(i) for i in inputs])

    @abstractmethod
    def define(self, cs: ConstraintSystem, *inputs):
        """Allocate variables, register hints, and emit constraints.

        Args:
            cs: Builder to emit into
            inputs: Input expressions (lists for vector inputs)

        Returns:
            Output expression(s)
        """
        pass

    def input_names(self) -> List[str]:
        """Flattened input names for stand-alone compilation."""
        return list(self.inputs)

    def pack_inputs(self, flat: List[Expr]) -> list:
        """Group flat input variables into define()'s argument list."""
        return list(flat)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"
