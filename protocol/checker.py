"""Constraint satisfaction checking.

A witness is accepted only if every emitted constraint evaluates to zero.
There is no partial acceptance: the first violation rejects the whole
input, and that rejection is how a gadget refuses inputs that break its
preconditions (a malformed float, a zero fed to MSNZB, ...).
"""

import logging
from typing import TYPE_CHECKING, List, Tuple

from primitives.field import ZERO, to_signed

if TYPE_CHECKING:
    from protocol.circuit import Circuit
    from witness.base import Witness

logger = logging.getLogger(__name__)


class UnsatisfiedConstraintError(ValueError):
    """No satisfying assignment: the input is rejected.

    Attributes:
        label: Qualified label of the first violated constraint
        residual: Value the constraint polynomial evaluated to (signed)
    """

    def __init__(self, label: str, residual: int) -> None:
        self.label = label
        self.residual = residual
        super().__init__(f"Constraint '{label}' not satisfied (residual {residual})")


def find_violations(circuit: "Circuit", witness: "Witness") -> List[Tuple[str, int]]:
    """Return (label, signed residual) for every violated constraint."""
    violations = []
    for constraint in circuit.constraints:
        residual = constraint.expr.evaluate(witness.values)
        if residual != ZERO:
            violations.append((constraint.label, to_signed(residual)))
    return violations


def check_witness(circuit: "Circuit", witness: "Witness") -> None:
    """Raise UnsatisfiedConstraintError at the first violated constraint."""
    if witness.circuit is not circuit:
        raise ValueError("Witness was generated for a different circuit")
    for constraint in circuit.constraints:
        residual = constraint.expr.evaluate(witness.values)
        if residual != ZERO:
            logger.info("Witness rejected at constraint '%s'", constraint.label)
            raise UnsatisfiedConstraintError(constraint.label, to_signed(residual))
