"""Protocol - finalized circuits, satisfiability checking and configuration."""

from protocol.checker import UnsatisfiedConstraintError, check_witness, find_violations
from protocol.circuit import Circuit, CircuitStats, build_circuit
from protocol.config import FloatAddConfig, build_float_add_circuit

__all__ = [
    "UnsatisfiedConstraintError",
    "check_witness",
    "find_violations",
    "Circuit",
    "CircuitStats",
    "build_circuit",
    "FloatAddConfig",
    "build_float_add_circuit",
]
