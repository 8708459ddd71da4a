"""FloatAdd circuit configuration.

Exponent width and precision are fixed per circuit, not per input, so
they live in a small validated config that can be loaded from JSON:

    {"exponent_bits": 8, "precision": 23}
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Union

from constraints.base import ConstraintSystem, require
from constraints.float_add import FloatAdd
from protocol.circuit import Circuit

FLOAT_ADD_INPUTS = ("e0", "m0", "e1", "m1")
FLOAT_ADD_OUTPUTS = ("e_out", "m_out")


@dataclass(frozen=True)
class FloatAddConfig:
    """Static parameters of a FloatAdd circuit.

    Attributes:
        exponent_bits: k, the exponent width
        precision: p, mantissa bits below the implicit leading one
    """
    exponent_bits: int
    precision: int

    def __post_init__(self) -> None:
        require(self.exponent_bits >= 1, f"exponent_bits must be positive, got {self.exponent_bits}")
        require(self.precision >= 1, f"precision must be positive, got {self.precision}")
        require(
            self.precision + 1 < (1 << self.exponent_bits),
            f"precision + 1 must fit below 2^exponent_bits, got k={self.exponent_bits}, p={self.precision}",
        )

    @property
    def k(self) -> int:
        return self.exponent_bits

    @property
    def p(self) -> int:
        return self.precision

    @classmethod
    def from_dict(cls, data: dict) -> "FloatAddConfig":
        unknown = set(data) - {"exponent_bits", "precision"}
        if unknown:
            raise ValueError(f"Unknown FloatAdd config keys: {sorted(unknown)}")
        return cls(exponent_bits=int(data["exponent_bits"]), precision=int(data["precision"]))

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "FloatAddConfig":
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> dict:
        return asdict(self)


def build_float_add_circuit(config: FloatAddConfig) -> Circuit:
    """Compile FloatAdd with inputs e0, m0, e1, m1 and outputs e_out, m_out."""
    cs = ConstraintSystem()
    e0, m0, e1, m1 = (cs.input(name) for name in FLOAT_ADD_INPUTS)
    e_out, m_out = FloatAdd(config.k, config.p)(cs, e0, m0, e1, m1)
    cs.output("e_out", e_out)
    cs.output("m_out", m_out)
    return cs.finalize()
