"""Constraint emission: the ConstraintSystem builder and the gadget library.

Gadgets are listed leaves first; each one only instantiates gadgets above
it in this list, so the instantiation graph is a DAG.

GADGET_REGISTRY maps gadget names to their classes so tools can build any
gadget from its name and static parameters.
"""

from .base import (
    Constraint,
    ConstraintSystem,
    Gadget,
    StaticPreconditionError,
    Variable,
    VariableKind,
    require,
)
from .logic import And, Or, Select, Swap
from .bits import Compose, Decompose, DecomposeWithSkipChecks, weighted_sum
from .comparators import IsEqual, IsZero, LessThan
from .range_check import CheckBitLength
from .well_formedness import CheckWellFormedness
from .shift import LeftShift, RightShift
from .msnzb import MSNZB
from .normalize import Normalize
from .round import RoundAndCheck
from .float_add import FloatAdd

# Registry mapping gadget names to gadget classes
GADGET_REGISTRY: dict[str, type[Gadget]] = {
    "And": And,
    "Or": Or,
    "Select": Select,
    "Swap": Swap,
    "Decompose": Decompose,
    "DecomposeWithSkipChecks": DecomposeWithSkipChecks,
    "Compose": Compose,
    "IsZero": IsZero,
    "IsEqual": IsEqual,
    "LessThan": LessThan,
    "CheckBitLength": CheckBitLength,
    "CheckWellFormedness": CheckWellFormedness,
    "RightShift": RightShift,
    "LeftShift": LeftShift,
    "MSNZB": MSNZB,
    "Normalize": Normalize,
    "RoundAndCheck": RoundAndCheck,
    "FloatAdd": FloatAdd,
}


def get_gadget(name: str, **params: int) -> Gadget:
    """Instantiate a registered gadget.

    Args:
        name: Gadget name (e.g., 'LessThan', 'FloatAdd')
        params: Static parameters for the gadget constructor

    Returns:
        Gadget instance

    Raises:
        KeyError: If no gadget is registered under name
        StaticPreconditionError: If params violate the gadget's assumptions
    """
    if name not in GADGET_REGISTRY:
        raise KeyError(
            f"No gadget named '{name}'. "
            f"Available: {list(GADGET_REGISTRY.keys())}"
        )
    return GADGET_REGISTRY[name](**params)


__all__ = [
    "Constraint",
    "ConstraintSystem",
    "Gadget",
    "StaticPreconditionError",
    "Variable",
    "VariableKind",
    "require",
    "And",
    "Or",
    "Select",
    "Swap",
    "Decompose",
    "DecomposeWithSkipChecks",
    "Compose",
    "weighted_sum",
    "IsZero",
    "IsEqual",
    "LessThan",
    "CheckBitLength",
    "CheckWellFormedness",
    "RightShift",
    "LeftShift",
    "MSNZB",
    "Normalize",
    "RoundAndCheck",
    "FloatAdd",
    "GADGET_REGISTRY",
    "get_gadget",
]
