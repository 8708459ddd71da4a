"""Witness generation and per-gadget witness formulas.

The generator in base.py evaluates a finalized circuit's rules. The other
modules hold the host formulas gadgets register as hints, alongside plain
integer reference models of each gadget's contract.
"""

from .base import Witness, WitnessGenerator

__all__ = [
    'Witness',
    'WitnessGenerator',
]
