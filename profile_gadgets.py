#!/usr/bin/env python3
"""Report constraint and variable counts for every gadget.

Each registered gadget is compiled stand-alone with the static parameters
FloatAdd(k, p) would instantiate it with, so the table shows where the
cost of a float addition goes.

Run with: python profile_gadgets.py --exponent-bits 8 --precision 23
"""

import argparse
import logging
import time
from typing import Dict

from constraints import GADGET_REGISTRY, get_gadget
from protocol.circuit import build_circuit
from protocol.config import FloatAddConfig, build_float_add_circuit


def gadget_params(name: str, k: int, p: int) -> Dict[str, int]:
    """Static parameters FloatAdd(k, p) uses for the named gadget."""
    P = 2 * p + 1
    return {
        "Decompose": {"b": p + 1},
        "DecomposeWithSkipChecks": {"b": P + 1},
        "Compose": {"b": P + 1},
        "LessThan": {"n": k + p + 1},
        "CheckBitLength": {"b": p},
        "CheckWellFormedness": {"k": k, "p": p},
        "RightShift": {"b": P + 2, "shift": P - p},
        "LeftShift": {"shift_bound": p + 2},
        "MSNZB": {"b": P + 1},
        "Normalize": {"k": k, "p": p, "P": P},
        "RoundAndCheck": {"k": k, "p": p, "P": P},
        "FloatAdd": {"k": k, "p": p},
    }.get(name, {})


def print_gadget_table(k: int, p: int) -> None:
    print(f"\n{'Gadget':<26} {'Params':<28} {'Vars':<8} {'Constraints':<12} {'Build (s)':<10}")
    print("-" * 86)
    for name in GADGET_REGISTRY:
        params = gadget_params(name, k, p)
        t0 = time.perf_counter()
        circuit = build_circuit(get_gadget(name, **params))
        elapsed = time.perf_counter() - t0
        stats = circuit.stats()
        param_str = ", ".join(f"{key}={value}" for key, value in params.items())
        n_vars = sum(stats.n_variables.values())
        print(f"{name:<26} {param_str:<28} {n_vars:<8} {stats.n_constraints:<12} {elapsed:<10.3f}")


def print_float_add_breakdown(config: FloatAddConfig) -> None:
    circuit = build_float_add_circuit(config)
    stats = circuit.stats()
    float_add = stats.by_scope.get("float_add", (0, 0))

    # Second-level scopes under float_add
    vars_by_child: Dict[str, int] = {}
    constraints_by_child: Dict[str, int] = {}
    for v in circuit.variables:
        parts = v.name.split(".")
        if parts[0] == "float_add" and len(parts) > 2:
            vars_by_child[parts[1]] = vars_by_child.get(parts[1], 0) + 1
    for c in circuit.constraints:
        parts = c.label.split(".")
        if parts[0] == "float_add" and len(parts) > 2:
            constraints_by_child[parts[1]] = constraints_by_child.get(parts[1], 0) + 1

    print(f"\nFloatAdd(k={config.k}, p={config.p}) breakdown")
    print(f"{'Sub-gadget':<26} {'Vars':<8} {'Constraints':<12} {'%':<8}")
    print("-" * 56)
    total = float_add[1] or 1
    children = sorted(constraints_by_child, key=lambda c: -constraints_by_child[c])
    for child in children:
        n_c = constraints_by_child[child]
        print(f"{child:<26} {vars_by_child.get(child, 0):<8} {n_c:<12} {n_c / total * 100:<8.1f}")
    print("-" * 56)
    print(f"{'TOTAL':<26} {sum(stats.n_variables.values()):<8} {stats.n_constraints:<12}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Report gadget constraint counts")
    parser.add_argument("--exponent-bits", "-k", type=int, default=8, help="exponent width k")
    parser.add_argument("--precision", "-p", type=int, default=23, help="mantissa precision p")
    parser.add_argument("--config", type=str, default=None, help="JSON FloatAdd config (overrides -k/-p)")
    parser.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config:
        config = FloatAddConfig.from_json(args.config)
    else:
        config = FloatAddConfig(exponent_bits=args.exponent_bits, precision=args.precision)

    print_gadget_table(config.k, config.p)
    print_float_add_breakdown(config)


if __name__ == "__main__":
    main()
