"""
Pytest configuration for gadget tests.

Shared helpers for generating normalized floats.
"""

import random
import sys
from pathlib import Path
from typing import List, Tuple

import pytest

# Add the repo root to the path so absolute imports work
# (tests/ is inside the repo root, so parent is the root)
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))


def random_float(rng: random.Random, k: int, p: int, max_e: int = None) -> Tuple[int, int]:
    """A well-formed (e, m); zero about one time in ten."""
    if rng.random() < 0.1:
        return 0, 0
    max_e = max_e if max_e is not None else (1 << k) - 1
    return rng.randint(1, max_e), rng.randint(1 << p, (1 << (p + 1)) - 1)


def random_float_pairs(seed: int, n: int, k: int, p: int, headroom: int = 2) -> List[Tuple[int, int, int, int]]:
    """Pairs of well-formed floats whose exponents are mostly close together.

    Exponents stay `headroom` below 2^k - 1 so a carry out of the sum
    still fits in k bits.
    """
    rng = random.Random(seed)
    max_e = (1 << k) - 1 - headroom
    pairs = []
    for _ in range(n):
        e0, m0 = random_float(rng, k, p, max_e)
        if rng.random() < 0.7 and e0 != 0:
            e1 = min(max(1, e0 + rng.randint(-(p + 3), p + 3)), max_e)
            m1 = rng.randint(1 << p, (1 << (p + 1)) - 1)
        else:
            e1, m1 = random_float(rng, k, p, max_e)
        pairs.append((e0, m0, e1, m1))
    return pairs


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
