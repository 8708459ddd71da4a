"""Polynomial expressions over circuit variables.

An Expr is a sparse multivariate polynomial over FF. It is stored as a
mapping from monomials to non-zero coefficients, where a monomial is the
sorted tuple of the variable indices it multiplies together (repetition
allowed) and the empty tuple is the constant term:

    3*x0*x2 + 5*x1 - 7   ->   {(0, 2): 3, (1,): 5, (): p - 7}

Gadgets build constraints by combining Exprs with ordinary Python
operators. Python ints are lifted to constants on the fly, so
`1 - x * inv` reads the same as the equation it encodes.
"""

from typing import Dict, Iterable, List, Tuple, Union

from primitives.field import FF, ONE, ZERO, felt

Monomial = Tuple[int, ...]


def _accumulate(terms: Dict[Monomial, FF], monomial: Monomial, coeff: FF) -> None:
    """Add coeff to terms[monomial], dropping the entry if it cancels."""
    total = terms.get(monomial, ZERO) + coeff
    if total == ZERO:
        terms.pop(monomial, None)
    else:
        terms[monomial] = total


class Expr:
    """Polynomial over circuit variables with FF coefficients."""

    __slots__ = ("terms",)

    def __init__(self, terms: Dict[Monomial, FF] = None):
        self.terms: Dict[Monomial, FF] = terms if terms is not None else {}

    # --- Construction ---

    @classmethod
    def constant(cls, value) -> "Expr":
        value = felt(value)
        if value == ZERO:
            return cls()
        return cls({(): value})

    @classmethod
    def variable(cls, index: int) -> "Expr":
        return cls({(index,): ONE})

    @classmethod
    def lift(cls, value: "ExprLike") -> "Expr":
        """Return value unchanged if it is an Expr, else wrap it as a constant."""
        if isinstance(value, Expr):
            return value
        return cls.constant(value)

    # --- Inspection ---

    @property
    def degree(self) -> int:
        return max((len(m) for m in self.terms), default=0)

    @property
    def is_constant(self) -> bool:
        return all(len(m) == 0 for m in self.terms)

    @property
    def constant_value(self) -> FF:
        """Value of a constant expression.

        Raises:
            ValueError: If the expression references any variable
        """
        if not self.is_constant:
            raise ValueError(f"Expression is not constant: {self!r}")
        return self.terms.get((), ZERO)

    @property
    def variables(self) -> List[int]:
        """Sorted indices of every variable the expression references."""
        return sorted({i for m in self.terms for i in m})

    @property
    def single_variable(self) -> Union[int, None]:
        """Index of the variable if the expression is exactly 1*x, else None."""
        if len(self.terms) == 1:
            (monomial, coeff), = self.terms.items()
            if len(monomial) == 1 and coeff == ONE:
                return monomial[0]
        return None

    # --- Arithmetic ---

    def __add__(self, other: "ExprLike") -> "Expr":
        other = Expr.lift(other)
        terms = dict(self.terms)
        for monomial, coeff in other.terms.items():
            _accumulate(terms, monomial, coeff)
        return Expr(terms)

    __radd__ = __add__

    def __neg__(self) -> "Expr":
        return Expr({m: -c for m, c in self.terms.items()})

    def __sub__(self, other: "ExprLike") -> "Expr":
        return self + (-Expr.lift(other))

    def __rsub__(self, other: "ExprLike") -> "Expr":
        return Expr.lift(other) - self

    def __mul__(self, other: "ExprLike") -> "Expr":
        other = Expr.lift(other)
        if other.is_constant:
            return self.scale(other.constant_value)
        if self.is_constant:
            return other.scale(self.constant_value)
        terms: Dict[Monomial, FF] = {}
        for m1, c1 in self.terms.items():
            for m2, c2 in other.terms.items():
                _accumulate(terms, tuple(sorted(m1 + m2)), c1 * c2)
        return Expr(terms)

    __rmul__ = __mul__

    def scale(self, factor) -> "Expr":
        factor = felt(factor)
        if factor == ZERO:
            return Expr()
        return Expr({m: c * factor for m, c in self.terms.items()})

    # --- Evaluation ---

    def evaluate(self, values: FF) -> FF:
        """Evaluate against a witness vector indexed by variable index."""
        total = ZERO
        for monomial, coeff in self.terms.items():
            term = coeff
            for index in monomial:
                term = term * values[index]
            total = total + term
        return total

    def __repr__(self) -> str:
        if not self.terms:
            return "Expr(0)"
        parts = []
        for monomial, coeff in sorted(self.terms.items()):
            names = "*".join(f"x{i}" for i in monomial)
            if not names:
                parts.append(str(int(coeff)))
            elif coeff == ONE:
                parts.append(names)
            else:
                parts.append(f"{int(coeff)}*{names}")
        return f"Expr({' + '.join(parts)})"


ExprLike = Union[Expr, int, FF]


def linear_combination(terms: Iterable[Tuple[Union[int, FF], ExprLike]]) -> Expr:
    """Build sum(coeff_i * expr_i) in a single pass.

    Equivalent to chaining `+`, but without copying the accumulator for
    every term, which matters for the bit-weighted sums over wide vectors.

    Args:
        terms: (coefficient, expression) pairs; coefficients are constants,
            expressions may be plain ints

    Returns:
        The combined expression
    """
    result: Dict[Monomial, FF] = {}
    for coeff, expr in terms:
        if isinstance(coeff, Expr):
            raise TypeError("linear_combination coefficients must be constants")
        coeff = felt(coeff)
        if coeff == ZERO:
            continue
        for monomial, c in Expr.lift(expr).terms.items():
            _accumulate(result, monomial, c * coeff)
    return Expr(result)
