"""Virtual polynomials: weighted sums of products of multilinear extensions.

    f(x) = sum_terms scalar_k * prod_{j in product_k} mle_j(x)

The polynomial is never materialized. Only its operands are stored, and an MLE
that appears in several terms is stored (and folded) once.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from sumcheck.errors import EmptyDomainError, EmptyPolynomialError, NumVarsMismatchError
from sumcheck.primitives.field import FF2, to_ff2
from sumcheck.primitives.multilinear import MultilinearExtension

logger = logging.getLogger(__name__)

# --- Type Aliases ---

OperandIndex = int
Product = Tuple[FF2, Tuple[OperandIndex, ...]]  # (scalar, operand indices)


@dataclass
class Term:
    """One monomial: a scalar times a product of MLE operands."""
    scalar: FF2
    product: List[MultilinearExtension] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.scalar = to_ff2(self.scalar)
        self.product = list(self.product)

    @property
    def arity(self) -> int:
        return len(self.product)


class VirtualPolynomial:
    """Symbolic sum of scalar-weighted products of MLEs sharing num_vars variables.

    Attributes:
        num_threads: Parallelism hint for the per-round hypercube reduction
    """

    def __init__(self, num_vars: int, terms: Sequence[Term] = (), num_threads: int = 1):
        if num_threads < 1:
            raise ValueError(f"num_threads must be positive, got {num_threads}")
        self._num_vars = num_vars
        self.num_threads = num_threads
        self._mles: List[MultilinearExtension] = []
        self._index: Dict[int, OperandIndex] = {}
        self._products: List[Product] = []
        for term in terms:
            self.add_term(term.scalar, term.product)

    @classmethod
    def new_from_monomials(cls, num_threads: int, num_vars: int, terms: Sequence[Term]) -> "VirtualPolynomial":
        return cls(num_vars, terms, num_threads=num_threads)

    # --- Construction ---

    def add_term(self, scalar, product: Sequence[MultilinearExtension]) -> None:
        """Append scalar * prod(product). Operands are de-duplicated by identity."""
        if not product:
            raise ValueError("a term needs at least one multilinear operand")
        indices = []
        for mle in product:
            if mle.num_vars() != self._num_vars:
                raise NumVarsMismatchError(
                    f"operand has {mle.num_vars()} variables, polynomial has {self._num_vars}"
                )
            key = id(mle)
            if key not in self._index:
                self._index[key] = len(self._mles)
                self._mles.append(mle)
            indices.append(self._index[key])
        self._products.append((to_ff2(scalar), tuple(indices)))

    def _with_operands(self, mles: List[MultilinearExtension]) -> "VirtualPolynomial":
        poly = VirtualPolynomial(self._num_vars - 1, num_threads=self.num_threads)
        poly._mles = mles
        poly._index = {id(m): i for i, m in enumerate(mles)}
        poly._products = list(self._products)
        return poly

    # --- Accessors ---

    def num_vars(self) -> int:
        return self._num_vars

    def degree(self) -> int:
        """Degree in any single variable: the largest term arity."""
        return max((len(idx) for _, idx in self._products), default=0)

    @property
    def operands(self) -> List[MultilinearExtension]:
        """Distinct MLE operands, in first-use order."""
        return list(self._mles)

    @property
    def terms(self) -> List[Term]:
        return [Term(scalar, [self._mles[i] for i in idx]) for scalar, idx in self._products]

    def __len__(self) -> int:
        return len(self._products)

    # --- Evaluation ---

    def evaluate_from_operands(self, values: Sequence) -> FF2:
        """Combine one value per operand into sum_k scalar_k * prod values[j]."""
        if len(values) != len(self._mles):
            raise ValueError(f"expected {len(self._mles)} operand values, got {len(values)}")
        total = FF2(0)
        for scalar, idx in self._products:
            prod = scalar
            for i in idx:
                prod = prod * values[i]
            total = total + prod
        return total

    def evaluate(self, point: Sequence) -> FF2:
        """Direct evaluation of f at an arbitrary point."""
        return self.evaluate_from_operands([mle.evaluate(point) for mle in self._mles])

    def sum_over_hypercube(self) -> FF2:
        """sum_{x in {0,1}^n} f(x), the honest claim."""
        total = FF2(0)
        for scalar, idx in self._products:
            prod = self._mles[idx[0]].evaluations
            for i in idx[1:]:
                prod = prod * self._mles[i].evaluations
            total = total + scalar * np.sum(prod)
        return total

    def final_evaluations(self) -> List[FF2]:
        """One scalar per operand once every variable has been folded."""
        if self._num_vars != 0:
            raise ValueError(f"polynomial still has {self._num_vars} unfolded variables")
        return [mle.scalar() for mle in self._mles]

    # --- Sum-check Round ---

    def round_polynomial(self, bound: int) -> FF2:
        """Evaluations g(0..=bound) of the round polynomial in the leading variable.

        g(t) = sum over b in {0,1}^(n-1) of f(t, b). Operands are read through
        temporary substitutions only; nothing stored is modified.

        The 2^(n-1) assignments are split into contiguous chunks reduced on a
        thread pool; partial sums are combined in chunk order.
        """
        if self._num_vars == 0:
            raise EmptyDomainError("round polynomial requested with no variables left")
        if not self._products:
            raise EmptyPolynomialError("round polynomial requested for a polynomial with no terms")
        half = 1 << (self._num_vars - 1)
        ranges = _chunk_ranges(half, self.num_threads)

        if len(ranges) == 1:
            partials = [self._chunk_round_evals(bound, *ranges[0])]
        else:
            with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
                partials = list(pool.map(lambda r: self._chunk_round_evals(bound, *r), ranges))

        totals = partials[0]
        for part in partials[1:]:
            totals = [a + b for a, b in zip(totals, part)]
        return FF2([int(v) for v in totals])

    def _chunk_round_evals(self, bound: int, start: int, end: int) -> List[FF2]:
        """Partial g(t) for t in 0..=bound over assignments start..end-1."""
        half = 1 << (self._num_vars - 1)
        lows = [mle.evaluations[start:end] for mle in self._mles]
        steps = [mle.evaluations[half + start:half + end] - lo for mle, lo in zip(self._mles, lows)]

        out = []
        values = lows
        for t in range(bound + 1):
            if t > 0:
                # operand(t, b) = lo[b] + t * (hi[b] - lo[b])
                values = [v + s for v, s in zip(values, steps)]
            acc = None
            for scalar, idx in self._products:
                prod = values[idx[0]]
                for i in idx[1:]:
                    prod = prod * values[i]
                contrib = scalar * prod
                acc = contrib if acc is None else acc + contrib
            out.append(np.sum(acc))
        return out

    def fold(self, challenge) -> "VirtualPolynomial":
        """Fix the leading variable of every operand; returns a new polynomial."""
        challenge = to_ff2(challenge)
        folded = [mle.fold(challenge) for mle in self._mles]
        logger.debug("folded %d operands to %d variables", len(folded), self._num_vars - 1)
        return self._with_operands(folded)


def _chunk_ranges(size: int, n_chunks: int) -> List[Tuple[int, int]]:
    """Split range(size) into at most n_chunks contiguous, near-equal pieces."""
    n_chunks = max(1, min(n_chunks, size))
    base, extra = divmod(size, n_chunks)
    ranges = []
    start = 0
    for i in range(n_chunks):
        end = start + base + (1 if i < extra else 0)
        ranges.append((start, end))
        start = end
    return ranges
