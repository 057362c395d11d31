"""Dense multilinear extensions over FF2.

A multilinear extension in n variables is stored as its 2^n evaluations on the
Boolean hypercube. Index bit n-1 (the most significant bit) is the leading
variable x_0, so evaluations[b] holds f(x_0, ..., x_{n-1}) with
b = x_0 * 2^(n-1) + ... + x_{n-1}.

Folding fixes the leading variable:

    new[b] = (1 - c) * old[0 || b] + c * old[1 || b] = lo[b] + c * (hi[b] - lo[b])

where lo and hi are the lower and upper halves of the table.
"""

from typing import Optional, Sequence

from sumcheck.errors import EmptyDomainError, NumVarsMismatchError
from sumcheck.primitives.field import FF2, ff2_array, ff2_from_base, to_ff2


class MultilinearExtension:
    """Immutable evaluation table of a multilinear polynomial."""

    __slots__ = ("_evals", "_num_vars")

    def __init__(self, evaluations, num_vars: Optional[int] = None):
        evals = ff2_array(evaluations).copy()
        size = len(evals)
        if size == 0 or size & (size - 1):
            raise ValueError(f"evaluation count must be a power of two, got {size}")
        n = size.bit_length() - 1
        if num_vars is not None and num_vars != n:
            raise NumVarsMismatchError(f"expected {1 << num_vars} evaluations for {num_vars} variables, got {size}")
        evals.setflags(write=False)
        self._evals = evals
        self._num_vars = n

    @classmethod
    def from_base(cls, values: Sequence, num_vars: Optional[int] = None) -> "MultilinearExtension":
        """Build from base field values (FF elements or ints), embedded into FF2."""
        return cls(ff2_from_base(values), num_vars)

    @classmethod
    def random(cls, num_vars: int, seed: Optional[int] = None) -> "MultilinearExtension":
        """Sample a uniformly random table (demo and test helper)."""
        return cls(FF2.Random(1 << num_vars, seed=seed))

    @property
    def evaluations(self) -> FF2:
        """Read-only view of the evaluation table."""
        return self._evals

    def num_vars(self) -> int:
        return self._num_vars

    def __len__(self) -> int:
        return len(self._evals)

    def __repr__(self) -> str:
        return f"MultilinearExtension(num_vars={self._num_vars})"

    def halves(self):
        """Return (lo, hi): the table restricted to x_0 = 0 and x_0 = 1."""
        if self._num_vars == 0:
            raise EmptyDomainError("multilinear extension has no variables to split")
        half = len(self._evals) >> 1
        return self._evals[:half], self._evals[half:]

    def fold(self, challenge: FF2) -> "MultilinearExtension":
        """Fix the leading variable to challenge; returns a new (n-1)-variable MLE."""
        if self._num_vars == 0:
            raise EmptyDomainError("cannot fold a multilinear extension with 0 variables")
        lo, hi = self.halves()
        challenge = to_ff2(challenge)
        return MultilinearExtension(lo + challenge * (hi - lo))

    def evaluate(self, point: Sequence) -> FF2:
        """Evaluate at an arbitrary point (x_0, ..., x_{n-1}) by repeated folding."""
        if len(point) != self._num_vars:
            raise NumVarsMismatchError(f"point has {len(point)} coordinates, MLE has {self._num_vars} variables")
        mle = self
        for coord in point:
            mle = mle.fold(coord)
        return mle.evaluations[0]

    def sum(self) -> FF2:
        """Sum of the evaluations over the Boolean hypercube."""
        return self._evals.sum()

    def scalar(self) -> FF2:
        """The single remaining value of a fully folded MLE."""
        if self._num_vars != 0:
            raise ValueError(f"MLE still has {self._num_vars} variables")
        return self._evals[0]
