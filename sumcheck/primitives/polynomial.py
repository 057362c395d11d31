"""Univariate polynomials in evaluation form over the points 0, 1, ..., d.

Round polynomials are exchanged as their evaluations at 0..=d. Both sides of
the protocol use the Lagrange basis over exactly those points, so the nodes are
fixed and pairwise distinct and interpolation can never divide by zero.
"""

from functools import lru_cache
from typing import Sequence

from sumcheck.primitives.field import FF2, batch_inverse, ff2_array, to_ff2


@lru_cache(maxsize=None)
def _barycentric_weights(degree: int) -> FF2:
    """Return w_j = 1 / prod_{k != j} (j - k) for nodes 0..=degree."""
    denominators = FF2.Ones(degree + 1)
    for j in range(degree + 1):
        acc = FF2(1)
        for k in range(degree + 1):
            if k != j:
                diff = j - k
                term = FF2(abs(diff))
                acc = acc * (term if diff > 0 else -term)
        denominators[j] = acc
    return batch_inverse(denominators)


def interpolate_at(evaluations: Sequence, x: FF2) -> FF2:
    """Evaluate the unique degree-<=d polynomial through (j, evaluations[j]) at x.

    Args:
        evaluations: d+1 values at the points 0..=d
        x: Evaluation point

    Returns:
        p(x) as an FF2 element
    """
    evals = ff2_array(evaluations)
    degree = len(evals) - 1
    if degree < 0:
        raise ValueError("cannot interpolate an empty evaluation list")
    weights = _barycentric_weights(degree)
    x = to_ff2(x)

    nodes = FF2(list(range(degree + 1)))
    diffs = x - nodes

    result = FF2(0)
    for j in range(degree + 1):
        # prod_{k != j} (x - k), no division so x may coincide with a node
        numerator = FF2(1)
        for k in range(degree + 1):
            if k != j:
                numerator = numerator * diffs[k]
        result = result + evals[j] * numerator * weights[j]
    return result


def extend_evaluations(evaluations: Sequence, n_points: int) -> FF2:
    """Extend evaluations at 0..=d to evaluations at 0..n_points-1."""
    evals = ff2_array(evaluations)
    if n_points <= len(evals):
        return evals[:n_points]
    extra = [interpolate_at(evals, FF2(t)) for t in range(len(evals), n_points)]
    return FF2([int(e) for e in evals] + [int(e) for e in extra])


def is_low_degree(evaluations: Sequence, degree: int) -> bool:
    """Check that evaluations at 0..=m come from a polynomial of degree <= degree.

    The first degree+1 values determine the candidate; every further value must
    agree with its interpolation.
    """
    evals = ff2_array(evaluations)
    if len(evals) <= degree + 1:
        return True
    base = evals[:degree + 1]
    for t in range(degree + 1, len(evals)):
        if interpolate_at(base, FF2(t)) != evals[t]:
            return False
    return True
