"""Sum-check test instances."""

from typing import List, Sequence

from sumcheck.primitives.field import FF2
from sumcheck.primitives.multilinear import MultilinearExtension
from sumcheck.protocol.virtual_poly import Term, VirtualPolynomial

# f = A*B*E - C*E over two variables
E2E_A = [1, 2, 3, 4]
E2E_B = [5, 6, 7, 8]
E2E_C = [9, 10, 11, 12]
E2E_E = [13, 14, 15, 16]
E2E_CLAIM = 446  # (-52) + 28 + 150 + 320


def build_e2e_poly(num_threads: int = 2) -> VirtualPolynomial:
    """A*B*E - C*E with the fixed two-variable tables above."""
    a = MultilinearExtension.from_base(E2E_A)
    b = MultilinearExtension.from_base(E2E_B)
    c = MultilinearExtension.from_base(E2E_C)
    e = MultilinearExtension.from_base(E2E_E)
    return VirtualPolynomial.new_from_monomials(
        num_threads, 2, [Term(FF2(1), [a, b, e]), Term(-1, [c, e])]
    )


def build_random_poly(
    num_vars: int,
    arities: Sequence[int],
    seed: int = 0,
    num_threads: int = 1,
) -> VirtualPolynomial:
    """Random virtual polynomial with one term per entry of arities.

    The first operand of every term is shared, so operand de-duplication is
    always exercised.
    """
    shared = MultilinearExtension.random(num_vars, seed=seed)
    terms: List[Term] = []
    next_seed = seed + 1
    for k, arity in enumerate(arities):
        product = [shared]
        for _ in range(arity - 1):
            product.append(MultilinearExtension.random(num_vars, seed=next_seed))
            next_seed += 1
        terms.append(Term(FF2.Random(seed=10_000 + seed * 100 + k), product))
    return VirtualPolynomial(num_vars, terms, num_threads=num_threads)
