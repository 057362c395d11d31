"""Sum-check prover.

Round state machine:

    INIT(claim, poly) -> ROUND(0) -> ... -> ROUND(n-1) -> DONE(proof)

Each round evaluates the round polynomial at 0..=degree, absorbs those
evaluations, squeezes the round challenge and folds every operand by it. The
polynomial is replaced by its folded copy only after the fold completes, so no
partially folded operand is ever observable.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sumcheck.errors import DegreeMismatchError, EmptyPolynomialError
from sumcheck.primitives.field import FF2, to_ff2
from sumcheck.primitives.transcript import Transcript
from sumcheck.protocol.config import SumcheckConfig, absorb_statement
from sumcheck.protocol.proof import RoundProof, SumcheckProof
from sumcheck.protocol.virtual_poly import VirtualPolynomial

logger = logging.getLogger(__name__)


class ProverState(Enum):
    INIT = "init"
    ROUND = "round"
    DONE = "done"


@dataclass
class ProverOutput:
    """Proof plus the data an external opening step needs.

    Attributes:
        proof: The sum-check proof.
        point: Challenges (r_0, ..., r_{n-1}), the evaluation point of f.
        final_evaluations: Each distinct operand folded to one value, i.e. its
            evaluation at point, in VirtualPolynomial.operands order.
    """
    proof: SumcheckProof
    point: List[FF2] = field(default_factory=list)
    final_evaluations: List[FF2] = field(default_factory=list)


class SumcheckProver:
    """Prover for sum_{x in {0,1}^n} f(x) = claimed_sum."""

    def __init__(
        self,
        poly: VirtualPolynomial,
        claimed_sum=None,
        config: Optional[SumcheckConfig] = None,
        transcript: Optional[Transcript] = None,
    ):
        """
        Args:
            poly: Virtual polynomial to prove; consumed by the run
            claimed_sum: Claimed hypercube sum (computed honestly when None)
            config: Protocol parameters (defaults to SumcheckConfig())
            transcript: Fresh transcript (defaults to config.new_transcript())
        """
        self.config = config or SumcheckConfig()

        if poly.num_vars() == 0:
            raise EmptyPolynomialError("cannot run sum-check on a polynomial with 0 variables")
        if len(poly) == 0:
            raise EmptyPolynomialError("virtual polynomial has no terms")
        for term in poly.terms:
            if term.arity > self.config.max_degree:
                raise DegreeMismatchError(
                    f"term arity {term.arity} exceeds maximum supported degree {self.config.max_degree}"
                )

        self.poly = poly
        self.num_vars = poly.num_vars()
        self.degree = poly.degree()
        self.claimed_sum = poly.sum_over_hypercube() if claimed_sum is None else to_ff2(claimed_sum)
        self.transcript = transcript if transcript is not None else self.config.new_transcript()

        self.state = ProverState.INIT
        self.round = 0
        self.challenges: List[FF2] = []
        self.round_proofs: List[RoundProof] = []

    def _start(self) -> None:
        absorb_statement(self.transcript, self.config, self.num_vars, self.claimed_sum)
        self.state = ProverState.ROUND
        logger.debug("sumcheck prover start: num_vars=%d degree=%d terms=%d",
                     self.num_vars, self.degree, len(self.poly))

    def prove_round(self) -> RoundProof:
        """Run one round and advance the state machine."""
        if self.state == ProverState.INIT:
            self._start()
        if self.state != ProverState.ROUND:
            raise RuntimeError("prover already finished")

        # --- Round polynomial ---
        evals = self.poly.round_polynomial(self.degree)
        round_proof = RoundProof(evals)

        # --- Fiat-Shamir ---
        self.transcript.append_fields(self.config.round_poly_label, evals)
        challenge = self.transcript.challenge(self.config.round_challenge_label)

        # --- Fold ---
        self.poly = self.poly.fold(challenge)

        self.challenges.append(challenge)
        self.round_proofs.append(round_proof)
        logger.debug("round %d/%d done", self.round + 1, self.num_vars)

        self.round += 1
        if self.round == self.num_vars:
            self.state = ProverState.DONE
        return round_proof

    def prove(self) -> ProverOutput:
        """Run all remaining rounds and return the proof."""
        while self.state != ProverState.DONE:
            self.prove_round()
        return self.output()

    def output(self) -> ProverOutput:
        if self.state != ProverState.DONE:
            raise RuntimeError(f"prover stopped at round {self.round} of {self.num_vars}")
        proof = SumcheckProof(round_proofs=list(self.round_proofs), claimed_sum=self.claimed_sum)
        return ProverOutput(
            proof=proof,
            point=list(self.challenges),
            final_evaluations=self.poly.final_evaluations(),
        )


def prove(
    poly: VirtualPolynomial,
    claimed_sum=None,
    config: Optional[SumcheckConfig] = None,
    transcript: Optional[Transcript] = None,
) -> ProverOutput:
    """Generate a sum-check proof for poly."""
    return SumcheckProver(poly, claimed_sum, config, transcript).prove()
