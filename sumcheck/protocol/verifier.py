"""Sum-check proof verification.

The verifier mirrors the prover's transcript: it absorbs the same statement and
the same round polynomials under the same labels, so it re-derives the same
challenges. Verification consists of:

1. Shape checks - one round polynomial per variable, each non-empty and of
   degree at most the configured bound (fatal: MalformedProofError)
2. Round checks - g_i(0) + g_i(1) equals the running sum, which starts at the
   claim and becomes g_i(r_i) after each round (failure: rejection)
3. Sub-claim - after the last round the running sum is the claimed value of
   f(r_0, ..., r_{n-1}); comparing it to an independently obtained f(r) is
   left to the caller (SubClaim.check)

State machine:

    INIT(claim) -> ROUND(0) -> ... -> ROUND(n-1) -> FINAL
                        \\-> REJECTED
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sumcheck.errors import MalformedProofError, ProofLengthError
from sumcheck.primitives.field import FF2, to_ff2
from sumcheck.primitives.polynomial import interpolate_at
from sumcheck.primitives.transcript import Transcript
from sumcheck.protocol.config import SumcheckConfig, absorb_statement
from sumcheck.protocol.proof import RoundProof, SumcheckProof

logger = logging.getLogger(__name__)


class VerifierState(Enum):
    INIT = "init"
    ROUND = "round"
    FINAL = "final"
    REJECTED = "rejected"


@dataclass
class SubClaim:
    """What an accepted proof reduces to: f(point) == expected_evaluation."""
    point: List[FF2] = field(default_factory=list)
    expected_evaluation: FF2 = field(default_factory=lambda: FF2(0))

    def check(self, actual) -> bool:
        """Compare against f(point) obtained independently (opening or direct evaluation)."""
        ok = bool(to_ff2(actual) == self.expected_evaluation)
        if not ok:
            logger.warning("final evaluation check failed")
        return ok


@dataclass
class VerifierResult:
    """Outcome of verify(): accept flag plus the derived sub-claim."""
    accepted: bool
    sub_claim: SubClaim

    def __bool__(self) -> bool:
        return self.accepted

    @property
    def point(self) -> List[FF2]:
        return self.sub_claim.point

    def check_evaluation(self, actual) -> bool:
        """Accepted and the final evaluation matches actual."""
        return self.accepted and self.sub_claim.check(actual)


class SumcheckVerifier:
    """Verifier for sum_{x in {0,1}^n} f(x) = claimed_sum."""

    def __init__(
        self,
        claimed_sum,
        num_vars: int,
        config: Optional[SumcheckConfig] = None,
        transcript: Optional[Transcript] = None,
    ):
        if num_vars < 1:
            raise ValueError(f"num_vars must be at least 1, got {num_vars}")
        self.config = config or SumcheckConfig()
        self.claimed_sum = to_ff2(claimed_sum)
        self.num_vars = num_vars
        self.transcript = transcript if transcript is not None else self.config.new_transcript()

        self.state = VerifierState.INIT
        self.round = 0
        self.running_sum = self.claimed_sum
        self.challenges: List[FF2] = []

    def _check_shape(self, round_proof: RoundProof) -> None:
        n_evals = len(round_proof.evaluations)
        if n_evals == 0:
            raise MalformedProofError(f"round {self.round}: empty round polynomial")
        if round_proof.degree > self.config.max_degree:
            raise MalformedProofError(
                f"round {self.round}: degree {round_proof.degree} exceeds bound {self.config.max_degree}"
            )

    def verify_round(self, round_proof: RoundProof) -> bool:
        """Check one round polynomial and advance. Returns False on rejection."""
        if self.state == VerifierState.INIT:
            absorb_statement(self.transcript, self.config, self.num_vars, self.claimed_sum)
            self.state = VerifierState.ROUND
        if self.state == VerifierState.REJECTED:
            return False
        if self.state != VerifierState.ROUND:
            raise ProofLengthError(f"received more than {self.num_vars} round polynomials")

        self._check_shape(round_proof)
        evals = round_proof.evaluations

        # --- Round check: g_i(0) + g_i(1) == running sum ---
        # A degree-0 polynomial g is constant, so g(1) = g(0)
        g0 = evals[0]
        g1 = evals[1] if len(evals) > 1 else evals[0]
        if g0 + g1 != self.running_sum:
            logger.warning("round %d sum check failed", self.round)
            self.state = VerifierState.REJECTED
            return False

        # --- Fiat-Shamir: identical labels and order to the prover ---
        self.transcript.append_fields(self.config.round_poly_label, evals)
        challenge = self.transcript.challenge(self.config.round_challenge_label)

        self.running_sum = interpolate_at(evals, challenge)
        self.challenges.append(challenge)

        self.round += 1
        if self.round == self.num_vars:
            self.state = VerifierState.FINAL
        return True

    def sub_claim(self) -> SubClaim:
        if self.state != VerifierState.FINAL:
            raise RuntimeError(f"verifier is in state {self.state.value}, not final")
        return SubClaim(point=list(self.challenges), expected_evaluation=self.running_sum)

    def verify(self, proof: SumcheckProof) -> VerifierResult:
        """Verify a complete proof.

        Returns:
            VerifierResult with accepted=False if any round check fails

        Raises:
            ProofLengthError: Proof does not have num_vars round polynomials
            MalformedProofError: A round polynomial is empty or above the degree bound
            TranscriptDecodeError: Challenge derivation failed
            RuntimeError: The verifier has already consumed rounds
        """
        if self.state != VerifierState.INIT:
            raise RuntimeError(f"verifier is in state {self.state.value}, not init")
        if proof.num_rounds != self.num_vars:
            raise ProofLengthError(f"expected {self.num_vars} round proofs, got {proof.num_rounds}")

        for round_proof in proof.round_proofs:
            if not self.verify_round(round_proof):
                return VerifierResult(
                    accepted=False,
                    sub_claim=SubClaim(point=list(self.challenges), expected_evaluation=self.running_sum),
                )

        return VerifierResult(accepted=True, sub_claim=self.sub_claim())


def verify(
    proof: SumcheckProof,
    num_vars: int,
    claimed_sum=None,
    config: Optional[SumcheckConfig] = None,
    transcript: Optional[Transcript] = None,
) -> VerifierResult:
    """Verify proof against claimed_sum (proof.claimed_sum when None)."""
    claim = proof.claimed_sum if claimed_sum is None else claimed_sum
    return SumcheckVerifier(claim, num_vars, config, transcript).verify(proof)
