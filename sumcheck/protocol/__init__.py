"""Protocol - Sum-check prover and verifier."""

from sumcheck.protocol.config import (
    DOMAIN_LABEL,
    ROUND_CHALLENGE,
    ROUND_POLY,
    START_SUMCHECK,
    SumcheckConfig,
    derive_seed,
    seeded_config,
)
from sumcheck.protocol.proof import (
    RoundProof,
    SumcheckProof,
    from_bytes,
    load_proof_from_json,
    proof_from_json,
    proof_to_json,
    to_bytes,
    validate_proof_structure,
)
from sumcheck.protocol.prover import ProverOutput, ProverState, SumcheckProver, prove
from sumcheck.protocol.verifier import (
    SubClaim,
    SumcheckVerifier,
    VerifierResult,
    VerifierState,
    verify,
)
from sumcheck.protocol.virtual_poly import Term, VirtualPolynomial

__all__ = [
    # Configuration
    "SumcheckConfig",
    "DOMAIN_LABEL",
    "START_SUMCHECK",
    "ROUND_POLY",
    "ROUND_CHALLENGE",
    "derive_seed",
    "seeded_config",
    # Virtual polynomials
    "Term",
    "VirtualPolynomial",
    # Proof
    "RoundProof",
    "SumcheckProof",
    "proof_to_json",
    "proof_from_json",
    "load_proof_from_json",
    "to_bytes",
    "from_bytes",
    "validate_proof_structure",
    # Prover
    "SumcheckProver",
    "ProverState",
    "ProverOutput",
    "prove",
    # Verifier
    "SumcheckVerifier",
    "VerifierState",
    "VerifierResult",
    "SubClaim",
    "verify",
]
