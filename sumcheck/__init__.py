"""Sum-check protocol engine over the Goldilocks quadratic extension."""

from sumcheck.errors import (
    DegreeMismatchError,
    EmptyDomainError,
    EmptyPolynomialError,
    FieldEncodingError,
    MalformedProofError,
    NumVarsMismatchError,
    ProofLengthError,
    SumcheckError,
    TranscriptDecodeError,
)
from sumcheck.primitives import FF, FF2, MultilinearExtension, Transcript
from sumcheck.protocol import (
    RoundProof,
    SubClaim,
    SumcheckConfig,
    SumcheckProof,
    SumcheckProver,
    SumcheckVerifier,
    Term,
    VerifierResult,
    VirtualPolynomial,
    prove,
    verify,
)

__version__ = "0.1.0"

__all__ = [
    "FF",
    "FF2",
    "MultilinearExtension",
    "Transcript",
    "Term",
    "VirtualPolynomial",
    "SumcheckConfig",
    "RoundProof",
    "SumcheckProof",
    "SumcheckProver",
    "SumcheckVerifier",
    "SubClaim",
    "VerifierResult",
    "prove",
    "verify",
    "SumcheckError",
    "FieldEncodingError",
    "EmptyDomainError",
    "NumVarsMismatchError",
    "EmptyPolynomialError",
    "DegreeMismatchError",
    "MalformedProofError",
    "ProofLengthError",
    "TranscriptDecodeError",
]
