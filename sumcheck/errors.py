"""Error taxonomy for the sum-check engine.

Malformed input and corrupted transcripts are exceptions. An honest-looking
proof that fails a round check or the final check is not: the verifier reports
it as a boolean rejection.
"""


class SumcheckError(ValueError):
    """Base class for all fatal sum-check errors."""


class FieldEncodingError(SumcheckError):
    """Bytes do not decode to a canonical field element."""


class EmptyDomainError(SumcheckError):
    """Fold requested on a multilinear extension with no variables left."""


class NumVarsMismatchError(SumcheckError):
    """Operands of one virtual polynomial disagree on the number of variables."""


class EmptyPolynomialError(SumcheckError):
    """Prover given a virtual polynomial with no variables or no terms."""


class DegreeMismatchError(SumcheckError):
    """A term's arity exceeds the configured maximum degree."""


class MalformedProofError(SumcheckError):
    """Proof shape is invalid (round polynomial empty or above the degree bound)."""


class ProofLengthError(MalformedProofError):
    """Proof does not carry exactly one round polynomial per variable."""


class TranscriptDecodeError(SumcheckError):
    """Squeezed transcript bytes did not map to a field element."""
