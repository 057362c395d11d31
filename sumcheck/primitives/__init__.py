"""Primitives - Field arithmetic, polynomials and the Fiat-Shamir transcript."""

from sumcheck.primitives.field import (
    FF,
    FF2,
    FF2_BYTES,
    FIELD_EXTENSION_DEGREE,
    GOLDILOCKS_PRIME,
    batch_inverse,
    ff2,
    ff2_coeffs,
    ff2_from_base,
    ff2_from_bytes,
    ff2_to_bytes,
    to_ff2,
)
from sumcheck.primitives.multilinear import MultilinearExtension
from sumcheck.primitives.polynomial import interpolate_at, is_low_degree
from sumcheck.primitives.transcript import Transcript, decode_challenge

__all__ = [
    # Field
    "FF",
    "FF2",
    "FF2_BYTES",
    "FIELD_EXTENSION_DEGREE",
    "GOLDILOCKS_PRIME",
    "batch_inverse",
    "ff2",
    "ff2_coeffs",
    "ff2_from_base",
    "ff2_from_bytes",
    "ff2_to_bytes",
    "to_ff2",
    # Multilinear extensions
    "MultilinearExtension",
    # Univariate polynomials
    "interpolate_at",
    "is_low_degree",
    # Transcript
    "Transcript",
    "decode_challenge",
]
