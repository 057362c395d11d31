"""Goldilocks field GF(p) and quadratic extension GF(p^2).

Uses galois library for all field arithmetic. FF and FF2 are the field types.

Elements travel through the transcript and proof encodings in a canonical
fixed-width form: every base field limb is 8 bytes little-endian, and an FF2
element a0 + a1*X is the two limbs [a0, a1] in ascending order.
"""

import struct
from typing import Iterable, List

import galois

from sumcheck.errors import FieldEncodingError

# --- Field Construction ---

GOLDILOCKS_PRIME = 0xFFFFFFFF00000001

FF = galois.GF(GOLDILOCKS_PRIME)
"""Base field GF(p) - Goldilocks prime field."""

# Quadratic extension with irreducible polynomial x^2 - 7
# In galois, polynomial coefficients are [x^2, x^1, x^0]
_irr_poly = galois.Poly([1, 0, GOLDILOCKS_PRIME - 7], field=FF)
FF2 = galois.GF(GOLDILOCKS_PRIME**2, irreducible_poly=_irr_poly)
"""Quadratic extension field GF(p^2) with irreducible polynomial x^2 - 7."""

FIELD_EXTENSION_DEGREE = 2

# Size of one encoded base field limb
LIMB_BYTES = 8

# Size of one encoded FF2 element
FF2_BYTES = LIMB_BYTES * FIELD_EXTENSION_DEGREE


# --- Coefficient Order Conversion ---
# Galois uses descending order [a1, a0], we use ascending [a0, a1].


def ff2(coeffs: List[int]) -> FF2:
    """Construct FF2 element from ascending-order coefficients [a0, a1]."""
    return FF2.Vector(list(coeffs)[::-1])


def ff2_coeffs(elem: FF2) -> List[int]:
    """Extract ascending-order coefficients [a0, a1] from FF2 element."""
    return [int(c) for c in elem.vector()[::-1]]


def to_ff2(value) -> FF2:
    """Coerce a scalar (FF2, FF or int, possibly negative) to an FF2 element."""
    if isinstance(value, FF2):
        return value
    return FF2(int(value) % GOLDILOCKS_PRIME)


def ff2_from_base(values: Iterable) -> FF2:
    """Embed base field values (FF or plain ints) into an FF2 array."""
    # Integers below p are the constant polynomials of the extension
    ints = [int(v) % GOLDILOCKS_PRIME for v in values]
    return FF2(ints) if ints else FF2.Zeros(0)


def ff2_array(values: Iterable) -> FF2:
    """Coerce a sequence of FF2 elements, FF values or ints into an FF2 array."""
    if isinstance(values, FF2):
        return values
    if isinstance(values, FF):
        return ff2_from_base(values)
    ints = [int(v) for v in values]
    return FF2(ints) if ints else FF2.Zeros(0)


def ff2_to_flat_list(arr: FF2) -> List[int]:
    """Flatten an FF2 array into [a0_0, a1_0, a0_1, a1_1, ...]."""
    result = []
    for elem in arr:
        result.extend(ff2_coeffs(elem))
    return result


def ff2_from_flat_list(values: List[int]) -> FF2:
    """Inverse of ff2_to_flat_list."""
    if len(values) % FIELD_EXTENSION_DEGREE != 0:
        raise FieldEncodingError(
            f"flat list length {len(values)} is not a multiple of {FIELD_EXTENSION_DEGREE}"
        )
    for v in values:
        _check_limb(v)
    pairs = [values[i:i + FIELD_EXTENSION_DEGREE] for i in range(0, len(values), FIELD_EXTENSION_DEGREE)]
    return ff2_array([int(ff2(p)) for p in pairs])


# --- Byte Encoding ---

def _check_limb(value: int) -> int:
    if not 0 <= value < GOLDILOCKS_PRIME:
        raise FieldEncodingError(f"limb {value:#x} is not a canonical Goldilocks element")
    return value


def ff_to_bytes(elem: FF) -> bytes:
    """Encode a base field element as 8 bytes little-endian."""
    return struct.pack("<Q", int(elem))


def ff_from_bytes(data: bytes) -> FF:
    """Decode 8 little-endian bytes into a base field element."""
    if len(data) != LIMB_BYTES:
        raise FieldEncodingError(f"expected {LIMB_BYTES} bytes, got {len(data)}")
    (value,) = struct.unpack("<Q", data)
    return FF(_check_limb(value))


def ff2_to_bytes(elem: FF2) -> bytes:
    """Encode an FF2 element as limbs [a0, a1], 8 bytes little-endian each."""
    return struct.pack("<2Q", *ff2_coeffs(elem))


def ff2_from_bytes(data: bytes) -> FF2:
    """Decode 16 bytes into an FF2 element, rejecting non-canonical limbs."""
    if len(data) != FF2_BYTES:
        raise FieldEncodingError(f"expected {FF2_BYTES} bytes, got {len(data)}")
    limbs = [_check_limb(v) for v in struct.unpack("<2Q", data)]
    return ff2(limbs)


# --- Montgomery Batch Inversion ---

def batch_inverse(values):
    """Invert every element of a galois array with a single field inversion.

    Prefix products are inverted once, then unwound from the end. Used for the
    interpolation weights, where every denominator is a nonzero integer.

    Raises:
        ZeroDivisionError: If any element is zero
    """
    n = len(values)
    if n == 0:
        return values
    if n == 1:
        return values ** -1

    field_type = type(values)

    cumprods = field_type.Zeros(n)
    cumprods[0] = values[0]
    for i in range(1, n):
        cumprods[i] = cumprods[i - 1] * values[i]

    inv_total = cumprods[n - 1] ** -1

    results = field_type.Zeros(n)
    z = inv_total
    for i in range(n - 1, 0, -1):
        results[i] = z * cumprods[i - 1]
        z = z * values[i]
    results[0] = z

    return results
