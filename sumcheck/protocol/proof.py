"""Sum-check proof data structures and serialization."""

import json
import struct
from dataclasses import dataclass, field
from typing import Any, List

from sumcheck.errors import FieldEncodingError, MalformedProofError
from sumcheck.primitives.field import (FF2, FIELD_EXTENSION_DEGREE, ff2_array,
                                       ff2_coeffs, ff2_from_flat_list, ff2_to_flat_list)


# --- Proof Data Structures ---

@dataclass
class RoundProof:
    """Round polynomial g_i as its evaluations at 0, 1, ..., degree."""
    evaluations: FF2 = field(default_factory=lambda: FF2.Zeros(0))

    def __post_init__(self) -> None:
        self.evaluations = ff2_array(self.evaluations)

    @property
    def degree(self) -> int:
        return len(self.evaluations) - 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoundProof):
            return NotImplemented
        return ff2_to_flat_list(self.evaluations) == ff2_to_flat_list(other.evaluations)


@dataclass
class SumcheckProof:
    """Complete sum-check proof.

    Attributes:
        round_proofs: One RoundProof per variable, in round order.
        claimed_sum: The public claim sum_{x in {0,1}^n} f(x) the proof is for.
    """
    round_proofs: List[RoundProof] = field(default_factory=list)
    claimed_sum: FF2 = field(default_factory=lambda: FF2(0))

    @property
    def num_rounds(self) -> int:
        return len(self.round_proofs)

    def round_polys(self) -> List[List[List[int]]]:
        """Round polynomial evaluations as [[a0, a1], ...] per round."""
        return [[ff2_coeffs(e) for e in rp.evaluations] for rp in self.round_proofs]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SumcheckProof):
            return NotImplemented
        return (ff2_coeffs(self.claimed_sum) == ff2_coeffs(other.claimed_sum)
                and self.round_proofs == other.round_proofs)


# --- JSON Serialization ---

def proof_to_json(proof: SumcheckProof) -> dict[str, Any]:
    """Convert proof to JSON-serializable dictionary (limbs as decimal strings)."""
    return {
        "claimedSum": [str(c) for c in ff2_coeffs(proof.claimed_sum)],
        "roundPolys": [[[str(c) for c in ev] for ev in rp] for rp in proof.round_polys()],
    }


def _elem_from_json(limbs: Any) -> List[int]:
    # One FF2 element: exactly [a0, a1]
    if not isinstance(limbs, list) or len(limbs) != FIELD_EXTENSION_DEGREE:
        raise MalformedProofError(f"expected {FIELD_EXTENSION_DEGREE} limbs per element, got {limbs!r}")
    return [int(c) for c in limbs]


def proof_from_json(j: dict[str, Any]) -> SumcheckProof:
    """Inverse of proof_to_json."""
    try:
        claimed = ff2_from_flat_list(_elem_from_json(j["claimedSum"]))[0]
        round_proofs = [
            RoundProof(ff2_from_flat_list([c for ev in rp for c in _elem_from_json(ev)]))
            for rp in j["roundPolys"]
        ]
    except (FieldEncodingError, MalformedProofError):
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedProofError(f"invalid proof JSON: {e}") from e
    return SumcheckProof(round_proofs=round_proofs, claimed_sum=claimed)


def load_proof_from_json(path: str) -> SumcheckProof:
    """Load proof from JSON file."""
    with open(path) as f:
        data = json.load(f)
    return proof_from_json(data)


def save_proof_to_json(proof: SumcheckProof, path: str) -> None:
    with open(path, "w") as f:
        json.dump(proof_to_json(proof), f, indent=2)


# --- Binary Serialization ---
# Layout (all u64 little-endian):
#   claimed_sum[2] | n_rounds | for each round: n_evals | evals[2 * n_evals]

def to_bytes(proof: SumcheckProof) -> bytes:
    values: List[int] = list(ff2_coeffs(proof.claimed_sum))
    values.append(proof.num_rounds)
    for rp in proof.round_proofs:
        values.append(len(rp.evaluations))
        values.extend(ff2_to_flat_list(rp.evaluations))
    return struct.pack(f'<{len(values)}Q', *values)


def from_bytes(data: bytes) -> SumcheckProof:
    if len(data) % 8 != 0:
        raise MalformedProofError(f"binary proof length {len(data)} is not a multiple of 8")
    vals = list(struct.unpack(f'<{len(data) // 8}Q', data))
    idx = 0

    def take(n: int) -> List[int]:
        nonlocal idx
        if idx + n > len(vals):
            raise MalformedProofError(f"binary proof truncated: need {idx + n} values, have {len(vals)}")
        out = vals[idx:idx + n]
        idx += n
        return out

    claimed = ff2_from_flat_list(take(FIELD_EXTENSION_DEGREE))[0]
    (n_rounds,) = take(1)
    round_proofs = []
    for _ in range(n_rounds):
        (n_evals,) = take(1)
        round_proofs.append(RoundProof(ff2_from_flat_list(take(n_evals * FIELD_EXTENSION_DEGREE))))

    if idx != len(vals):
        raise MalformedProofError(f"Binary proof parsing error: consumed {idx} values, expected {len(vals)}")

    return SumcheckProof(round_proofs=round_proofs, claimed_sum=claimed)


# --- Validation ---

def validate_proof_structure(proof: SumcheckProof, num_vars: int, max_degree: int) -> list[str]:
    """Validate that proof shape matches the statement; returns error messages."""
    errors = []

    if proof.num_rounds != num_vars:
        errors.append(f"Expected {num_vars} round proofs, got {proof.num_rounds}")

    for i, rp in enumerate(proof.round_proofs):
        if len(rp.evaluations) == 0:
            errors.append(f"Round {i} has no evaluations")
        elif rp.degree > max_degree:
            errors.append(f"Round {i} has degree {rp.degree}, maximum is {max_degree}")

    return errors
