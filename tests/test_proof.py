"""Tests for proof serialization and structural validation."""

import json
import struct

import pytest

from sumcheck.errors import FieldEncodingError, MalformedProofError
from sumcheck.primitives.field import FF2, GOLDILOCKS_PRIME
from sumcheck.protocol.proof import (RoundProof, SumcheckProof, from_bytes, load_proof_from_json,
                                     proof_from_json, proof_to_json, save_proof_to_json, to_bytes,
                                     validate_proof_structure)
from sumcheck.protocol.prover import prove
from sumcheck.protocol.verifier import verify
from tests.instances import E2E_CLAIM, build_random_poly


@pytest.fixture
def e2e_proof(e2e_poly) -> SumcheckProof:
    return prove(e2e_poly).proof


class TestJson:

    def test_layout(self, e2e_proof) -> None:
        j = proof_to_json(e2e_proof)
        assert j["claimedSum"] == [str(E2E_CLAIM), "0"]
        assert len(j["roundPolys"]) == 2
        assert j["roundPolys"][0][1] == ["470", "0"]

    def test_round_trip_verifies(self, e2e_proof) -> None:
        restored = proof_from_json(json.loads(json.dumps(proof_to_json(e2e_proof))))
        assert restored == e2e_proof
        assert verify(restored, 2).accepted

    def test_file_round_trip(self, e2e_proof, tmp_path) -> None:
        path = tmp_path / "proof.json"
        save_proof_to_json(e2e_proof, str(path))
        assert load_proof_from_json(str(path)) == e2e_proof

    def test_missing_key(self) -> None:
        with pytest.raises(MalformedProofError):
            proof_from_json({"claimedSum": ["1", "0"]})

    def test_non_canonical_limb(self, e2e_proof) -> None:
        j = proof_to_json(e2e_proof)
        j["claimedSum"] = [str(GOLDILOCKS_PRIME), "0"]
        with pytest.raises(FieldEncodingError):
            proof_from_json(j)

    def test_extra_claim_limbs(self, e2e_proof) -> None:
        """A claim carrying more than one element is rejected, not truncated."""
        j = proof_to_json(e2e_proof)
        j["claimedSum"] = [str(E2E_CLAIM), "0", "1", "2"]
        with pytest.raises(MalformedProofError):
            proof_from_json(j)

    def test_ragged_round_element(self, e2e_proof) -> None:
        j = proof_to_json(e2e_proof)
        j["roundPolys"][1][0] = ["1", "2", "3"]
        with pytest.raises(MalformedProofError):
            proof_from_json(j)

    def test_non_numeric_limb(self, e2e_proof) -> None:
        j = proof_to_json(e2e_proof)
        j["claimedSum"] = ["abc", "0"]
        with pytest.raises(MalformedProofError):
            proof_from_json(j)


class TestBinary:

    def test_size(self, e2e_proof) -> None:
        # claimed[2] | n_rounds | 2 x (n_evals | 4 elements x 2 limbs)
        assert len(to_bytes(e2e_proof)) == 8 * (2 + 1 + 2 * (1 + 4 * 2))

    def test_round_trip_verifies(self) -> None:
        poly = build_random_poly(4, [3, 1], seed=41)
        proof = prove(poly).proof
        restored = from_bytes(to_bytes(proof))
        assert restored == proof
        assert verify(restored, 4).accepted

    def test_truncated(self, e2e_proof) -> None:
        with pytest.raises(MalformedProofError):
            from_bytes(to_bytes(e2e_proof)[:-8])

    def test_trailing_data(self, e2e_proof) -> None:
        with pytest.raises(MalformedProofError):
            from_bytes(to_bytes(e2e_proof) + b"\x00" * 8)

    def test_ragged_length(self, e2e_proof) -> None:
        with pytest.raises(MalformedProofError):
            from_bytes(to_bytes(e2e_proof)[:-3])

    def test_non_canonical_limb(self) -> None:
        with pytest.raises(FieldEncodingError):
            from_bytes(struct.pack("<3Q", GOLDILOCKS_PRIME, 0, 0))

    def test_empty_proof(self) -> None:
        proof = SumcheckProof(claimed_sum=FF2(5))
        assert from_bytes(to_bytes(proof)) == proof


class TestValidate:

    def test_valid(self, e2e_proof) -> None:
        assert validate_proof_structure(e2e_proof, 2, 8) == []

    def test_round_count(self, e2e_proof) -> None:
        errors = validate_proof_structure(e2e_proof, 3, 8)
        assert len(errors) == 1
        assert "Expected 3 round proofs" in errors[0]

    def test_degree(self, e2e_proof) -> None:
        errors = validate_proof_structure(e2e_proof, 2, 2)
        assert len(errors) == 2

    def test_empty_round(self, e2e_proof) -> None:
        proof = SumcheckProof(round_proofs=[RoundProof(), e2e_proof.round_proofs[1]],
                              claimed_sum=e2e_proof.claimed_sum)
        errors = validate_proof_structure(proof, 2, 8)
        assert errors == ["Round 0 has no evaluations"]
