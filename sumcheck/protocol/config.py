"""Sum-check protocol parameters and transcript labels."""

import json
from dataclasses import dataclass
from typing import Optional

from sumcheck.primitives.field import FF2, ff2, ff2_to_bytes
from sumcheck.primitives.transcript import Transcript

# --- Protocol Constants ---
# Labels are part of the protocol: prover and verifier must use identical bytes.

DOMAIN_LABEL = b"my_sumcheck"
PUBLIC_LABEL = b"public"
SEED_LABEL = b"seeded"
START_SUMCHECK = b"start_sumcheck"
ROUND_POLY = b"round_poly"
ROUND_CHALLENGE = b"round_challenge"

# Largest term arity supported by default
DEFAULT_MAX_DEGREE = 8


def _label(value) -> bytes:
    return value.encode() if isinstance(value, str) else bytes(value)


def _seed(value) -> Optional[FF2]:
    # JSON seeds are either a base field integer or limbs [a0, a1]
    if value is None:
        return None
    if isinstance(value, list):
        return ff2([int(v) for v in value])
    return FF2(int(value))


# --- Configuration ---

@dataclass
class SumcheckConfig:
    """Sum-check parameters shared by prover and verifier."""
    max_degree: int = DEFAULT_MAX_DEGREE
    domain_label: bytes = DOMAIN_LABEL
    start_label: bytes = START_SUMCHECK
    round_poly_label: bytes = ROUND_POLY
    round_challenge_label: bytes = ROUND_CHALLENGE
    seed: Optional[FF2] = None

    def __post_init__(self) -> None:
        if self.max_degree < 1:
            raise ValueError(f"max_degree must be at least 1, got {self.max_degree}")
        self.domain_label = _label(self.domain_label)
        self.start_label = _label(self.start_label)
        self.round_poly_label = _label(self.round_poly_label)
        self.round_challenge_label = _label(self.round_challenge_label)

    @classmethod
    def from_dict(cls, j: dict) -> "SumcheckConfig":
        """Build from a decoded JSON object (camelCase keys)."""
        seed = j.get("seed")
        return cls(
            max_degree=j.get("maxDegree", DEFAULT_MAX_DEGREE),
            domain_label=j.get("domainLabel", DOMAIN_LABEL),
            start_label=j.get("startLabel", START_SUMCHECK),
            round_poly_label=j.get("roundPolyLabel", ROUND_POLY),
            round_challenge_label=j.get("roundChallengeLabel", ROUND_CHALLENGE),
            seed=_seed(seed),
        )

    @classmethod
    def from_json(cls, path: str) -> "SumcheckConfig":
        """Load SumcheckConfig from a JSON file."""
        with open(path) as f:
            j = json.load(f)
        return cls.from_dict(j)

    def new_transcript(self) -> Transcript:
        """Fresh transcript for one proof run."""
        return Transcript(self.domain_label)


# --- Seeding ---

def derive_seed(claimed_sum: FF2, domain_label: bytes = DOMAIN_LABEL) -> FF2:
    """Derive a transcript seed from the public claim.

    Stands in for an outer protocol: a previous transcript absorbs the claim
    under PUBLIC_LABEL and the seed is squeezed under SEED_LABEL. Both sides
    compute it independently from public data.
    """
    previous = Transcript(domain_label)
    previous.append_field(PUBLIC_LABEL, claimed_sum)
    return previous.challenge(SEED_LABEL)


def seeded_config(claimed_sum: FF2, **kwargs) -> SumcheckConfig:
    """SumcheckConfig whose seed is derive_seed(claimed_sum)."""
    config = SumcheckConfig(**kwargs)
    config.seed = derive_seed(claimed_sum, config.domain_label)
    return config


def absorb_statement(transcript: Transcript, config: SumcheckConfig, num_vars: int, claimed_sum: FF2) -> None:
    """Bind the public statement into the transcript before round 0.

    Message under config.start_label: u64(num_vars) || seed || claimed_sum,
    where seed is omitted when the config carries none.
    """
    data = num_vars.to_bytes(8, "little")
    if config.seed is not None:
        data += ff2_to_bytes(config.seed)
    data += ff2_to_bytes(claimed_sum)
    transcript.append(config.start_label, data)
