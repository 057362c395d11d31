"""
Fiat-Shamir transcript implementation using a BLAKE2b hash chain.

This module implements challenge generation for non-interactive proofs.

The transcript holds a single 32-byte state. Every operation hashes the
previous state together with a one-byte operation tag and length-prefixed
label and payload, so appends are order-sensitive and labels are
domain-separated:

    append:    state = H(state || 0x01 || len(label) || label || len(data) || data)
    squeeze:   out   = H(state || 0x02 || len(label) || label || u32(n) || ctr)
               state = H(state || 0x03 || len(label) || label || out)

Field challenges are decoded by rejection sampling (see ``challenge``).
"""

import hashlib
import struct
from typing import Iterable

from sumcheck.errors import TranscriptDecodeError
from sumcheck.primitives.field import (FF2, FIELD_EXTENSION_DEGREE, GOLDILOCKS_PRIME,
                                       LIMB_BYTES, ff2, ff2_to_bytes)

# Hash output size (bytes)
STATE_SIZE = 32

# Bytes squeezed per field challenge: eight candidate limbs
CHALLENGE_BYTES = 64

_TAG_INIT = b"\x00"
_TAG_APPEND = b"\x01"
_TAG_SQUEEZE = b"\x02"
_TAG_RATCHET = b"\x03"


def _len_prefixed(data: bytes) -> bytes:
    return struct.pack("<Q", len(data)) + data


def decode_challenge(buf: bytes) -> FF2:
    """Map squeezed bytes to an FF2 element by rejection sampling.

    The buffer is read as consecutive 8-byte little-endian words. Words >= p are
    rejected; the first two accepted words are the limbs [a0, a1]. The result is
    exactly uniform over FF2 whenever it exists.

    Raises:
        TranscriptDecodeError: If fewer than two words are accepted
    """
    if len(buf) % LIMB_BYTES != 0:
        raise TranscriptDecodeError(f"challenge buffer length {len(buf)} is not a multiple of {LIMB_BYTES}")
    limbs = []
    for (word,) in struct.iter_unpack("<Q", buf):
        if word < GOLDILOCKS_PRIME:
            limbs.append(word)
            if len(limbs) == FIELD_EXTENSION_DEGREE:
                return ff2(limbs)
    raise TranscriptDecodeError(
        f"only {len(limbs)} of {len(buf) // LIMB_BYTES} squeezed words were canonical field elements"
    )


class Transcript:
    """
    Fiat-Shamir transcript over a BLAKE2b-256 hash chain.

    One instance belongs to one proof run. Prover and verifier construct it
    with the same domain label and perform the same appends in the same order,
    which makes every challenge a pure function of the public history.

    Attributes:
        state: Current 32-byte chaining value
    """

    def __init__(self, domain_label: bytes):
        """
        Initialize transcript.

        Args:
            domain_label: Domain separator identifying the protocol instance
        """
        self.state = self._hash(_TAG_INIT, _len_prefixed(bytes(domain_label)))

    @staticmethod
    def _hash(*parts: bytes) -> bytes:
        h = hashlib.blake2b(digest_size=STATE_SIZE)
        for part in parts:
            h.update(part)
        return h.digest()

    def append(self, label: bytes, data: bytes) -> None:
        """Absorb labeled bytes."""
        self.state = self._hash(self.state, _TAG_APPEND, _len_prefixed(bytes(label)), _len_prefixed(bytes(data)))

    def append_field(self, label: bytes, elem: FF2) -> None:
        """Absorb one FF2 element in canonical encoding."""
        self.append(label, ff2_to_bytes(elem))

    def append_fields(self, label: bytes, elems: Iterable) -> None:
        """Absorb a sequence of FF2 elements as one message."""
        self.append(label, b"".join(ff2_to_bytes(e) for e in elems))

    def challenge_bytes(self, label: bytes, n: int) -> bytes:
        """
        Squeeze n pseudorandom bytes bound to all prior appends and this label.

        Output is produced in counter mode, then the state ratchets forward over
        the output so consecutive challenges differ.
        """
        label_part = _len_prefixed(bytes(label))
        out = bytearray()
        counter = 0
        while len(out) < n:
            out += self._hash(self.state, _TAG_SQUEEZE, label_part, struct.pack("<IQ", n, counter))
            counter += 1
        out = bytes(out[:n])
        self.state = self._hash(self.state, _TAG_RATCHET, label_part, out)
        return out

    def challenge(self, label: bytes) -> FF2:
        """
        Derive an FF2 challenge.

        Squeezes CHALLENGE_BYTES bytes and decodes them with decode_challenge().

        Raises:
            TranscriptDecodeError: If the squeezed bytes hold fewer than two
                canonical limbs (probability below 2^-220)
        """
        return decode_challenge(self.challenge_bytes(label, CHALLENGE_BYTES))

    def fork(self) -> "Transcript":
        """Return an independent copy of the current state."""
        clone = object.__new__(type(self))
        clone.state = self.state
        return clone

    def state_hex(self) -> str:
        return self.state.hex()
