"""
Receipt claim digests

Recomputes the zkVM ReceiptClaim digest that the prover commits to. Every
structure is hashed as a tagged struct:

    SHA256(SHA256(tag) || down digests || data words || len(down) << 8)
"""

import hashlib
from dataclasses import dataclass

from .types import DIGEST_LEN, Digest, InvalidPublicInput

ZERO_DIGEST = bytes(DIGEST_LEN)


def tag_digest(tag: str) -> Digest:
    return hashlib.sha256(tag.encode("utf-8")).digest()


OUTPUT_TAG = tag_digest("risc0.Output")
RECEIPT_CLAIM_TAG = tag_digest("risc0.ReceiptClaim")
SYSTEM_STATE_TAG = tag_digest("risc0.SystemState")

# SHA256('risc0.SystemState(pc=0, merkle_root=0)')
SYSTEM_STATE_ZERO_DIGEST = bytes.fromhex(
    "a3acc27117418996340b84e5a90f3ef4c49d22c79e44aad822ec9c313e1eb8e2"
)

# System exit codes
EXIT_HALTED = 0
EXIT_PAUSED = 1
EXIT_SYSTEM_SPLIT = 2


def _digest(value: bytes, name: str) -> bytes:
    if len(value) != DIGEST_LEN:
        raise InvalidPublicInput(f"{name} must be {DIGEST_LEN} bytes, got {len(value)}")
    return bytes(value)


def _exit_code_word(code: int) -> bytes:
    if not 0 <= code <= 0xFF:
        raise InvalidPublicInput(f"Exit code out of range: {code}")
    return (code << 24).to_bytes(4, "big")


def _down_len(count: int) -> bytes:
    return (count << 8).to_bytes(2, "big")


@dataclass(frozen=True)
class Output:
    """Journal and assumptions committed by an execution"""
    journal_digest: Digest
    assumptions_digest: Digest = ZERO_DIGEST

    def digest(self) -> Digest:
        return hashlib.sha256(
            OUTPUT_TAG
            + _digest(self.journal_digest, "journal_digest")
            + _digest(self.assumptions_digest, "assumptions_digest")
            + _down_len(2)
        ).digest()


@dataclass(frozen=True)
class ReceiptClaim:
    """
    Public claim about a zkVM execution

    All fields are explicit; use ``ReceiptClaim.ok`` for the common case of a
    single-segment execution that halted successfully.
    """
    input_digest: Digest
    pre_state_digest: Digest
    post_state_digest: Digest
    output_digest: Digest
    system_exit_code: int
    user_exit_code: int

    @classmethod
    def ok(cls, image_id: Digest, journal_digest: Digest) -> "ReceiptClaim":
        return cls(
            input_digest=ZERO_DIGEST,
            pre_state_digest=_digest(image_id, "image_id"),
            post_state_digest=SYSTEM_STATE_ZERO_DIGEST,
            output_digest=Output(journal_digest).digest(),
            system_exit_code=EXIT_HALTED,
            user_exit_code=0,
        )

    def digest(self) -> Digest:
        return hashlib.sha256(
            RECEIPT_CLAIM_TAG
            + _digest(self.input_digest, "input_digest")
            + _digest(self.pre_state_digest, "pre_state_digest")
            + _digest(self.post_state_digest, "post_state_digest")
            + _digest(self.output_digest, "output_digest")
            + _exit_code_word(self.system_exit_code)
            + _exit_code_word(self.user_exit_code)
            + _down_len(4)
        ).digest()


def hash_output(journal_digest: Digest, assumptions_digest: Digest = ZERO_DIGEST) -> Digest:
    return Output(journal_digest, assumptions_digest).digest()


def hash_claim(image_id: Digest, journal_digest: Digest) -> Digest:
    """Claim digest of a successful single-segment execution of ``image_id``"""
    return ReceiptClaim.ok(image_id, journal_digest).digest()
