"""
Testing utilities and mock implementations for the verifier
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from py_ecc.optimized_bn128 import G1, G2, curve_order, multiply

from .bn254 import g1_to_bytes, g2_to_bytes
from .claim import hash_claim
from .codec import negate_g1
from .config import ALLOWED_CONTROL_ROOT, BN254_IDENTITY_CONTROL_ID, VerifierConfiguration
from .inputs import NR_PUBLIC_INPUTS, public_inputs
from .types import Digest, Proof, PublicInputs, VerificationError, VerificationKey
from .verifier import ProofVerifier

logger = logging.getLogger(__name__)


class MockVerifier(ProofVerifier):
    """Mock verifier that records calls and accepts or rejects on demand"""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.verify_calls: List[Tuple[Proof, Digest, Digest]] = []

    def verify(self, proof: Proof, image_id: Digest, journal_digest: Digest) -> None:
        self.verify_calls.append((proof, image_id, journal_digest))
        if not self.accept:
            raise VerificationError("Mock verifier rejected the proof")


@dataclass(frozen=True)
class Groth16Fixture:
    """A verification key with a matching proof for one claim"""
    configuration: VerifierConfiguration
    proof: Proof
    seal: bytes
    image_id: Digest
    journal_digest: Digest
    claim_digest: Digest
    public_inputs: PublicInputs

    @property
    def verification_key(self) -> VerificationKey:
        return self.configuration.verification_key


def _scalar(seed: bytes, label: str) -> int:
    digest = hashlib.sha256(seed + b"/" + label.encode("utf-8")).digest()
    return int.from_bytes(digest, "big") % (curve_order - 1) + 1


def make_fixture(
    seed: bytes = b"r0verifier",
    image_id: Optional[Digest] = None,
    journal_digest: Optional[Digest] = None,
    allowed_control_root: Digest = ALLOWED_CONTROL_ROOT,
    identity_control_id: Digest = BN254_IDENTITY_CONTROL_ID,
) -> Groth16Fixture:
    """
    Build a deterministic Groth16 instance from known trapdoor scalars.

    The verification key and proof are chosen so that

        -A*B + alpha*beta + L*gamma + C*delta == 0   (mod r)

    which makes the pairing equation hold for the claim derived from
    ``image_id`` and ``journal_digest``. Not a circuit: only useful for
    exercising the verifier.
    """
    if image_id is None:
        image_id = hashlib.sha256(seed + b"/image").digest()
    if journal_digest is None:
        journal_digest = hashlib.sha256(seed + b"/journal").digest()

    claim_digest = hash_claim(image_id, journal_digest)
    public = public_inputs(claim_digest, allowed_control_root, identity_control_id)

    alpha, beta, gamma, delta = (_scalar(seed, name) for name in ("alpha", "beta", "gamma", "delta"))
    ic = [_scalar(seed, f"ic{i}") for i in range(NR_PUBLIC_INPUTS + 1)]
    a, b = _scalar(seed, "a"), _scalar(seed, "b")

    inputs = [int.from_bytes(value, "big") for value in public]
    prepared = (ic[0] + sum(u * x for u, x in zip(ic[1:], inputs))) % curve_order
    c = (a * b - alpha * beta - prepared * gamma) * pow(delta, -1, curve_order) % curve_order

    vk = VerificationKey(
        nr_pubinputs=NR_PUBLIC_INPUTS,
        alpha_g1=g1_to_bytes(multiply(G1, alpha)),
        beta_g2=g2_to_bytes(multiply(G2, beta)),
        gamma_g2=g2_to_bytes(multiply(G2, gamma)),
        delta_g2=g2_to_bytes(multiply(G2, delta)),
        ic=tuple(g1_to_bytes(multiply(G1, u)) for u in ic),
    )

    pi_a = g1_to_bytes(multiply(G1, a))
    pi_b = g2_to_bytes(multiply(G2, b))
    pi_c = g1_to_bytes(multiply(G1, c))
    logger.debug("Built Groth16 fixture for claim %s", claim_digest.hex())

    return Groth16Fixture(
        configuration=VerifierConfiguration(
            verification_key=vk,
            allowed_control_root=allowed_control_root,
            identity_control_id=identity_control_id,
        ),
        proof=Proof(pi_a=negate_g1(pi_a), pi_b=pi_b, pi_c=pi_c),
        seal=pi_a + pi_b + pi_c,
        image_id=image_id,
        journal_digest=journal_digest,
        claim_digest=claim_digest,
        public_inputs=public,
    )
