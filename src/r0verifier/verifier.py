"""
Groth16 verification over BN254

The verification equation is checked as a single multi-pairing:

    e(-A, B) * e(L, gamma) * e(C, delta) * e(alpha, beta) == 1

where L = IC[0] + sum(input[i] * IC[i + 1]). The proof's A element must be
negated by the caller (see ``codec.negate_g1``).
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from . import bn254
from .claim import hash_claim
from .codec import decode_claim_request, decode_compressed_proof
from .config import VerifierConfiguration
from .field import is_valid_scalar
from .inputs import public_inputs
from .types import (
    CurveArithmeticError,
    Digest,
    InvalidPublicInput,
    PairingError,
    Proof,
    PublicInputs,
    VerificationError,
    VerificationKey,
    VerifierError,
)

logger = logging.getLogger(__name__)


class PairingVerifier:
    """Checks a proof against a verification key and prepared public inputs"""

    def __init__(self, vk: VerificationKey):
        self.vk = vk

    def prepare(self, public: PublicInputs) -> bytes:
        """Accumulate IC[0] + sum(input[i] * IC[i + 1]) in G1"""
        if len(self.vk.ic) != len(public) + 1:
            raise InvalidPublicInput(
                f"Verification key has {len(self.vk.ic)} IC points for {len(public)} inputs"
            )
        for index, scalar in enumerate(public):
            if not is_valid_scalar(scalar):
                raise InvalidPublicInput(f"Public input {index} is not a valid field element")

        prepared = self.vk.ic[0]
        try:
            for point, scalar in zip(self.vk.ic[1:], public):
                product = bn254.g1_mul(point + scalar)
                prepared = bn254.g1_add(product + prepared)
        except bn254.Bn254Error as e:
            raise CurveArithmeticError(f"Arithmetic error: {e}") from e
        return prepared

    def check(self, proof: Proof, prepared: bytes) -> None:
        """Evaluate the pairing equation, raising unless it holds"""
        pairing_input = b"".join([
            proof.pi_a,
            proof.pi_b,
            prepared,
            self.vk.gamma_g2,
            proof.pi_c,
            self.vk.delta_g2,
            self.vk.alpha_g1,
            self.vk.beta_g2,
        ])
        try:
            result = bn254.pairing(pairing_input)
        except bn254.Bn254Error as e:
            raise PairingError(f"Pairing error: {e}") from e

        # The primitive answers with a 32-byte big-endian 1 or 0, not a GT element
        if result != bn254.PAIRING_SUCCESS:
            raise VerificationError("Verification error")

    def verify(self, proof: Proof, public: PublicInputs) -> None:
        prepared = self.prepare(public)
        logger.debug("Prepared public inputs: %s", prepared.hex())
        self.check(proof, prepared)


class ProofVerifier(ABC):
    """Interface for verifier implementations reachable through a registry"""

    @abstractmethod
    def verify(self, proof: Proof, image_id: Digest, journal_digest: Digest) -> None:
        """Raise a VerifierError unless the proof attests to the claim"""
        pass


class Groth16Verifier(ProofVerifier):
    """Verifies RISC Zero zkVM Groth16 receipts"""

    def __init__(self, configuration: VerifierConfiguration):
        self.configuration = configuration
        self._pairing = PairingVerifier(configuration.verification_key)

    def verify(self, proof: Proof, image_id: Digest, journal_digest: Digest) -> None:
        claim_digest = hash_claim(image_id, journal_digest)
        logger.debug("Claim digest for image %s: %s", image_id.hex(), claim_digest.hex())
        self.verify_claim(proof, claim_digest)

    def verify_claim(self, proof: Proof, claim_digest: Digest) -> None:
        public = public_inputs(
            claim_digest,
            self.configuration.allowed_control_root,
            self.configuration.identity_control_id,
        )
        try:
            self._pairing.verify(proof, public)
        except VerifierError as e:
            logger.info("Proof rejected for claim %s: %s", claim_digest.hex(), e.code)
            raise

    def verify_compressed(self, data: bytes, image_id: Digest, journal_digest: Digest) -> None:
        """Verify a 128-byte compressed proof"""
        self.verify(decode_compressed_proof(data), image_id, journal_digest)

    def verify_request(self, data: bytes) -> None:
        """Verify a 160-byte claim_digest || compressed proof request"""
        claim_digest, proof = decode_claim_request(data)
        self.verify_claim(proof, claim_digest)

    def is_valid(
        self,
        proof: Proof,
        image_id: Digest,
        journal_digest: Digest,
    ) -> bool:
        try:
            self.verify(proof, image_id, journal_digest)
        except VerifierError:
            return False
        return True


def verify(
    proof: Proof,
    image_id: Digest,
    journal_digest: Digest,
    configuration: Optional[VerifierConfiguration] = None,
    vk: Optional[VerificationKey] = None,
) -> None:
    """
    Verify with a full configuration or a bare verification key.

    With neither, the RISC Zero verification key and control constants are used.
    """
    if configuration is None:
        if vk is None:
            configuration = VerifierConfiguration()
        else:
            configuration = VerifierConfiguration(verification_key=vk)
    Groth16Verifier(configuration).verify(proof, image_id, journal_digest)
