"""
RISC Zero Groth16 Verifier

Verification of RISC Zero zkVM Groth16 receipts over the BN254 curve.
"""

from .claim import ReceiptClaim, hash_claim
from .codec import (
    compress_g1,
    compress_g2,
    decompress_g1,
    decompress_g2,
    negate_g1,
    proof_from_seal,
)
from .config import VERIFICATION_KEY, VerifierConfiguration
from .inputs import public_inputs
from .router import VerifierRegistry
from .types import (
    ConfigurationError,
    CurveArithmeticError,
    DecompressionError,
    InvalidPublicInput,
    PairingError,
    Proof,
    ProofFormatError,
    PublicInputs,
    VerificationError,
    VerificationKey,
    VerifierError,
)
from .verifier import Groth16Verifier, PairingVerifier, ProofVerifier, verify

__version__ = "0.1.0"

__all__ = [
    "Groth16Verifier",
    "PairingVerifier",
    "ProofVerifier",
    "VerifierRegistry",
    "VerifierConfiguration",
    "VERIFICATION_KEY",
    "ReceiptClaim",
    "Proof",
    "PublicInputs",
    "VerificationKey",
    "hash_claim",
    "public_inputs",
    "verify",
    "compress_g1",
    "compress_g2",
    "decompress_g1",
    "decompress_g2",
    "negate_g1",
    "proof_from_seal",
    "VerifierError",
    "DecompressionError",
    "InvalidPublicInput",
    "CurveArithmeticError",
    "PairingError",
    "VerificationError",
    "ProofFormatError",
    "ConfigurationError",
]
