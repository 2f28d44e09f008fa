"""
Type definitions and exceptions for the RISC Zero Groth16 verifier
"""

from dataclasses import dataclass
from typing import Tuple

G1_LEN = 64
G2_LEN = 128
G1_COMPRESSED_LEN = 32
G2_COMPRESSED_LEN = 64
DIGEST_LEN = 32

Digest = bytes
FieldElement = bytes


class VerifierError(Exception):
    """Base exception for all verifier errors"""

    def __init__(self, message: str, code: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code or type(self).__name__


class DecompressionError(VerifierError):
    """Bytes do not decode to a valid curve point"""
    pass


class InvalidPublicInput(VerifierError):
    """Public input vector is malformed or out of range"""
    pass


class CurveArithmeticError(VerifierError):
    """A point addition or scalar multiplication failed"""
    pass


class PairingError(VerifierError):
    """The pairing primitive rejected its input"""
    pass


class VerificationError(VerifierError):
    """The pairing equation evaluated to false"""
    pass


class ProofFormatError(VerifierError):
    """Interchange JSON could not be converted"""
    pass


class ConfigurationError(VerifierError):
    """Verifier configuration is invalid"""
    pass


@dataclass(frozen=True)
class Proof:
    """
    Groth16 proof elements on BN254

    pi_a is expected to be negated before verification.
    """
    pi_a: bytes
    pi_b: bytes
    pi_c: bytes

    def __post_init__(self):
        for name, expected in (("pi_a", G1_LEN), ("pi_b", G2_LEN), ("pi_c", G1_LEN)):
            value = getattr(self, name)
            if len(value) != expected:
                raise ProofFormatError(f"{name} must be {expected} bytes, got {len(value)}")

    def to_bytes(self) -> bytes:
        return self.pi_a + self.pi_b + self.pi_c


@dataclass(frozen=True)
class VerificationKey:
    """Groth16 verification key in uncompressed wire encoding"""
    nr_pubinputs: int
    alpha_g1: bytes
    beta_g2: bytes
    gamma_g2: bytes
    delta_g2: bytes
    ic: Tuple[bytes, ...]

    def __post_init__(self):
        object.__setattr__(self, "ic", tuple(self.ic))


@dataclass(frozen=True)
class PublicInputs:
    """Fixed-size vector of 32-byte big-endian field elements"""
    inputs: Tuple[FieldElement, ...]

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))
        for value in self.inputs:
            if len(value) != 32:
                raise InvalidPublicInput(f"Public input must be 32 bytes, got {len(value)}")

    def __len__(self) -> int:
        return len(self.inputs)

    def __iter__(self):
        return iter(self.inputs)
