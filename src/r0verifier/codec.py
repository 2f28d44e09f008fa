"""
Point encoding for the Groth16 verifier

Converts between the big-endian wire encoding of BN254 points and the
compressed form carried in verification requests:

    G1 compressed: 32 bytes, x big-endian, flags in the top bits of byte 0
    G2 compressed: 64 bytes, x_c1 || x_c0 big-endian, flags in byte 0

The curve library serializes in little-endian word order, so every
conversion goes through ``convert_endianness``.
"""

import logging
from typing import Tuple

from . import bn254
from .field import BASE_FIELD_MODULUS_Q, subtract
from .types import (
    DIGEST_LEN,
    G1_COMPRESSED_LEN,
    G1_LEN,
    G2_COMPRESSED_LEN,
    G2_LEN,
    DecompressionError,
    Digest,
    Proof,
    ProofFormatError,
)

logger = logging.getLogger(__name__)

COMPRESSED_PROOF_LEN = 2 * G1_COMPRESSED_LEN + G2_COMPRESSED_LEN
CLAIM_REQUEST_LEN = DIGEST_LEN + COMPRESSED_PROOF_LEN
SEAL_LEN = 2 * G1_LEN + G2_LEN


def compress_g1(point: bytes) -> bytes:
    """Compress a 64-byte G1 point to 32 bytes"""
    if len(point) != G1_LEN:
        raise ProofFormatError(f"G1 point must be {G1_LEN} bytes, got {len(point)}")
    if point == bytes(G1_LEN):
        return bytes(G1_COMPRESSED_LEN)
    try:
        native = bn254.g1_compress_native(bn254.g1_from_bytes(point))
    except bn254.Bn254Error as e:
        raise ProofFormatError(f"G1 compression error: {e}") from e
    return bn254.convert_endianness(native, G1_COMPRESSED_LEN)


def compress_g2(point: bytes) -> bytes:
    """Compress a 128-byte G2 point to 64 bytes"""
    if len(point) != G2_LEN:
        raise ProofFormatError(f"G2 point must be {G2_LEN} bytes, got {len(point)}")
    if point == bytes(G2_LEN):
        return bytes(G2_COMPRESSED_LEN)
    try:
        native = bn254.g2_compress_native(bn254.g2_from_bytes(point))
    except bn254.Bn254Error as e:
        raise ProofFormatError(f"G2 compression error: {e}") from e
    return bn254.convert_endianness(native, G2_COMPRESSED_LEN)


def decompress_g1(data: bytes) -> bytes:
    """Decompress a 32-byte G1 point, failing closed on invalid input"""
    if len(data) != G1_COMPRESSED_LEN:
        raise DecompressionError(
            f"Compressed G1 point must be {G1_COMPRESSED_LEN} bytes, got {len(data)}"
        )
    if data == bytes(G1_COMPRESSED_LEN):
        return bytes(G1_LEN)
    try:
        point = bn254.g1_decompress_native(
            bn254.convert_endianness(data, G1_COMPRESSED_LEN)
        )
    except bn254.Bn254Error as e:
        raise DecompressionError(f"G1 decompression error: {e}") from e
    return bn254.g1_to_bytes(point)


def decompress_g2(data: bytes) -> bytes:
    """Decompress a 64-byte G2 point, failing closed on invalid input"""
    if len(data) != G2_COMPRESSED_LEN:
        raise DecompressionError(
            f"Compressed G2 point must be {G2_COMPRESSED_LEN} bytes, got {len(data)}"
        )
    if data == bytes(G2_COMPRESSED_LEN):
        return bytes(G2_LEN)
    try:
        point = bn254.g2_decompress_native(
            bn254.convert_endianness(data, G2_COMPRESSED_LEN)
        )
    except bn254.Bn254Error as e:
        raise DecompressionError(f"G2 decompression error: {e}") from e
    return bn254.g2_to_bytes(point)


def negate_g1(point: bytes) -> bytes:
    """Negate a G1 point by replacing y with q - y"""
    if len(point) != G1_LEN:
        raise ProofFormatError(f"G1 point must be {G1_LEN} bytes, got {len(point)}")
    if point == bytes(G1_LEN):
        return point
    return point[:32] + subtract(BASE_FIELD_MODULUS_Q, point[32:])


def encode_compressed_proof(proof: Proof) -> bytes:
    return compress_g1(proof.pi_a) + compress_g2(proof.pi_b) + compress_g1(proof.pi_c)


def decode_compressed_proof(data: bytes) -> Proof:
    """
    Decode the 128-byte compressed triple A || B || C.

    The compressed A is expected to already be negated.
    """
    if len(data) != COMPRESSED_PROOF_LEN:
        raise DecompressionError(
            f"Compressed proof must be {COMPRESSED_PROOF_LEN} bytes, got {len(data)}"
        )
    return Proof(
        pi_a=decompress_g1(data[:32]),
        pi_b=decompress_g2(data[32:96]),
        pi_c=decompress_g1(data[96:]),
    )


def decode_claim_request(data: bytes) -> Tuple[Digest, Proof]:
    """Decode claim_digest || compressed proof (160 bytes)"""
    if len(data) != CLAIM_REQUEST_LEN:
        raise DecompressionError(
            f"Claim request must be {CLAIM_REQUEST_LEN} bytes, got {len(data)}"
        )
    return data[:DIGEST_LEN], decode_compressed_proof(data[DIGEST_LEN:])


def proof_from_seal(seal: bytes) -> Proof:
    """Build a verifier-ready proof from a prover seal, negating A"""
    if len(seal) < SEAL_LEN:
        raise ProofFormatError(f"Seal must be at least {SEAL_LEN} bytes, got {len(seal)}")
    logger.debug("Extracting proof from %d-byte seal", len(seal))
    return Proof(
        pi_a=negate_g1(seal[:64]),
        pi_b=seal[64:192],
        pi_c=seal[192:256],
    )
