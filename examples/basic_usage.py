#!/usr/bin/env python3
"""
Basic usage example for the RISC Zero Groth16 verifier

This example demonstrates how to:
1. Build a verifier from a configuration
2. Verify an uncompressed proof against an image id and journal digest
3. Compress a proof and verify the compressed form
4. Handle rejected proofs
"""

import logging

from r0verifier import Groth16Verifier, VerifierError, proof_from_seal
from r0verifier.codec import encode_compressed_proof
from r0verifier.testing import make_fixture


def main():
    logging.basicConfig(level=logging.INFO)
    print("🔐 RISC Zero Groth16 Verifier - Basic Usage Example")
    print("=" * 50)

    # A synthetic verification key and matching proof; a real deployment would
    # use VerifierConfiguration.load("verifier.json") instead.
    fixture = make_fixture()

    # Example 1: Initialize verifier
    print("\n1. Initializing verifier...")
    verifier = Groth16Verifier(fixture.configuration)
    print(f"   Control root: {verifier.configuration.allowed_control_root.hex()}")
    print(f"   Identity control id: {verifier.configuration.identity_control_id.hex()}")

    # Example 2: Verify a proof taken from a prover seal
    print("\n2. Verifying proof from seal...")
    proof = proof_from_seal(fixture.seal)
    try:
        verifier.verify(proof, fixture.image_id, fixture.journal_digest)
        print("   ✅ Proof accepted")
    except VerifierError as e:
        print(f"   ❌ Proof rejected: {e.code}: {e}")

    # Example 3: Compressed proof
    print("\n3. Verifying compressed proof...")
    compressed = encode_compressed_proof(proof)
    print(f"   Compressed size: {len(compressed)} bytes (from {len(proof.to_bytes())})")
    verifier.verify_compressed(compressed, fixture.image_id, fixture.journal_digest)
    print("   ✅ Compressed proof accepted")

    # Example 4: A different journal produces a different claim
    print("\n4. Verifying against the wrong journal...")
    wrong_journal = bytes(32)
    if verifier.is_valid(proof, fixture.image_id, wrong_journal):
        print("   ❌ Unexpectedly accepted")
    else:
        print("   ✅ Rejected as expected")


if __name__ == "__main__":
    main()
