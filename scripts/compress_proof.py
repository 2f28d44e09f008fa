#!/usr/bin/env python3
"""
Convert a snarkjs proof.json into the 128-byte compressed proof

The A element is negated before compression, so the output can be passed
straight to Groth16Verifier.verify_compressed. With a verifier configuration
and the claim, the converted proof is also verified.

Usage:
    compress_proof.py proof.json out.bin [verifier.json image_id journal_digest]
"""

import sys
from pathlib import Path

# Add src to path
current_dir = Path(__file__).parent
src_dir = current_dir.parent / 'src'
sys.path.insert(0, str(src_dir))

from r0verifier import Groth16Verifier, Proof, VerifierConfiguration, VerifierError, negate_g1
from r0verifier.snarkjs import load_proof, read_json, write_compressed_proof


def main():
    if len(sys.argv) not in (3, 6):
        print(__doc__)
        sys.exit(2)

    proof = load_proof(read_json(sys.argv[1]))
    proof = Proof(pi_a=negate_g1(proof.pi_a), pi_b=proof.pi_b, pi_c=proof.pi_c)
    write_compressed_proof(sys.argv[2], proof)
    print(f"✅ Wrote compressed proof to {sys.argv[2]}")

    if len(sys.argv) == 6:
        config = VerifierConfiguration.load(sys.argv[3])
        image_id = bytes.fromhex(sys.argv[4])
        journal_digest = bytes.fromhex(sys.argv[5])
        try:
            Groth16Verifier(config).verify(proof, image_id, journal_digest)
        except VerifierError as e:
            print(f"❌ Verification failed: {e.code}: {e}")
            sys.exit(1)
        print("✅ Proof verified")


if __name__ == '__main__':
    main()
