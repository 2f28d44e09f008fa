#!/usr/bin/env python3
"""
Verifier registry example

Shows selector routing, two-step ownership transfer and both kinds of
emergency stop.
"""

import logging

from r0verifier import Groth16Verifier, VerifierRegistry
from r0verifier.router import InvalidProofOfExploit, SelectorDeactivated
from r0verifier.testing import MockVerifier, make_fixture

ADMIN = bytes([1]) * 32
NEW_ADMIN = bytes([2]) * 32


def main():
    logging.basicConfig(level=logging.INFO)
    print("🧭 Verifier Registry Example")
    print("=" * 30)

    fixture = make_fixture()
    registry = VerifierRegistry(ADMIN)

    print("\n1. Registering verifiers...")
    registry.add_verifier(ADMIN, 1, Groth16Verifier(fixture.configuration))
    registry.add_verifier(ADMIN, 2, MockVerifier(accept=True))
    print(f"   Verifiers registered: {registry.verifier_count}")

    print("\n2. Routing a proof to selector 1...")
    registry.verify(1, fixture.proof, fixture.image_id, fixture.journal_digest)
    print("   ✅ Proof accepted")

    print("\n3. Nobody can stop a sound verifier with a proof of exploit...")
    try:
        registry.emergency_stop_with_proof(1, fixture.proof)
    except InvalidProofOfExploit:
        print("   ✅ Rejected")

    print("\n4. ...but the accept-everything verifier is stopped by anyone")
    event = registry.emergency_stop_with_proof(2, fixture.proof)
    print(f"   Stopped selector {event.selector}: {event.reason}")
    try:
        registry.get_verifier(2)
    except SelectorDeactivated as e:
        print(f"   {e.code}: {e}")

    print("\n5. Handing over administration...")
    registry.transfer_ownership(ADMIN, NEW_ADMIN)
    registry.accept_ownership(NEW_ADMIN)
    registry.emergency_stop(NEW_ADMIN, 1)
    print(f"   Events recorded: {len(registry.events)}")


if __name__ == "__main__":
    main()
