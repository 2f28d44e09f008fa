"""
Tests for the verifier registry
"""

import pytest

from r0verifier.claim import ZERO_DIGEST
from r0verifier.ownable import NotOwner
from r0verifier.router import (
    InvalidProofOfExploit,
    SelectorDeactivated,
    SelectorInvalid,
    SelectorNotFound,
    VerifierRegistry,
)
from r0verifier.testing import MockVerifier, make_fixture
from r0verifier.types import VerificationError
from r0verifier.verifier import Groth16Verifier

OWNER = bytes([1]) * 32
STRANGER = bytes([3]) * 32


@pytest.fixture
def registry():
    return VerifierRegistry(OWNER)


class TestAddVerifier:
    """Test verifier registration"""

    def test_add_verifier(self, registry):
        """Registered verifiers are retrievable by selector"""
        verifier = MockVerifier()
        registry.add_verifier(OWNER, 1, verifier)
        assert registry.verifier_count == 1
        assert registry.get_verifier(1) is verifier

    def test_selectors_are_sequential(self, registry):
        """Selectors must be added in order from 1"""
        registry.add_verifier(OWNER, 1, MockVerifier())
        with pytest.raises(SelectorInvalid):
            registry.add_verifier(OWNER, 3, MockVerifier())
        with pytest.raises(SelectorInvalid):
            registry.add_verifier(OWNER, 1, MockVerifier())
        registry.add_verifier(OWNER, 2, MockVerifier())
        assert registry.verifier_count == 2

    def test_add_requires_owner(self, registry):
        """Only the owner can register verifiers"""
        with pytest.raises(NotOwner):
            registry.add_verifier(STRANGER, 1, MockVerifier())
        assert registry.verifier_count == 0


class TestRouting:
    """Test dispatch by selector"""

    def test_verify_dispatches(self, registry, groth16_fixture):
        """Verification goes to the selected verifier only"""
        first, second = MockVerifier(), MockVerifier()
        registry.add_verifier(OWNER, 1, first)
        registry.add_verifier(OWNER, 2, second)

        registry.verify(2, groth16_fixture.proof, bytes([4]) * 32, bytes([5]) * 32)
        assert first.verify_calls == []
        assert second.verify_calls == [(groth16_fixture.proof, bytes([4]) * 32, bytes([5]) * 32)]

    def test_verify_propagates_rejection(self, registry, groth16_fixture):
        """Rejections from the verifier are raised"""
        registry.add_verifier(OWNER, 1, MockVerifier(accept=False))
        with pytest.raises(VerificationError):
            registry.verify(1, groth16_fixture.proof, bytes(32), bytes(32))

    def test_unknown_selector(self, registry, groth16_fixture):
        """Unknown selectors are reported"""
        with pytest.raises(SelectorNotFound):
            registry.verify(7, groth16_fixture.proof, bytes(32), bytes(32))

    def test_groth16_verifier_through_registry(self, registry, groth16_fixture):
        """A real Groth16 verifier works behind a selector"""
        registry.add_verifier(OWNER, 1, Groth16Verifier(groth16_fixture.configuration))
        registry.verify(
            1, groth16_fixture.proof, groth16_fixture.image_id, groth16_fixture.journal_digest
        )


class TestEmergencyStop:
    """Test deactivating verifiers"""

    def test_stop_by_owner(self, registry, groth16_fixture):
        """The owner can deactivate a verifier"""
        verifier = MockVerifier()
        registry.add_verifier(OWNER, 1, verifier)

        event = registry.emergency_stop(OWNER, 1)
        assert event.selector == 1
        assert event.verifier is verifier
        assert event.triggered_by == OWNER
        assert registry.events == [event]

        with pytest.raises(SelectorDeactivated):
            registry.verify(1, groth16_fixture.proof, bytes(32), bytes(32))

    def test_stop_requires_owner(self, registry):
        """Others cannot use the owner stop"""
        registry.add_verifier(OWNER, 1, MockVerifier())
        with pytest.raises(NotOwner):
            registry.emergency_stop(STRANGER, 1)

    def test_stop_twice(self, registry):
        """A verifier can only be stopped once"""
        registry.add_verifier(OWNER, 1, MockVerifier())
        registry.emergency_stop(OWNER, 1)
        with pytest.raises(SelectorDeactivated):
            registry.emergency_stop(OWNER, 1)

    def test_stop_unknown(self, registry):
        """Stopping an unknown selector fails"""
        with pytest.raises(SelectorNotFound):
            registry.emergency_stop(OWNER, 1)

    def test_selector_not_reused_after_stop(self, registry):
        """Stopped selectors stay taken"""
        registry.add_verifier(OWNER, 1, MockVerifier())
        registry.emergency_stop(OWNER, 1)
        with pytest.raises(SelectorInvalid):
            registry.add_verifier(OWNER, 1, MockVerifier())

    def test_stop_with_proof_of_exploit(self, registry, groth16_fixture):
        """A verifier that accepts the all-zero claim is compromised"""
        verifier = MockVerifier(accept=True)
        registry.add_verifier(OWNER, 1, verifier)

        event = registry.emergency_stop_with_proof(1, groth16_fixture.proof, STRANGER)
        assert verifier.verify_calls == [(groth16_fixture.proof, ZERO_DIGEST, ZERO_DIGEST)]
        assert event.triggered_by == STRANGER
        assert "compromised" in event.reason
        with pytest.raises(SelectorDeactivated):
            registry.get_verifier(1)

    def test_stop_with_invalid_proof(self, registry, groth16_fixture):
        """A rejected proof leaves the verifier active"""
        registry.add_verifier(OWNER, 1, MockVerifier(accept=False))
        with pytest.raises(InvalidProofOfExploit):
            registry.emergency_stop_with_proof(1, groth16_fixture.proof)
        assert registry.get_verifier(1) is not None
        assert registry.events == []

    def test_sound_verifier_cannot_be_stopped(self, registry):
        """A real verifier rejects a proof for the zero claim"""
        fixture = make_fixture(seed=b"exploit")
        registry.add_verifier(OWNER, 1, Groth16Verifier(fixture.configuration))
        with pytest.raises(InvalidProofOfExploit):
            registry.emergency_stop_with_proof(1, fixture.proof)


class TestRegistryOwnership:
    """Test ownership passthroughs"""

    def test_transfer_then_add(self, registry):
        """The new owner takes over administration"""
        new_owner = bytes([2]) * 32
        registry.transfer_ownership(OWNER, new_owner)
        registry.accept_ownership(new_owner)
        with pytest.raises(NotOwner):
            registry.add_verifier(OWNER, 1, MockVerifier())
        registry.add_verifier(new_owner, 1, MockVerifier())

    def test_renounce_blocks_admin(self, registry):
        """Renouncing disables owner operations"""
        registry.add_verifier(OWNER, 1, MockVerifier())
        registry.renounce_ownership(OWNER)
        with pytest.raises(NotOwner):
            registry.emergency_stop(OWNER, 1)

    def test_cancel_transfer(self, registry):
        """Transfers can be cancelled through the registry"""
        registry.transfer_ownership(OWNER, bytes([2]) * 32)
        registry.cancel_transfer(OWNER)
        assert registry.ownership.pending_owner is None
