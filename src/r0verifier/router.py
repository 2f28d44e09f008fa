"""
Selector-based verifier registry with emergency stop
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .claim import ZERO_DIGEST
from .ownable import Ownership, Pubkey
from .types import Digest, Proof, VerifierError
from .verifier import ProofVerifier

logger = logging.getLogger(__name__)

_MAX_SELECTOR = 0xFFFFFFFF


class RouterError(VerifierError):
    """Base exception for registry errors"""
    pass


class SelectorInvalid(RouterError):
    pass


class SelectorNotFound(RouterError):
    pass


class SelectorDeactivated(RouterError):
    pass


class InvalidProofOfExploit(RouterError):
    pass


class Overflow(RouterError):
    pass


@dataclass
class VerifierEntry:
    selector: int
    verifier: ProofVerifier
    active: bool = True


@dataclass(frozen=True)
class EmergencyStopEvent:
    selector: int
    verifier: ProofVerifier
    triggered_by: Optional[Pubkey]
    reason: str


class VerifierRegistry:
    """Maps numeric selectors to verifier implementations"""

    def __init__(self, owner: Pubkey):
        self.ownership = Ownership(owner)
        self.verifier_count = 0
        self.events: List[EmergencyStopEvent] = []
        self._entries: Dict[int, VerifierEntry] = {}

    def add_verifier(self, authority: Pubkey, selector: int, verifier: ProofVerifier) -> None:
        """Register ``verifier`` under the next selector (owner only)"""
        self.ownership.assert_owner(authority)
        if self.verifier_count >= _MAX_SELECTOR:
            raise Overflow("Arithmetic overflow")
        if selector != self.verifier_count + 1:
            raise SelectorInvalid("Selector is not valid for this call.")

        self._entries[selector] = VerifierEntry(selector=selector, verifier=verifier)
        self.verifier_count += 1
        logger.info("Registered verifier %r under selector %d", verifier, selector)

    def get_verifier(self, selector: int) -> ProofVerifier:
        entry = self._entries.get(selector)
        if entry is None:
            raise SelectorNotFound(f"Selector not found: {selector}")
        if not entry.active:
            raise SelectorDeactivated(f"Selector has been deactivated: {selector}")
        return entry.verifier

    def verify(
        self,
        selector: int,
        proof: Proof,
        image_id: Digest,
        journal_digest: Digest,
    ) -> None:
        verifier = self.get_verifier(selector)
        logger.debug("Routing verification to selector %d", selector)
        verifier.verify(proof, image_id, journal_digest)

    def emergency_stop(self, authority: Pubkey, selector: int) -> EmergencyStopEvent:
        """Deactivate a verifier (owner only)"""
        self.ownership.assert_owner(authority)
        return self._stop(selector, authority, "Owner has revoked the verifier.")

    def emergency_stop_with_proof(
        self,
        selector: int,
        proof: Proof,
        triggered_by: Optional[Pubkey] = None,
    ) -> EmergencyStopEvent:
        """
        Deactivate a verifier by demonstrating that it accepts a proof for the
        all-zero image id and journal digest. Anyone may call this.
        """
        verifier = self.get_verifier(selector)
        try:
            verifier.verify(proof, ZERO_DIGEST, ZERO_DIGEST)
        except VerifierError as e:
            raise InvalidProofOfExploit("Invalid proof of exploit") from e
        return self._stop(
            selector, triggered_by, "Invalid Proof was demonstrated, verifier compromised."
        )

    def _stop(self, selector: int, triggered_by: Optional[Pubkey], reason: str) -> EmergencyStopEvent:
        entry = self._entries.get(selector)
        if entry is None:
            raise SelectorNotFound(f"Selector not found: {selector}")
        if not entry.active:
            raise SelectorDeactivated(f"Selector has been deactivated: {selector}")
        entry.active = False

        event = EmergencyStopEvent(
            selector=selector,
            verifier=entry.verifier,
            triggered_by=triggered_by,
            reason=reason,
        )
        self.events.append(event)
        logger.warning("Emergency stop on selector %d: %s", selector, reason)
        return event

    # Ownership passthroughs

    def transfer_ownership(self, authority: Pubkey, new_owner: Pubkey) -> None:
        self.ownership.transfer_ownership(new_owner, authority)

    def accept_ownership(self, authority: Pubkey) -> None:
        self.ownership.accept_ownership(authority)

    def cancel_transfer(self, authority: Pubkey) -> None:
        self.ownership.cancel_transfer(authority)

    def renounce_ownership(self, authority: Pubkey) -> None:
        self.ownership.renounce_ownership(authority)
