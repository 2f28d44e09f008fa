"""
Two-step ownership

    Owned(owner) --transfer--> TransferPending(owner, pending)
    TransferPending --accept--> Owned(pending)
    TransferPending --cancel--> Owned(owner)
    Owned / TransferPending --renounce--> Renounced

Renounced is terminal: no privileged operation can succeed afterwards.
Identities are 32-byte public keys; the all-zero key is never a valid owner.
"""

import logging
from enum import Enum
from typing import Optional

from .types import VerifierError

logger = logging.getLogger(__name__)

Pubkey = bytes
ZERO_KEY = bytes(32)


class OwnableError(VerifierError):
    """Base exception for ownership errors"""
    pass


class NotOwner(OwnableError):
    """A privileged operation was attempted by someone other than the owner"""
    pass


class CannotTransferToSelf(OwnableError):
    pass


class NoPendingTransfer(OwnableError):
    pass


class NotPendingOwner(OwnableError):
    """Only the account with a valid pending claim can claim ownership"""
    pass


class NotOwnerOrPendingOwner(OwnableError):
    pass


class InvalidAddress(OwnableError):
    """Ownership cannot be given to the zero address"""
    pass


class OwnershipState(Enum):
    OWNED = "owned"
    TRANSFER_PENDING = "transfer_pending"
    RENOUNCED = "renounced"


class Ownership:
    """Owner and optional pending owner of a resource"""

    def __init__(self, owner: Pubkey):
        if owner == ZERO_KEY:
            raise InvalidAddress("Cannot set the zero address as owner")
        self._owner: Optional[Pubkey] = owner
        self._pending_owner: Optional[Pubkey] = None

    @property
    def owner(self) -> Optional[Pubkey]:
        return self._owner

    @property
    def pending_owner(self) -> Optional[Pubkey]:
        return self._pending_owner

    @property
    def state(self) -> OwnershipState:
        if self._owner is None:
            return OwnershipState.RENOUNCED
        if self._pending_owner is not None:
            return OwnershipState.TRANSFER_PENDING
        return OwnershipState.OWNED

    def assert_owner(self, authority: Pubkey) -> None:
        if self._owner is None or authority != self._owner:
            raise NotOwner("Not the current owner")

    def _assert_pending_owner(self, authority: Pubkey) -> None:
        if self._pending_owner is None:
            raise NoPendingTransfer("No pending ownership transfer")
        if authority != self._pending_owner:
            raise NotPendingOwner("Only the account with a valid pending claim can claim ownership")

    def transfer_ownership(self, new_owner: Pubkey, authority: Pubkey) -> None:
        """Start a transfer; the new owner must accept it"""
        self.assert_owner(authority)
        if new_owner == authority:
            raise CannotTransferToSelf("Cannot transfer ownership to yourself")
        if new_owner == ZERO_KEY:
            raise InvalidAddress("Cannot transfer ownership to the zero address")
        self._pending_owner = new_owner
        logger.info("Ownership transfer started to %s", new_owner.hex())

    def accept_ownership(self, authority: Pubkey) -> None:
        self._assert_pending_owner(authority)
        self._owner = authority
        self._pending_owner = None
        logger.info("Ownership accepted by %s", authority.hex())

    def cancel_transfer(self, authority: Pubkey) -> None:
        """Cancel a pending transfer; allowed for the owner or the pending owner"""
        if self._pending_owner is None:
            raise NoPendingTransfer("No pending ownership transfer")
        if authority not in (self._owner, self._pending_owner):
            raise NotOwnerOrPendingOwner(
                "Action can only be submitted by a pending owner or actual owner"
            )
        self._pending_owner = None
        logger.info("Ownership transfer cancelled by %s", authority.hex())

    def renounce_ownership(self, authority: Pubkey) -> None:
        """Permanently remove owner privileges"""
        self.assert_owner(authority)
        self._owner = None
        self._pending_owner = None
        logger.warning("Ownership renounced by %s", authority.hex())
