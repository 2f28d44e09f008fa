"""
Groth16 public input derivation
"""

import logging
from typing import Tuple

from .field import is_valid_scalar, to_field_element
from .types import DIGEST_LEN, Digest, FieldElement, InvalidPublicInput, PublicInputs

logger = logging.getLogger(__name__)

NR_PUBLIC_INPUTS = 5


def split_digest(digest: Digest) -> Tuple[FieldElement, FieldElement]:
    """
    Split a digest into two 128-bit field elements.

    The digest bytes are reversed and the low half is returned first.
    """
    if len(digest) != DIGEST_LEN:
        raise InvalidPublicInput(f"Digest must be {DIGEST_LEN} bytes, got {len(digest)}")
    big_endian = digest[::-1]
    high, low = big_endian[:16], big_endian[16:]
    return to_field_element(low), to_field_element(high)


def public_inputs(
    claim_digest: Digest,
    allowed_control_root: Digest,
    identity_control_id: Digest,
) -> PublicInputs:
    """
    Build the five public inputs [a0, a1, c0, c1, id]:

    - (a0, a1): allowed control root split into two field elements
    - (c0, c1): claim digest split into two field elements
    - id: identity control id, byte-reversed

    Out-of-range elements are rejected, never reduced.
    """
    if claim_digest == bytes(DIGEST_LEN):
        raise InvalidPublicInput("Claim digest must not be zero")
    if len(identity_control_id) != DIGEST_LEN:
        raise InvalidPublicInput(
            f"Identity control id must be {DIGEST_LEN} bytes, got {len(identity_control_id)}"
        )

    a0, a1 = split_digest(allowed_control_root)
    c0, c1 = split_digest(claim_digest)
    control_id = to_field_element(identity_control_id[::-1])

    inputs = (a0, a1, c0, c1, control_id)
    for index, element in enumerate(inputs):
        if not is_valid_scalar(element):
            logger.warning("Public input %d is not below the field modulus", index)
            raise InvalidPublicInput(f"Public input {index} is not a valid field element")

    return PublicInputs(inputs)
