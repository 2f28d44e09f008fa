"""
Tests for receipt claim digests
"""

import hashlib

import pytest

from r0verifier.claim import (
    EXIT_HALTED,
    EXIT_PAUSED,
    OUTPUT_TAG,
    RECEIPT_CLAIM_TAG,
    SYSTEM_STATE_TAG,
    SYSTEM_STATE_ZERO_DIGEST,
    ZERO_DIGEST,
    Output,
    ReceiptClaim,
    hash_claim,
    hash_output,
)
from r0verifier.types import InvalidPublicInput, VerifierError


class TestTags:
    """Test tag digest constants"""

    def test_tag_values(self):
        """Tags are SHA-256 of the risc0 struct names"""
        assert OUTPUT_TAG.hex() == "77eafeb366a78b47747de0d7bb176284085ff5564887009a5be63da32d3559d4"
        assert SYSTEM_STATE_TAG.hex() == "206115a847207c0892e0c0547225df31d02a96eeb395670c31112dff90b421d6"
        assert RECEIPT_CLAIM_TAG.hex() == "cb1fefcd1f2d9a64975cbbbf6e161e2914434b0cbb9960b84df5d717e86b48af"


class TestOutputDigest:
    """Test the Output digest"""

    def test_hash_output_layout(self):
        """SHA256(tag || journal || assumptions || 0x0200)"""
        journal = bytes([2]) * 32
        expected = hashlib.sha256(OUTPUT_TAG + journal + ZERO_DIGEST + b"\x02\x00").digest()
        assert hash_output(journal) == expected
        assert Output(journal).digest() == expected

    def test_assumptions_change_digest(self):
        """Assumptions are committed to by the output digest"""
        journal = bytes([2]) * 32
        assert hash_output(journal, bytes([1]) * 32) != hash_output(journal)


class TestClaimDigest:
    """Test the ReceiptClaim digest"""

    def test_hash_claim_layout(self):
        """SHA256(tag || input || pre || post || output || sys || user || 0x0400)"""
        image_id = bytes([1]) * 32
        journal = bytes([2]) * 32
        expected = hashlib.sha256(
            RECEIPT_CLAIM_TAG
            + ZERO_DIGEST
            + image_id
            + SYSTEM_STATE_ZERO_DIGEST
            + hash_output(journal)
            + bytes(4)
            + bytes(4)
            + b"\x04\x00"
        ).digest()
        assert hash_claim(image_id, journal) == expected

    def test_digest_computation(self):
        """Claim digests are 32 non-zero bytes"""
        digest = hash_claim(bytes([1]) * 32, bytes([2]) * 32)
        assert digest != bytes(32)
        assert len(digest) == 32

    def test_stable(self):
        """Same inputs give the same digest"""
        image_id = hashlib.sha256(b"image").digest()
        journal = hashlib.sha256(b"journal").digest()
        assert hash_claim(image_id, journal) == hash_claim(image_id, journal)

    def test_journal_changes_digest(self):
        """Different journals give different claims"""
        image_id = hashlib.sha256(b"image").digest()
        first = hash_claim(image_id, hashlib.sha256(b"journal-1").digest())
        second = hash_claim(image_id, hashlib.sha256(b"journal-2").digest())
        assert first != second

    def test_image_id_changes_digest(self):
        """Different images give different claims"""
        journal = hashlib.sha256(b"journal").digest()
        assert hash_claim(bytes(32), journal) != hash_claim(bytes([1]) * 32, journal)

    def test_ok_claim_fields(self):
        """ok() builds a halted single-segment claim"""
        image_id = bytes([7]) * 32
        journal = bytes([8]) * 32
        claim = ReceiptClaim.ok(image_id, journal)
        assert claim.input_digest == ZERO_DIGEST
        assert claim.pre_state_digest == image_id
        assert claim.post_state_digest == SYSTEM_STATE_ZERO_DIGEST
        assert claim.output_digest == hash_output(journal)
        assert claim.system_exit_code == EXIT_HALTED
        assert claim.user_exit_code == 0

    def test_exit_codes_are_part_of_the_digest(self):
        """Exit codes are encoded as code << 24 in a big-endian word"""
        base = ReceiptClaim.ok(bytes([7]) * 32, bytes([8]) * 32)
        paused = ReceiptClaim(
            input_digest=base.input_digest,
            pre_state_digest=base.pre_state_digest,
            post_state_digest=base.post_state_digest,
            output_digest=base.output_digest,
            system_exit_code=EXIT_PAUSED,
            user_exit_code=3,
        )
        expected = hashlib.sha256(
            RECEIPT_CLAIM_TAG
            + base.input_digest
            + base.pre_state_digest
            + base.post_state_digest
            + base.output_digest
            + b"\x01\x00\x00\x00"
            + b"\x03\x00\x00\x00"
            + b"\x04\x00"
        ).digest()
        assert paused.digest() == expected
        assert paused.digest() != base.digest()

    def test_exit_code_out_of_range(self):
        """Exit codes must fit in one byte"""
        claim = ReceiptClaim(ZERO_DIGEST, ZERO_DIGEST, ZERO_DIGEST, ZERO_DIGEST, 256, 0)
        with pytest.raises(InvalidPublicInput):
            claim.digest()

    def test_wrong_digest_length(self):
        """Short digests are rejected as invalid input"""
        with pytest.raises(InvalidPublicInput):
            hash_claim(bytes(31), bytes(32))

    def test_malformed_journal_is_a_verifier_error(self):
        """Malformed caller input stays inside the verifier error hierarchy"""
        with pytest.raises(VerifierError):
            hash_claim(bytes(32), b"\x01" * 31)
        with pytest.raises(VerifierError):
            Output(bytes(33)).digest()
