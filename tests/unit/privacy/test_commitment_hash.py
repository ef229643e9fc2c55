"""Tests for commitment hashing and preparation."""

import pytest
from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from intent_router.models.commitment import CommitmentStatus
from intent_router.privacy.commitment import (
    COMMITMENT_TYPEHASH,
    generate_salt,
    hash_commitment,
    prepare_commitment,
)
from tests.helpers import NOW

INTENT_HASH = "0x" + "11" * 32
PLAN_HASH = "0x" + "22" * 32
SALT = "0x" + "33" * 32


class TestHashCommitment:
    def test_typehash(self):
        assert COMMITMENT_TYPEHASH == keccak(
            text="Commitment(bytes32 intentHash,bytes32 planHash,uint256 notBefore,bytes32 salt)"
        )

    def test_matches_abi_encoding(self):
        expected = keccak(
            encode(
                ["bytes32", "bytes32", "bytes32", "uint256", "bytes32"],
                [COMMITMENT_TYPEHASH, b"\x11" * 32, b"\x22" * 32, 1234, b"\x33" * 32],
            )
        )
        assert hash_commitment(INTENT_HASH, PLAN_HASH, 1234, SALT) == "0x" + expected.hex()

    def test_deterministic(self):
        assert hash_commitment(INTENT_HASH, PLAN_HASH, 1, SALT) == hash_commitment(INTENT_HASH, PLAN_HASH, 1, SALT)

    def test_accepts_bytes_and_hex(self):
        assert hash_commitment(b"\x11" * 32, PLAN_HASH, 1, SALT) == hash_commitment(INTENT_HASH, PLAN_HASH, 1, SALT)

    def test_each_input_changes_digest(self):
        base = hash_commitment(INTENT_HASH, PLAN_HASH, 1, SALT)
        assert hash_commitment(PLAN_HASH, PLAN_HASH, 1, SALT) != base
        assert hash_commitment(INTENT_HASH, INTENT_HASH, 1, SALT) != base
        assert hash_commitment(INTENT_HASH, PLAN_HASH, 2, SALT) != base
        assert hash_commitment(INTENT_HASH, PLAN_HASH, 1, "0x" + "44" * 32) != base

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError, match="32 bytes"):
            hash_commitment("0x1234", PLAN_HASH, 1, SALT)


class TestSalt:
    def test_salt_is_32_bytes(self):
        salt = generate_salt()
        assert salt.startswith("0x")
        assert len(bytes.fromhex(salt[2:])) == 32

    def test_salts_do_not_repeat(self):
        assert len({generate_salt() for _ in range(100)}) == 100


class TestPrepareCommitment:
    def test_builds_pending_record(self):
        record = prepare_commitment(INTENT_HASH, PLAN_HASH, min_delay=30, batch_window=60, now=NOW, salt=SALT)

        assert record.status == CommitmentStatus.PENDING
        assert record.not_before == 1_700_000_040
        assert record.salt == SALT
        assert record.commitment == hash_commitment(INTENT_HASH, PLAN_HASH, record.not_before, SALT)

    def test_generates_salt_when_missing(self):
        first = prepare_commitment(INTENT_HASH, PLAN_HASH, min_delay=0, batch_window=0, now=NOW)
        second = prepare_commitment(INTENT_HASH, PLAN_HASH, min_delay=0, batch_window=0, now=NOW)
        assert first.salt != second.salt
        assert first.commitment != second.commitment
