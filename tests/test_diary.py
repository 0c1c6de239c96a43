"""
End-to-end tests for the one-shot diary API.
"""
import base64

import pytest

from navigator_diary import (
    DecryptionError,
    EncryptedEntry,
    IntegrityFailure,
    MalformedInput,
    PlainEntry,
    decrypt_diary_entry,
    encrypt_diary_entry,
    generate_salt,
    hash_password,
    verify_password,
)
from navigator_diary.vault import kdf as kdf_module
from navigator_diary.vault.config import DiaryConfig, KDFParams
from navigator_diary.vault.record import create_vault
from navigator_diary.vault.session import DiarySession

from .helpers import PASSWORD, WRONG_PASSWORD, TEST_SALT


class TestDiaryScenario:
    """The reference unlock scenario."""

    def test_roundtrip(self, full_entry):
        encrypted = encrypt_diary_entry(full_entry, PASSWORD, TEST_SALT)
        decrypted = decrypt_diary_entry(encrypted, PASSWORD, TEST_SALT)
        assert decrypted == PlainEntry(**full_entry)
        assert decrypted.model_dump(exclude_none=True) == full_entry

    def test_wrong_password_never_leaks_content(self, full_entry):
        encrypted = encrypt_diary_entry(full_entry, PASSWORD, TEST_SALT)
        with pytest.raises(IntegrityFailure) as err:
            decrypt_diary_entry(encrypted, WRONG_PASSWORD, TEST_SALT)
        assert isinstance(err.value, DecryptionError)
        message = str(err.value)
        assert message == "incorrect password or corrupted data"
        for fragment in ("Today", "was good", "Day 1", "gratitude", "happy"):
            assert fragment not in message

    def test_storage_row_roundtrip(self, full_entry):
        """Test rows read back from text storage decrypt directly."""
        row = encrypt_diary_entry(full_entry, PASSWORD, TEST_SALT).to_record()
        decrypted = decrypt_diary_entry(row, PASSWORD, TEST_SALT)
        assert decrypted.content == "Today was good."

    def test_api_mapping_roundtrip(self, full_entry):
        payload = encrypt_diary_entry(full_entry, PASSWORD, TEST_SALT).to_api()
        assert set(payload) == {
            "encryptedContent", "encryptedTitle", "encryptedTags", "encryptedMood"
        }
        decrypted = decrypt_diary_entry(payload, PASSWORD, TEST_SALT)
        assert decrypted.tags == ["gratitude", "family"]

    def test_base64_salt_accepted(self, full_entry):
        salt_text = base64.b64encode(TEST_SALT).decode("ascii")
        encrypted = encrypt_diary_entry(full_entry, PASSWORD, salt_text)
        assert decrypt_diary_entry(encrypted, PASSWORD, TEST_SALT).mood == "happy"

    def test_empty_tags_omitted(self):
        encrypted = encrypt_diary_entry(
            {"content": "Today was good.", "tags": []}, PASSWORD, TEST_SALT
        )
        assert isinstance(encrypted, EncryptedEntry)
        assert encrypted.encrypted_tags is None
        assert "encryptedTags" not in encrypted.to_api()

    def test_bad_salt(self, full_entry):
        with pytest.raises(MalformedInput):
            encrypt_diary_entry(full_entry, PASSWORD, b"short")

    def test_key_derived_once_per_call(self, full_entry, monkeypatch):
        """Test one KDF run covers every field of the entry."""
        calls = []
        original = kdf_module.PBKDF2HMAC

        def counting(**kwargs):
            calls.append(kwargs["iterations"])
            return original(**kwargs)

        monkeypatch.setattr(kdf_module, "PBKDF2HMAC", counting)
        encrypted = encrypt_diary_entry(full_entry, PASSWORD, TEST_SALT)
        decrypt_diary_entry(encrypted, PASSWORD, TEST_SALT)
        assert calls == [100_000, 100_000]


class TestVaultSetup:
    """Tests for the salt and password-hash API."""

    def test_generate_salt(self):
        assert len(generate_salt()) == 16

    def test_hash_and_verify(self):
        salt = generate_salt()
        stored = hash_password(PASSWORD, salt)
        assert len(stored) == 64
        assert verify_password(PASSWORD, salt, stored)
        assert not verify_password(WRONG_PASSWORD, salt, stored)


class TestVaultKdfParams:
    """Tests for vaults created with a non-default work factor."""

    @pytest.fixture(scope="class")
    def record(self):
        config = DiaryConfig(kdf=KDFParams(iterations=150_000))
        return create_vault(PASSWORD, config=config)

    def test_one_shot_entry_opens_in_session(self, record, full_entry):
        row = encrypt_diary_entry(
            full_entry, PASSWORD, record.salt, params=record.kdf_params
        ).to_record()
        with DiarySession.open(PASSWORD, record) as session:
            assert session.decrypt_entry(row).content == "Today was good."

    def test_session_entry_opens_one_shot(self, record, full_entry):
        with DiarySession.open(PASSWORD, record) as session:
            row = session.encrypt_entry(full_entry).to_record()
        decrypted = decrypt_diary_entry(
            row, PASSWORD, record.salt, params=record.kdf_params
        )
        assert decrypted.tags == ["gratitude", "family"]

    def test_default_params_do_not_open_vault(self, record, full_entry):
        """Test the recorded work factor is required to read the vault."""
        row = encrypt_diary_entry(
            full_entry, PASSWORD, record.salt, params=record.kdf_params
        )
        with pytest.raises(IntegrityFailure):
            decrypt_diary_entry(row, PASSWORD, record.salt)
