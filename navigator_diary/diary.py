"""
Diary API — one-shot entry encryption for the entry-management layer.

Each call derives the key exactly once and reuses it for every field.
Callers handling many entries should hold a DiarySession instead, so
the slow KDF runs once per unlock rather than once per entry.

Vaults created with non-default KDF parameters must pass
``params=record.kdf_params``; otherwise the derived key will not match
the one a DiarySession derives for the same vault.
"""
from typing import Optional, Union

from .vault.config import KDFParams
from .vault.entry import EncryptedEntry, PlainEntry, encrypt_entry, decrypt_entry
from .vault.kdf import derive_key
from .vault.salt import coerce_salt
from .vault.session import (
    EncryptedLike,
    EntryLike,
    as_encrypted_entry,
    as_plain_entry,
)

SaltLike = Union[bytes, str]


def encrypt_diary_entry(
    entry: EntryLike,
    password: str,
    salt: SaltLike,
    params: Optional[KDFParams] = None,
) -> EncryptedEntry:
    """Encrypt ``entry`` with the key derived from (password, salt)."""
    entry = as_plain_entry(entry)
    key = derive_key(password, coerce_salt(salt), params)
    return encrypt_entry(entry, key)


def decrypt_diary_entry(
    encrypted_entry: EncryptedLike,
    password: str,
    salt: SaltLike,
    params: Optional[KDFParams] = None,
) -> PlainEntry:
    """Decrypt ``encrypted_entry`` with the key derived from (password, salt).

    Raises:
        DecryptionError: Wrong password or corrupted content.
    """
    encrypted_entry = as_encrypted_entry(encrypted_entry)
    key = derive_key(password, coerce_salt(salt), params)
    return decrypt_entry(encrypted_entry, key)
