"""Navigator Diary.

Client-side encryption for private diary entries.
"""
from .version import __version__
from .diary import encrypt_diary_entry, decrypt_diary_entry
from .vault import (
    DiarySession,
    VaultRecord,
    create_vault,
    DiaryConfig,
    PlainEntry,
    EncryptedEntry,
    generate_salt,
    hash_password,
    verify_password,
    DecryptionError,
    IntegrityFailure,
    MalformedInput,
)

__all__ = [
    "__version__",
    "generate_salt",
    "hash_password",
    "verify_password",
    "encrypt_diary_entry",
    "decrypt_diary_entry",
    "DiarySession",
    "VaultRecord",
    "create_vault",
    "DiaryConfig",
    "PlainEntry",
    "EncryptedEntry",
    "DecryptionError",
    "IntegrityFailure",
    "MalformedInput",
]
