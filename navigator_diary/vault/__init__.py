"""Diary Vault — client-side encryption of private diary entries.

Security Note (Threat Model):
    Plaintext and the derived key exist only in process memory while a
    DiarySession is unlocked. The storage layer only ever sees salts,
    verification hashes and base64 ciphertexts. A forgotten password
    makes the vault permanently unrecoverable.
"""

from .cipher import encrypt, decrypt, encrypt_text, decrypt_text
from .config import DiaryConfig, KDFParams, DEFAULT_KDF
from .entry import (
    PlainEntry,
    EncryptedEntry,
    encrypt_entry,
    decrypt_entry,
    calculate_word_count,
)
from .exceptions import (
    DiaryCryptoError,
    RandomnessFailure,
    DerivationFailure,
    MalformedInput,
    MalformedCiphertext,
    DecryptionError,
    IntegrityFailure,
    StructuredFieldParseFailure,
    InvalidPin,
    VaultLocked,
)
from .kdf import derive_key
from .password import (
    hash_password,
    verify_password,
    normalize_secret,
    hash_recovery_answers,
    verify_recovery_answers,
)
from .record import VaultRecord, create_vault
from .salt import generate_salt
from .session import DiarySession

__all__ = [
    "DiarySession",
    "VaultRecord",
    "create_vault",
    "DiaryConfig",
    "KDFParams",
    "DEFAULT_KDF",
    "PlainEntry",
    "EncryptedEntry",
    "encrypt_entry",
    "decrypt_entry",
    "calculate_word_count",
    "encrypt",
    "decrypt",
    "encrypt_text",
    "decrypt_text",
    "derive_key",
    "generate_salt",
    "hash_password",
    "verify_password",
    "normalize_secret",
    "hash_recovery_answers",
    "verify_recovery_answers",
    "DiaryCryptoError",
    "RandomnessFailure",
    "DerivationFailure",
    "MalformedInput",
    "MalformedCiphertext",
    "DecryptionError",
    "IntegrityFailure",
    "StructuredFieldParseFailure",
    "InvalidPin",
    "VaultLocked",
]
