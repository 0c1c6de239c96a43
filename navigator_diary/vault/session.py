"""
DiarySession — the derived key of one unlocked vault.

Provides the unlocked-diary API:
- ``unlock(password, record)`` — verify the password and derive the key
  off the event loop (async factory)
- ``open(password, record)`` — blocking twin of ``unlock``
- ``encrypt_entry`` / ``decrypt_entry`` and their batch variants
- ``lock()`` — drop the key; the session also auto-locks after inactivity

Security Note:
    The key lives only inside this object, never in module state.
    Never log plaintext, passwords or the key.
"""
import time
import asyncio
import logging
from typing import Any, Optional, Union
from collections.abc import Callable, Iterable, Mapping

from .cipher import check_key
from .config import AuthType, DiaryConfig
from .entry import EncryptedEntry, PlainEntry, encrypt_entry, decrypt_entry
from .exceptions import DecryptionError, IntegrityFailure, VaultLocked
from .kdf import derive_key
from .password import normalize_secret, verify_password
from .record import VaultRecord

logger = logging.getLogger("navigator.diary")

EntryLike = Union[PlainEntry, Mapping[str, Any]]
EncryptedLike = Union[EncryptedEntry, Mapping[str, Any]]


def as_plain_entry(entry: EntryLike) -> PlainEntry:
    if isinstance(entry, PlainEntry):
        return entry
    return PlainEntry.model_validate(entry)


def as_encrypted_entry(entry: EncryptedLike) -> EncryptedEntry:
    if isinstance(entry, EncryptedEntry):
        return entry
    return EncryptedEntry.model_validate(entry)


class DiarySession:
    """Unlocked diary bound to one derived key.

    The key is immutable once set, so one session may serve concurrent
    encrypt/decrypt calls from several threads.
    """

    def __init__(
        self,
        key: bytes,
        auth_type: AuthType = "password",
        auto_lock_minutes: int = 30,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._key: Optional[bytes] = check_key(key)
        self._auth_type = auth_type
        self._ttl = auto_lock_minutes * 60
        self._clock = clock
        self._deadline = clock() + self._ttl

    def __repr__(self) -> str:
        state = "locked" if self.is_locked else "unlocked"
        return f"<DiarySession [{state}, auth_type:{self._auth_type}]>"

    # ------------------------------------------------------------------
    # Lock state
    # ------------------------------------------------------------------

    @property
    def auth_type(self) -> AuthType:
        return self._auth_type

    @property
    def is_locked(self) -> bool:
        if self._key is not None and self._clock() >= self._deadline:
            logger.info("Diary session auto-locked after inactivity")
            self._key = None
        return self._key is None

    @property
    def expires_in(self) -> float:
        """Seconds left before auto-lock (0 when locked)."""
        if self.is_locked:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    def touch(self) -> None:
        """Push the auto-lock deadline back by the full inactivity window."""
        if self.is_locked:
            raise VaultLocked()
        self._deadline = self._clock() + self._ttl

    def lock(self) -> None:
        """Discard the key. Every later use raises VaultLocked."""
        if self._key is not None:
            logger.info("Diary session locked")
        self._key = None

    def _active_key(self) -> bytes:
        key = self._key
        if key is None or self._clock() >= self._deadline:
            if key is not None:
                logger.info("Diary session auto-locked after inactivity")
            self._key = None
            raise VaultLocked()
        self._deadline = self._clock() + self._ttl
        return key

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def encrypt_entry(self, entry: EntryLike) -> EncryptedEntry:
        """Encrypt one entry (model or mapping) with the session key."""
        return encrypt_entry(as_plain_entry(entry), self._active_key())

    def decrypt_entry(self, encrypted: EncryptedLike) -> PlainEntry:
        """Decrypt one entry (model, storage row or API mapping).

        Raises:
            DecryptionError: If the content cannot be recovered.
        """
        return decrypt_entry(as_encrypted_entry(encrypted), self._active_key())

    def encrypt_entries(self, entries: Iterable[EntryLike]) -> list[EncryptedEntry]:
        return [self.encrypt_entry(entry) for entry in entries]

    def decrypt_entries(
        self,
        encrypted_entries: Iterable[EncryptedLike],
        skip_failed: bool = True,
    ) -> list[PlainEntry]:
        """Decrypt a batch of entries.

        Args:
            encrypted_entries: Entries to decrypt, in any order.
            skip_failed: Drop entries whose content cannot be decrypted
                instead of raising.

        Returns:
            Decrypted entries in input order, minus skipped ones.
        """
        result = []
        for index, encrypted in enumerate(encrypted_entries):
            try:
                result.append(self.decrypt_entry(encrypted))
            except DecryptionError as err:
                if not skip_failed:
                    raise
                logger.error(
                    "Failed to decrypt diary entry #%d (%s)", index, err.kind
                )
        return result

    # ------------------------------------------------------------------
    # Context managers
    # ------------------------------------------------------------------

    def __enter__(self) -> "DiarySession":
        return self

    def __exit__(self, *exc) -> None:
        self.lock()

    async def __aenter__(self) -> "DiarySession":
        return self

    async def __aexit__(self, *exc) -> None:
        self.lock()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_key(
        cls, key: bytes, config: Optional[DiaryConfig] = None
    ) -> "DiarySession":
        """Wrap an already derived key."""
        config = config or DiaryConfig()
        return cls(
            key,
            auth_type=config.auth_type,
            auto_lock_minutes=config.auto_lock_minutes,
        )

    @classmethod
    def open(
        cls,
        password: str,
        record: VaultRecord,
        config: Optional[DiaryConfig] = None,
    ) -> "DiarySession":
        """Verify ``password`` against ``record`` and derive the key.

        Blocks for the duration of the KDF; use :meth:`unlock` from
        async code.

        Raises:
            IntegrityFailure: If the password does not match the record.
        """
        config = config or DiaryConfig()
        secret = normalize_secret(password, record.auth_type)
        salt = record.salt_bytes
        if not verify_password(secret, salt, record.password_hash):
            logger.info("Diary unlock rejected")
            raise IntegrityFailure()
        key = derive_key(secret, salt, record.kdf_params)
        logger.info("Diary session unlocked (auth_type=%s)", record.auth_type)
        return cls(
            key,
            auth_type=record.auth_type,
            auto_lock_minutes=config.auto_lock_minutes,
        )

    @classmethod
    async def unlock(
        cls,
        password: str,
        record: VaultRecord,
        config: Optional[DiaryConfig] = None,
    ) -> "DiarySession":
        """Async factory: runs :meth:`open` in a worker thread.

        This is the primary constructor used by the unlock flow.
        """
        return await asyncio.to_thread(cls.open, password, record, config)
