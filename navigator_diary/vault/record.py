"""
Vault Record — the cleartext values stored once per vault.

A vault is the set of entries sharing one password and one salt.
The record holds nothing secret: salt, verification hash, auth type and
the KDF parameters needed to re-derive the key later.
"""
import logging
from typing import Optional
from collections.abc import Sequence

from pydantic import BaseModel, Field, field_validator

from .config import AuthType, DiaryConfig, KDFParams, DEFAULT_KDF
from .password import (
    hash_password,
    hash_recovery_answers,
    normalize_secret,
    validate_pin,
)
from .salt import check_salt, generate_salt
from .transcoder import b64decode, b64encode

logger = logging.getLogger("navigator.diary")


class VaultRecord(BaseModel):
    """Per-vault values persisted by the storage layer."""

    salt: str
    password_hash: str = Field(min_length=64, max_length=64)
    auth_type: AuthType = Field(default="password")
    kdf: str = Field(default_factory=DEFAULT_KDF.to_tag)
    recovery_answers_hash: Optional[str] = None

    @field_validator("salt")
    @classmethod
    def validate_salt(cls, v: str) -> str:
        """Salt must be base64 of exactly 16 bytes."""
        check_salt(b64decode(v))
        return v

    @field_validator("kdf")
    @classmethod
    def validate_kdf(cls, v: str) -> str:
        KDFParams.from_tag(v)
        return v

    @property
    def salt_bytes(self) -> bytes:
        return b64decode(self.salt)

    @property
    def kdf_params(self) -> KDFParams:
        return KDFParams.from_tag(self.kdf)


def create_vault(
    password: str,
    auth_type: Optional[AuthType] = None,
    recovery_answers: Optional[Sequence[str]] = None,
    config: Optional[DiaryConfig] = None,
) -> VaultRecord:
    """Set up a new vault for ``password``.

    Args:
        password: New password, or PIN when ``auth_type`` is "pin".
        auth_type: Overrides ``config.auth_type``.
        recovery_answers: Optional answers to hash for later verification.
        config: Vault settings; defaults to ``DiaryConfig()``.

    Returns:
        VaultRecord to persist.

    Raises:
        InvalidPin: If a PIN vault is given anything but 4-6 digits.
        RandomnessFailure: If no salt can be generated.
    """
    config = config or DiaryConfig()
    auth_type = auth_type or config.auth_type
    if auth_type == "pin":
        validate_pin(password)
    salt = generate_salt()
    record = VaultRecord(
        salt=b64encode(salt),
        password_hash=hash_password(normalize_secret(password, auth_type), salt),
        auth_type=auth_type,
        kdf=config.kdf.to_tag(),
        recovery_answers_hash=(
            hash_recovery_answers(recovery_answers, salt)
            if recovery_answers else None
        ),
    )
    logger.info(
        "Created diary vault (auth_type=%s, kdf=%s)", auth_type, record.kdf
    )
    return record
