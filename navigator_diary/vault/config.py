"""
Diary Vault Configuration — fixed crypto constants and validated settings.

The sizes below are part of the storage format and must never change:
    salt 16 bytes, IV 12 bytes, GCM tag 16 bytes, key 32 bytes,
    PBKDF2-HMAC-SHA256 with 100,000 iterations.

Optional environment overrides (read only by ``DiaryConfig.from_env``):
    DIARY_AUTH_TYPE = password | pin
    DIARY_AUTO_LOCK_MINUTES = <integer>
    DIARY_KDF_ITERATIONS = <integer, >= 100000>

Security Note:
    Never log key material. Only log parameters and field names.
"""
import os
import logging
from typing import Literal

import orjson
from pydantic import BaseModel, Field, field_validator

from .exceptions import MalformedInput

logger = logging.getLogger("navigator.diary")

SALT_SIZE = 16
NONCE_SIZE = 12  # 96-bit nonce
TAG_SIZE = 16
KEY_LENGTH = 32  # AES-256
PBKDF2_ITERATIONS = 100_000
KDF_ALGORITHM = "pbkdf2-sha256"

AuthType = Literal["password", "pin"]


class KDFParams(BaseModel):
    """Key derivation parameters, persisted in clear next to the salt."""

    algorithm: str = Field(default=KDF_ALGORITHM)
    iterations: int = Field(default=PBKDF2_ITERATIONS, ge=PBKDF2_ITERATIONS)
    length: int = Field(default=KEY_LENGTH)

    model_config = {"frozen": True}

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """Only PBKDF2-HMAC-SHA256 is supported."""
        if v != KDF_ALGORITHM:
            raise ValueError(f"Unsupported KDF algorithm: {v}")
        return v

    @field_validator("length")
    @classmethod
    def validate_length(cls, v: int) -> int:
        """Derived keys must match the AES-256 key size."""
        if v != KEY_LENGTH:
            raise ValueError(
                f"KDF output length must be {KEY_LENGTH} bytes, got {v}"
            )
        return v

    def to_tag(self) -> str:
        """Render the parameters as a compact JSON tag for storage."""
        return orjson.dumps(self.model_dump()).decode("utf-8")

    @classmethod
    def from_tag(cls, tag: str) -> "KDFParams":
        """Parse a tag produced by :meth:`to_tag`.

        Raises:
            MalformedInput: If the tag is not valid JSON or fails validation.
        """
        try:
            return cls.model_validate(orjson.loads(tag))
        except (orjson.JSONDecodeError, ValueError) as err:
            raise MalformedInput("invalid KDF parameters tag") from err


DEFAULT_KDF = KDFParams()


class DiaryConfig(BaseModel):
    """Validated diary vault configuration."""

    kdf: KDFParams = Field(default=DEFAULT_KDF)
    auth_type: AuthType = Field(default="password")
    auto_lock_minutes: int = Field(default=30, ge=1, le=1440)

    @property
    def auto_lock_seconds(self) -> int:
        return self.auto_lock_minutes * 60

    @classmethod
    def from_env(cls) -> "DiaryConfig":
        """Create DiaryConfig from DIARY_* environment variables.

        Returns:
            Populated DiaryConfig instance.
        """
        iterations = int(
            os.environ.get("DIARY_KDF_ITERATIONS", PBKDF2_ITERATIONS)
        )
        config = cls(
            kdf=KDFParams(iterations=iterations),
            auth_type=os.environ.get("DIARY_AUTH_TYPE", "password"),
            auto_lock_minutes=int(
                os.environ.get("DIARY_AUTO_LOCK_MINUTES", 30)
            ),
        )
        logger.debug(
            "Loaded diary config from environment: auth_type=%s, "
            "kdf_iterations=%d, auto_lock_minutes=%d",
            config.auth_type, config.kdf.iterations, config.auto_lock_minutes,
        )
        return config
