"""
Salt generation — one random salt per vault.
"""
import os
import logging
from typing import Union

from .config import SALT_SIZE
from .exceptions import RandomnessFailure, MalformedInput
from .transcoder import b64decode

logger = logging.getLogger("navigator.diary")


def generate_salt() -> bytes:
    """Return SALT_SIZE bytes from the OS CSPRNG.

    Raises:
        RandomnessFailure: If the OS random source is unavailable.
    """
    try:
        return os.urandom(SALT_SIZE)
    except (OSError, NotImplementedError) as err:
        logger.error("OS random source unavailable: %s", type(err).__name__)
        raise RandomnessFailure("OS random source unavailable") from err


def check_salt(salt: bytes) -> bytes:
    """Reject salts that are not exactly SALT_SIZE raw bytes."""
    if not isinstance(salt, (bytes, bytearray)) or len(salt) != SALT_SIZE:
        raise MalformedInput(f"salt must be exactly {SALT_SIZE} bytes")
    return bytes(salt)


def coerce_salt(salt: Union[bytes, str]) -> bytes:
    """Accept raw salt bytes or their base64 storage form.

    Raises:
        MalformedInput: If the salt is not valid base64 or not 16 bytes.
    """
    if isinstance(salt, str):
        salt = b64decode(salt)
    return check_salt(salt)
