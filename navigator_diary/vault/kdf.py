"""
Key derivation — PBKDF2-HMAC-SHA256 from (password, salt) to a 32-byte key.

Derivation is deliberately slow. Derive once per unlock and reuse the key
for every field and entry of the session.

Security Note:
    Never log the password or the derived key.
"""
import time
import logging
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .config import KDFParams, DEFAULT_KDF
from .exceptions import DerivationFailure
from .salt import check_salt

logger = logging.getLogger("navigator.diary")


def derive_key(
    password: str,
    salt: bytes,
    params: Optional[KDFParams] = None,
) -> bytes:
    """Derive a 32-byte encryption key using PBKDF2-HMAC-SHA256.

    Empty passwords are accepted; password policy belongs to the caller.

    Args:
        password: User password (or normalised PIN).
        salt: 16-byte vault salt.
        params: KDF parameters; defaults to the fixed vault parameters.

    Returns:
        32-byte derived key.

    Raises:
        MalformedInput: If the salt is not 16 bytes.
        DerivationFailure: If the PBKDF2 primitive is unavailable.
    """
    params = params or DEFAULT_KDF
    salt = check_salt(salt)
    started = time.perf_counter()
    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=params.length,
            salt=salt,
            iterations=params.iterations,
        )
        key = kdf.derive(password.encode("utf-8"))
    except (UnsupportedAlgorithm, ValueError, TypeError) as err:
        logger.error("Key derivation failed: %s", type(err).__name__)
        raise DerivationFailure("key derivation unavailable") from err
    logger.debug(
        "Derived key with %s (%d iterations) in %.1f ms",
        params.algorithm,
        params.iterations,
        (time.perf_counter() - started) * 1000,
    )
    return key
