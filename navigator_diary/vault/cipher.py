"""
AEAD Cipher — AES-256-GCM over opaque byte strings.

Format: [nonce 12B][encrypted_payload][GCM tag 16B]

Security Note:
    Never log plaintext or ciphertext values.
    Nonces are random 96-bit values drawn per call; collision probability
    is negligible for the number of fields a diary will ever hold.
"""
import os
import logging

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .config import KEY_LENGTH, NONCE_SIZE, TAG_SIZE
from .exceptions import (
    IntegrityFailure,
    MalformedCiphertext,
    MalformedInput,
    RandomnessFailure,
)
from .transcoder import b64encode, b64decode

logger = logging.getLogger("navigator.diary")

MIN_BLOB_SIZE = NONCE_SIZE + TAG_SIZE


def check_key(key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_LENGTH:
        raise MalformedInput(f"key must be exactly {KEY_LENGTH} bytes")
    return bytes(key)


def _new_nonce() -> bytes:
    try:
        return os.urandom(NONCE_SIZE)
    except (OSError, NotImplementedError) as err:
        raise RandomnessFailure("OS random source unavailable") from err


def encrypt(plaintext: bytes, key: bytes) -> bytes:
    """Encrypt ``plaintext`` under a fresh random nonce.

    Args:
        plaintext: Data to encrypt.
        key: 32-byte AES key.

    Returns:
        nonce + ciphertext + tag.
    """
    cipher = AESGCM(check_key(key))
    nonce = _new_nonce()
    return nonce + cipher.encrypt(nonce, plaintext, None)


def decrypt(blob: bytes, key: bytes) -> bytes:
    """Verify and decrypt a blob produced by :func:`encrypt`.

    Raises:
        MalformedCiphertext: If the blob cannot hold a nonce and a tag.
        IntegrityFailure: If tag verification fails for any reason.
    """
    if len(blob) < MIN_BLOB_SIZE:
        raise MalformedCiphertext()
    cipher = AESGCM(check_key(key))
    try:
        return cipher.decrypt(blob[:NONCE_SIZE], blob[NONCE_SIZE:], None)
    except InvalidTag as err:
        raise IntegrityFailure() from err


def encrypt_text(text: str, key: bytes) -> str:
    """Encrypt a string and return base64 text for storage."""
    return b64encode(encrypt(text.encode("utf-8"), key))


def decrypt_text(token: str, key: bytes) -> str:
    """Decrypt base64 text produced by :func:`encrypt_text`."""
    try:
        blob = b64decode(token)
    except MalformedInput as err:
        raise MalformedCiphertext() from err
    plaintext = decrypt(blob, key)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as err:
        # authenticated, so this is a producer bug rather than tampering
        raise MalformedCiphertext() from err
