"""
Password verification — a digest that proves a password is correct
without revealing the encryption key.

The verification hash is SHA-256 over ``UTF-8(password) || base64(salt)``,
which shares nothing with the PBKDF2 path: holding the hash does not help
to recompute the derived key.
"""
import re
import hmac
import hashlib
from typing import Union
from collections.abc import Iterable

from .config import AuthType
from .exceptions import InvalidPin
from .salt import coerce_salt
from .transcoder import b64encode, to_hex

_PIN_PATTERN = re.compile(r"[0-9]{4,6}")
_NON_DIGITS = re.compile(r"[^0-9]")


def hash_password(password: str, salt: Union[bytes, str]) -> str:
    """Return the 64-character hex verification hash for ``password``.

    Raises:
        MalformedInput: If the salt is not 16 bytes (raw or base64).
    """
    salt_text = b64encode(coerce_salt(salt))
    data = password.encode("utf-8") + salt_text.encode("ascii")
    return to_hex(hashlib.sha256(data).digest())


def verify_password(
    password: str, salt: Union[bytes, str], stored_hash: str
) -> bool:
    """Recompute the hash and compare it in constant time."""
    computed = hash_password(password, salt)
    try:
        return hmac.compare_digest(computed, stored_hash.lower())
    except (AttributeError, TypeError):
        # non-str or non-ASCII stored hash
        return False


def normalize_secret(secret: str, auth_type: AuthType = "password") -> str:
    """Strip non-digits from PIN input; passwords are used verbatim."""
    if auth_type == "pin":
        return _NON_DIGITS.sub("", secret)
    return secret


def validate_pin(pin: str) -> str:
    """Ensure a new PIN is 4 to 6 digits.

    Raises:
        InvalidPin: If the PIN does not match.
    """
    if not _PIN_PATTERN.fullmatch(pin):
        raise InvalidPin("PIN must be 4-6 digits")
    return pin


def _join_answers(answers: Iterable[str]) -> str:
    return "|".join(a.lower().strip() for a in answers)


def hash_recovery_answers(answers: Iterable[str], salt: Union[bytes, str]) -> str:
    """Hash recovery answers (case and surrounding whitespace ignored)."""
    return hash_password(_join_answers(answers), salt)


def verify_recovery_answers(
    answers: Iterable[str], salt: Union[bytes, str], stored_hash: str
) -> bool:
    return verify_password(_join_answers(answers), salt, stored_hash)
