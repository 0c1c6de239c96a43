"""
Diary Vault Errors.

Every error carries a short machine-readable ``kind`` so callers can
report *what* failed without ever seeing plaintext, passwords or keys.

Security Note:
    Integrity failures share a single message on purpose: a wrong password
    and a corrupted ciphertext must look identical to the caller.
"""

INTEGRITY_MESSAGE = "incorrect password or corrupted data"


class DiaryCryptoError(Exception):
    """Base class for all diary vault errors."""

    kind: str = "error"


class RandomnessFailure(DiaryCryptoError):
    """The OS random source is unavailable."""

    kind = "randomness"


class DerivationFailure(DiaryCryptoError):
    """The key derivation primitive is unavailable or misconfigured."""

    kind = "derivation"


class MalformedInput(DiaryCryptoError, ValueError):
    """Input of the wrong size or encoding, rejected before any crypto."""

    kind = "malformed"


class DecryptionError(DiaryCryptoError):
    """A ciphertext could not be turned back into plaintext."""

    kind = "decryption"

    def __init__(self, message: str = INTEGRITY_MESSAGE):
        super().__init__(message)


class IntegrityFailure(DecryptionError):
    """AEAD tag verification failed (wrong key, corruption or tampering)."""

    kind = "integrity"


class MalformedCiphertext(MalformedInput, DecryptionError):
    """Ciphertext too short or not valid base64."""

    kind = "malformed"

    def __init__(self, message: str = INTEGRITY_MESSAGE):
        DecryptionError.__init__(self, message)


class StructuredFieldParseFailure(DiaryCryptoError, ValueError):
    """A field decrypted correctly but its content has the wrong format."""

    kind = "structured_field_parse"


class InvalidPin(MalformedInput):
    """A PIN that is not 4 to 6 digits."""

    kind = "invalid_pin"


class VaultLocked(DiaryCryptoError):
    """The session was locked or auto-locked; unlock again."""

    kind = "locked"

    def __init__(self, message: str = "diary session is locked"):
        super().__init__(message)
