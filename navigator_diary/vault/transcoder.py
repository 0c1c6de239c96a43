"""
Transcoder — binary/text conversion for values stored in text columns.

Salts and ciphertexts are base64, password hashes are lowercase hex.
"""
import base64
import binascii

from .exceptions import MalformedInput


def b64encode(data: bytes) -> str:
    """Encode raw bytes as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def b64decode(text: str) -> bytes:
    """Decode standard base64 text into raw bytes.

    Raises:
        MalformedInput: If ``text`` is not valid base64.
    """
    try:
        if isinstance(text, str):
            text = text.encode("ascii")
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as err:
        raise MalformedInput("value is not valid base64") from err


def to_hex(data: bytes) -> str:
    return data.hex()

