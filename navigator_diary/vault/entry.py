"""
Entry Codec — maps a diary entry onto independent AEAD operations per field.

Each present field (content, title, tags, mood) is encrypted on its own with
a fresh nonce. Content is mandatory; a failure on an optional field only
costs that field.

Security Note:
    Only field names and error kinds are logged, never their values.
"""
import logging
from typing import Optional

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .cipher import encrypt_text, decrypt_text
from .exceptions import DecryptionError, StructuredFieldParseFailure

logger = logging.getLogger("navigator.diary")

OPTIONAL_TEXT_FIELDS = ("title", "mood")


class PlainEntry(BaseModel):
    """A decrypted diary entry.

    ``None`` means the field is absent; an empty string is a present,
    empty value and is encrypted like any other.
    """

    content: str
    title: Optional[str] = None
    tags: Optional[list[str]] = None
    mood: Optional[str] = None
    # optional fields that could not be recovered, name -> error kind
    field_errors: dict[str, str] = Field(default_factory=dict, exclude=True)

    @property
    def failed_fields(self) -> frozenset[str]:
        return frozenset(self.field_errors)

    @property
    def word_count(self) -> int:
        return calculate_word_count(self.content)


class EncryptedEntry(BaseModel):
    """Base64 ciphertexts of one entry, ready for text storage.

    Accepts both storage keys (``encrypted_content``) and API keys
    (``encryptedContent``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    encrypted_content: str
    encrypted_title: Optional[str] = None
    encrypted_tags: Optional[str] = None
    encrypted_mood: Optional[str] = None

    @field_validator("encrypted_title", "encrypted_tags", "encrypted_mood")
    @classmethod
    def empty_as_absent(cls, v: Optional[str]) -> Optional[str]:
        """Storage rows may hold '' where a column was never written."""
        return v or None

    def to_record(self) -> dict:
        """Storage form: snake_case keys, absent fields as None."""
        return self.model_dump()

    def to_api(self) -> dict:
        """API form: camelCase keys, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


def calculate_word_count(text: str) -> int:
    """Approximate word count, used for cleartext statistics."""
    if not text:
        return 0
    return len(text.split())


def _dump_tags(tags: list[str]) -> str:
    return orjson.dumps(tags).decode("utf-8")


def _load_tags(data: str) -> list[str]:
    try:
        tags = orjson.loads(data)
    except orjson.JSONDecodeError as err:
        raise StructuredFieldParseFailure("tags are not valid JSON") from err
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise StructuredFieldParseFailure("tags must be a JSON array of strings")
    return tags


def encrypt_entry(entry: PlainEntry, key: bytes) -> EncryptedEntry:
    """Encrypt every present field of ``entry`` independently.

    An empty or missing tag list produces no ``encrypted_tags`` at all.
    """
    fields = {"encrypted_content": encrypt_text(entry.content, key)}
    if entry.title is not None:
        fields["encrypted_title"] = encrypt_text(entry.title, key)
    if entry.tags:
        fields["encrypted_tags"] = encrypt_text(_dump_tags(entry.tags), key)
    if entry.mood is not None:
        fields["encrypted_mood"] = encrypt_text(entry.mood, key)
    return EncryptedEntry(**fields)


def _decrypt_optional(
    name: str, token: Optional[str], key: bytes, errors: dict[str, str]
) -> Optional[str]:
    if token is None:
        return None
    try:
        return decrypt_text(token, key)
    except DecryptionError as err:
        logger.warning("Diary field '%s' could not be decrypted (%s)", name, err.kind)
        errors[name] = err.kind
        return None


def decrypt_entry(encrypted: EncryptedEntry, key: bytes) -> PlainEntry:
    """Decrypt each present field of ``encrypted``.

    Raises:
        IntegrityFailure: If the content fails verification.
        MalformedCiphertext: If the content blob is unusable.
    """
    content = decrypt_text(encrypted.encrypted_content, key)
    errors: dict[str, str] = {}
    values = {
        name: _decrypt_optional(
            name, getattr(encrypted, f"encrypted_{name}"), key, errors
        )
        for name in OPTIONAL_TEXT_FIELDS
    }

    tags = None
    tags_json = _decrypt_optional("tags", encrypted.encrypted_tags, key, errors)
    if tags_json is not None:
        try:
            tags = _load_tags(tags_json)
        except StructuredFieldParseFailure as err:
            logger.warning("Diary field 'tags' has an unexpected format (%s)", err.kind)
            errors["tags"] = err.kind
            tags = []

    return PlainEntry(content=content, tags=tags, field_errors=errors, **values)
