"""
Shared pytest fixtures for the diary vault tests.

The KDF is deliberately slow (100,000 PBKDF2 iterations), so derived keys
are computed once per test session and shared.
"""
import pytest

from navigator_diary.vault.kdf import derive_key

from .helpers import PASSWORD, WRONG_PASSWORD, TEST_SALT


@pytest.fixture(scope="session")
def salt() -> bytes:
    return TEST_SALT


@pytest.fixture(scope="session")
def key() -> bytes:
    """Key derived from PASSWORD and TEST_SALT."""
    return derive_key(PASSWORD, TEST_SALT)


@pytest.fixture(scope="session")
def wrong_key() -> bytes:
    """Key derived from WRONG_PASSWORD and TEST_SALT."""
    return derive_key(WRONG_PASSWORD, TEST_SALT)


@pytest.fixture
def full_entry() -> dict:
    return {
        "content": "Today was good.",
        "title": "Day 1",
        "tags": ["gratitude", "family"],
        "mood": "happy",
    }
