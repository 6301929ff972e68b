from __future__ import annotations

import hashlib

import pytest

from pyattrib.exceptions import HashingError
from pyattrib.identity import Identity, hash_email


def test_hash_is_16_char_hex_prefix_of_sha256() -> None:
    expected = hashlib.sha256(b"user@example.com").hexdigest()[:16]
    assert hash_email("user@example.com") == expected
    assert len(hash_email("someone@else.org")) == 16


@pytest.mark.parametrize(
    "variant",
    ["User@Example.COM", "  user@example.com", "user@example.com\n", "\tUSER@EXAMPLE.COM  "],
)
def test_case_and_whitespace_do_not_change_hash(variant: str) -> None:
    assert hash_email(variant) == hash_email("user@example.com")


def test_different_emails_hash_differently() -> None:
    assert hash_email("a@b.com") != hash_email("a@c.com")


def test_from_email_normalisation_is_idempotent() -> None:
    first = Identity.from_email("A@B.com")
    second = Identity.from_email("a@b.com ")
    assert first.hashed_email == second.hashed_email
    assert first == second


def test_cleared_identity_is_anonymous() -> None:
    identity = Identity.from_email("a@b.com")
    assert not identity.is_anonymous
    cleared = identity.cleared()
    assert cleared.is_anonymous
    assert cleared.hashed_email is None
    # Original value is untouched.
    assert identity.hashed_email is not None


@pytest.mark.parametrize("bad", ["", "   ", None, 42])
def test_unhashable_input_raises_hashing_error(bad: object) -> None:
    with pytest.raises(HashingError):
        hash_email(bad)  # type: ignore[arg-type]


def test_unencodable_email_raises_hashing_error() -> None:
    with pytest.raises(HashingError):
        Identity.from_email("user\udcff@example.com")
