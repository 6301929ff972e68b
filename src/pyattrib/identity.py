"""User identity hashing.

The only user identifier the library ever holds is a truncated one-way
digest of the normalised e-mail address.  The raw address is never stored.
"""

from __future__ import annotations

import hashlib

from pydantic import BaseModel, ConfigDict, Field

from pyattrib._constants import HASHED_EMAIL_LENGTH
from pyattrib.exceptions import HashingError


def normalize_email(email: str) -> str:
    """Trim surrounding whitespace and lower-case *email*."""
    return email.strip().lower()


def hash_email(email: str) -> str:
    """Hash an e-mail address into a fixed-length opaque identifier.

    The address is trimmed and lower-cased, hashed with SHA-256, and the
    hex digest is truncated to its first 16 characters.

    Parameters
    ----------
    email : str
        The e-mail address, in any case, possibly padded with whitespace.

    Returns
    -------
    str
        16-character lower-case hex string.

    Raises
    ------
    HashingError
        If *email* is not a string, is blank, or cannot be encoded.
    """
    if not isinstance(email, str):
        raise HashingError(f"email must be a string, got {type(email).__name__}")
    normalized = normalize_email(email)
    if not normalized:
        raise HashingError("email must be non-empty")
    try:
        digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()
    except (UnicodeError, ValueError) as exc:
        raise HashingError(f"email digest failed: {exc}") from exc
    return digest[:HASHED_EMAIL_LENGTH]


class Identity(BaseModel):
    """Identity context bound to a dispatcher.

    Immutable: updating the identity produces a new value, so whoever owns
    the dispatcher is the single writer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hashed_email: str | None = Field(
        default=None,
        min_length=HASHED_EMAIL_LENGTH,
        max_length=HASHED_EMAIL_LENGTH,
        description="Truncated SHA-256 of the normalised e-mail, if known.",
    )

    @classmethod
    def anonymous(cls) -> Identity:
        return cls()

    @classmethod
    def from_email(cls, email: str) -> Identity:
        """Build an identity from a raw e-mail address.

        Raises :class:`HashingError` when the address cannot be hashed.
        """
        return cls(hashed_email=hash_email(email))

    def cleared(self) -> Identity:
        return Identity.anonymous()

    @property
    def is_anonymous(self) -> bool:
        return self.hashed_email is None
